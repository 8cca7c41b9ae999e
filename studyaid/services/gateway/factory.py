from functools import lru_cache

from studyaid.services.gateway.client import AIGatewayClient


@lru_cache(maxsize=1)
def make_gateway_client() -> AIGatewayClient:
    """
    Create and return a singleton AI gateway client instance.

    Returns:
        AIGatewayClient: Configured gateway client
    """
    return AIGatewayClient()
