import logging
from typing import Dict, List, Optional

from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI, OpenAIError

from studyaid.config import Settings, get_settings
from studyaid.exceptions import QuotaExhausted, RateLimited, UpstreamError
from studyaid.schemas.generation import GenerationResult
from studyaid.services.gateway.prompts import ResponseParser, StudyPromptBuilder

logger = logging.getLogger(__name__)


class AIGatewayClient:
    """Client for the OpenAI-compatible AI gateway used for study bundle generation."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the async OpenAI client against the gateway endpoint."""
        settings = settings or get_settings()
        self.client = AsyncOpenAI(
            api_key=settings.ai_gateway_api_key or "unset",
            base_url=settings.ai_gateway_base_url,
            timeout=settings.ai_gateway_timeout,
            # failures are reported to the user, never retried here
            max_retries=0,
        )
        self.default_model = settings.ai_gateway_model
        self.temperature = settings.ai_gateway_temperature
        self.prompt_builder = StudyPromptBuilder()
        self.response_parser = ResponseParser()

    async def complete(self, messages: List[Dict[str, str]], model: Optional[str] = None) -> str:
        """Send one non-streaming chat completion and return the message text.

        Raises:
            RateLimited: gateway answered 429
            QuotaExhausted: gateway answered 402
            UpstreamError: any other failure or an empty completion
        """
        model = model or self.default_model
        logger.info(f"Sending request to AI gateway: model={model}")
        try:
            completion = await self.client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=self.temperature,
            )
        except APIStatusError as e:
            logger.error(f"AI gateway error: status={e.status_code} body={e.body}")
            if e.status_code == 429:
                raise RateLimited(f"AI gateway rate limited: {e}") from e
            if e.status_code == 402:
                raise QuotaExhausted(f"AI gateway quota exhausted: {e}") from e
            raise UpstreamError(f"AI API error: {e.status_code}") from e
        except (APIConnectionError, APITimeoutError) as e:
            logger.error(f"Cannot reach AI gateway: {e}")
            raise UpstreamError(f"Cannot connect to AI gateway: {e}") from e
        except OpenAIError as e:
            raise UpstreamError(f"AI gateway failure: {e}") from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise UpstreamError("No content generated")
        logger.debug(f"Raw AI response: {content[:400]}")
        return content

    async def generate_from_material(self, content: str) -> GenerationResult:
        """Study bundle for pasted or uploaded text."""
        raw = await self.complete(self.prompt_builder.material_messages(content))
        return self.response_parser.parse_generation(raw)

    async def generate_from_topic(self, topic: str) -> GenerationResult:
        """Study bundle, including a title, for a topic string."""
        raw = await self.complete(self.prompt_builder.topic_messages(topic))
        return self.response_parser.parse_generation(raw)
