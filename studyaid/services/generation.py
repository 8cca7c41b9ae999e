import logging
from typing import Optional, Tuple

from studyaid.exceptions import InputValidationError
from studyaid.schemas.generation import GenerationResult
from studyaid.services.gateway.client import AIGatewayClient

logger = logging.getLogger(__name__)

TITLE_PREVIEW_CHARS = 100


def derive_title(content: str, title: Optional[str] = None) -> str:
    """Use the given title, else the first characters of the content."""
    if title and title.strip():
        return title.strip()
    preview = content.strip()
    if len(preview) > TITLE_PREVIEW_CHARS:
        return preview[:TITLE_PREVIEW_CHARS] + "..."
    return preview


class ContentGenerationService:
    """Validates user input and turns it into a study bundle via the AI gateway.

    Has no side effects beyond the outbound gateway call.
    """

    def __init__(self, client: AIGatewayClient):
        self.client = client

    async def from_content(self, content: str, title: Optional[str] = None) -> Tuple[str, GenerationResult]:
        """Paste/upload path.

        :returns: (resolved title, validated bundle)
        """
        if not content or not content.strip():
            raise InputValidationError(
                "Empty material content",
                user_message="Please enter some text to analyze.",
            )
        resolved_title = derive_title(content, title)
        logger.info(f"Processing material: {resolved_title}")
        result = await self.client.generate_from_material(content.strip())
        return resolved_title, result

    async def from_topic(self, topic: str) -> Tuple[str, GenerationResult]:
        """Topic path; the model-chosen title wins over the raw topic.

        :returns: (resolved title, validated bundle)
        """
        if not topic or not topic.strip():
            raise InputValidationError("Empty topic", user_message="Please enter a topic.")
        topic = topic.strip()
        logger.info(f"Generating content for topic: {topic}")
        result = await self.client.generate_from_topic(topic)
        resolved_title = (result.title or "").strip() or topic
        return resolved_title, result
