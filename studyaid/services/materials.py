import logging
from typing import Optional
from uuid import UUID

from studyaid.services.fanout import FanoutResult, MaterialFanout
from studyaid.services.generation import ContentGenerationService

logger = logging.getLogger(__name__)

SUCCESS_MESSAGES = {
    "ai_generated": "Study materials created successfully!",
    "pasted": "Material processed successfully!",
    "uploaded": "Material processed successfully!",
}


class MaterialPipeline:
    """Generation followed by fan-out persistence for one user request."""

    def __init__(self, generator: ContentGenerationService, fanout: MaterialFanout):
        self.generator = generator
        self.fanout = fanout

    async def create_from_text(
        self, owner_id: UUID, content: str, title: Optional[str] = None, source_kind: str = "pasted"
    ) -> FanoutResult:
        resolved_title, result = await self.generator.from_content(content, title)
        return self.fanout.persist(
            result,
            owner_id=owner_id,
            source_kind=source_kind,
            title=resolved_title,
            content=content,
        )

    async def create_from_topic(self, owner_id: UUID, topic: str) -> FanoutResult:
        resolved_title, result = await self.generator.from_topic(topic)
        return self.fanout.persist(
            result,
            owner_id=owner_id,
            source_kind="ai_generated",
            title=resolved_title,
            content=topic.strip(),
        )

    @staticmethod
    def success_message(source_kind: str) -> str:
        return SUCCESS_MESSAGES.get(source_kind, SUCCESS_MESSAGES["pasted"])
