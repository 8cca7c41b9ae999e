import json
import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from studyaid.exceptions import GenerationFormatError
from studyaid.schemas.generation import GenerationResult

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\s*```$")

_BUNDLE_SHAPE = """{
%(title_line)s  "summary": "Detailed study notes with headings, explanations and context...",
  "flashcards": [
    {
      "question": "Clear, specific question",
      "answer": "Complete answer with explanation (2-4 sentences)",
      "difficulty": "easy|medium|hard"
    }
  ],
  "key_points": ["Detailed point 1...", "Detailed point 2..."],
  "examples": ["Example 1 with context...", "Example 2..."],
  "quiz_questions": [
    {
      "question": "Question testing deep understanding",
      "type": "multiple_choice|true_false|short_answer",
      "options": ["A", "B", "C", "D"],
      "correct_answer": "Exactly one of the options",
      "explanation": "Why this answer is correct"
    }
  ]
}"""

_TITLE_LINE = '  "title": "Topic Title",\n'

_REQUIREMENTS = """REQUIREMENTS:

1. NOTES (%(notes_words)s words): thorough explanations of every concept, with
   definitions, context, examples and connections between ideas, organized
   under clear headings.

2. FLASHCARDS (12-15 cards): clear questions with complete 2-4 sentence
   answers. Vary difficulty: 5 easy, 5 medium, 5 hard.

3. KEY POINTS (8-10): detailed, exam-worthy statements including formulas,
   dates and names where relevant.

4. EXAMPLES (4-6): real-world applications or worked examples.

5. QUIZ QUESTIONS (8-10): mix of 4 multiple choice, 3 true/false and
   3 short answer. For multiple choice and true/false questions the
   correct_answer MUST be copied exactly from options. Give a thorough
   explanation for each answer."""


class StudyPromptBuilder:
    """Builds the fixed instructional prompts for study bundle generation."""

    material_system_prompt = (
        "You are an expert educational content analyzer. Generate comprehensive "
        "study materials from provided content. Return ONLY valid JSON without "
        "any markdown formatting or code blocks."
    )
    topic_system_prompt = (
        "You are an expert educational content creator. Generate comprehensive, "
        "well-structured study materials that help students learn effectively. "
        "Return ONLY valid JSON without any markdown formatting or code blocks."
    )

    def material_messages(self, content: str) -> List[Dict[str, str]]:
        """Messages for the paste/upload path."""
        prompt = (
            "Analyze this material and create comprehensive, exam-ready study resources.\n\n"
            f"Material Content:\n{content}\n\n"
            f"{_REQUIREMENTS % {'notes_words': '600-1000'}}\n\n"
            "Return ONLY valid JSON (no markdown):\n"
            f"{_BUNDLE_SHAPE % {'title_line': ''}}"
        )
        return [
            {"role": "system", "content": self.material_system_prompt},
            {"role": "user", "content": prompt},
        ]

    def topic_messages(self, topic: str) -> List[Dict[str, str]]:
        """Messages for the topic path; the only one that asks for a title."""
        prompt = (
            f'Generate comprehensive, exam-ready study materials for: "{topic}"\n\n'
            f"{_REQUIREMENTS % {'notes_words': '800-1200'}}\n\n"
            "Return ONLY valid JSON (no markdown):\n"
            f"{_BUNDLE_SHAPE % {'title_line': _TITLE_LINE}}"
        )
        return [
            {"role": "system", "content": self.topic_system_prompt},
            {"role": "user", "content": prompt},
        ]


class ResponseParser:
    """Parser for gateway completions."""

    @staticmethod
    def strip_code_fence(response: str) -> str:
        """Remove one leading ```json / ``` fence and one trailing ``` fence."""
        cleaned = response.strip()
        if cleaned.startswith("```"):
            cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
            cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
        return cleaned

    @classmethod
    def parse_generation(cls, response: Optional[str]) -> GenerationResult:
        """Parse and validate a study bundle.

        Args:
            response: Raw completion text

        Returns:
            Validated GenerationResult

        Raises:
            GenerationFormatError: body is not JSON or does not match the bundle shape
        """
        cleaned = cls.strip_code_fence(response or "")
        try:
            data: Any = json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse AI response: {cleaned[:300]}")
            raise GenerationFormatError(f"AI response is not valid JSON: {e.msg}") from e

        if not isinstance(data, dict):
            raise GenerationFormatError(
                f"AI response is a JSON {type(data).__name__}, expected an object"
            )

        try:
            return GenerationResult.model_validate(data)
        except ValidationError as e:
            logger.error(f"AI response failed schema validation: {e.errors()}")
            raise GenerationFormatError(f"AI response failed validation: {e}") from e
