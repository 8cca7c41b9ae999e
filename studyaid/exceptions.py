from typing import Optional


class StudyAidException(Exception):
    """Base exception for study-aid failures surfaced to the user."""

    status_code: int = 500
    default_message: str = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None, user_message: Optional[str] = None):
        self.user_message = user_message or self.default_message
        super().__init__(message or self.user_message)


class InputValidationError(StudyAidException):
    """Empty or otherwise unusable input, rejected before any network call."""

    status_code = 400
    default_message = "Please provide some content to study."


class GatewayException(StudyAidException):
    """Base exception for AI gateway failures."""

    status_code = 502
    default_message = "AI service error. Please try again later."


class RateLimited(GatewayException):
    status_code = 429
    default_message = "Rate limit exceeded. Please try again in a moment."


class QuotaExhausted(GatewayException):
    status_code = 402
    default_message = "AI credits depleted. Please add credits to continue."


class UpstreamError(GatewayException):
    pass


class GenerationFormatError(GatewayException):
    default_message = "AI generated invalid JSON format. Please try again."


class PersistenceError(StudyAidException):
    """A storage write failed during the material fan-out or a deletion."""

    status_code = 500
    default_message = "Failed to save study materials."

    def __init__(self, message: Optional[str] = None, step: Optional[str] = None, **kwargs):
        self.step = step
        super().__init__(message, **kwargs)


class NotFoundOrEmpty(StudyAidException):
    status_code = 404
    default_message = "No valid multiple choice questions found in this quiz."
