import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, File, Form, HTTPException, Query, UploadFile, status

from studyaid.dependencies import CurrentUserDep, MaterialPipelineDep, MaterialsRepoDep
from studyaid.exceptions import InputValidationError, StudyAidException
from studyaid.schemas.api.materials import (
    GenerationResponse,
    MaterialDTO,
    PasteMaterialRequest,
    TopicMaterialRequest,
)
from studyaid.services.fanout import FanoutResult
from studyaid.services.materials import MaterialPipeline

router = APIRouter(prefix="/materials", tags=["materials"])
logger = logging.getLogger(__name__)


def _to_response(outcome: FanoutResult, source_kind: str) -> GenerationResponse:
    return GenerationResponse(
        material_id=outcome.material_id,
        title=outcome.title,
        note_id=outcome.note_id,
        flashcard_count=outcome.flashcard_count,
        quiz_id=outcome.quiz_id,
        question_count=outcome.question_count,
        message=MaterialPipeline.success_message(source_kind),
    )


def _http_error(e: StudyAidException) -> HTTPException:
    logger.error(f"Material generation failed: {e}")
    return HTTPException(status_code=e.status_code, detail=e.user_message)


@router.post("/topic", response_model=GenerationResponse, status_code=status.HTTP_201_CREATED)
async def create_from_topic(
    payload: TopicMaterialRequest,
    owner_id: CurrentUserDep,
    pipeline: MaterialPipelineDep,
):
    """Generate notes, flashcards and a quiz for a topic."""
    try:
        outcome = await pipeline.create_from_topic(owner_id, payload.topic)
    except StudyAidException as e:
        raise _http_error(e)
    return _to_response(outcome, "ai_generated")


@router.post("/paste", response_model=GenerationResponse, status_code=status.HTTP_201_CREATED)
async def create_from_paste(
    payload: PasteMaterialRequest,
    owner_id: CurrentUserDep,
    pipeline: MaterialPipelineDep,
):
    """Analyse pasted text into study material."""
    try:
        outcome = await pipeline.create_from_text(
            owner_id, payload.content, payload.title, source_kind="pasted"
        )
    except StudyAidException as e:
        raise _http_error(e)
    return _to_response(outcome, "pasted")


@router.post("/upload", response_model=GenerationResponse, status_code=status.HTTP_201_CREATED)
async def create_from_upload(
    owner_id: CurrentUserDep,
    pipeline: MaterialPipelineDep,
    file: UploadFile = File(..., description="Plain-text study material"),
    title: Optional[str] = Form(None),
):
    """Analyse an uploaded text file into study material."""
    try:
        raw = await file.read()
        try:
            content = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise InputValidationError(
                f"Upload {file.filename} is not UTF-8",
                user_message="Uploaded file must be UTF-8 text.",
            ) from e
        default_title = Path(file.filename).stem if file.filename else None
        outcome = await pipeline.create_from_text(
            owner_id, content, title or default_title, source_kind="uploaded"
        )
    except StudyAidException as e:
        raise _http_error(e)
    return _to_response(outcome, "uploaded")


@router.get("/", response_model=List[MaterialDTO])
def list_materials(
    owner_id: CurrentUserDep,
    repo: MaterialsRepoDep,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    return repo.list_for_owner(owner_id, limit=limit, offset=offset)
