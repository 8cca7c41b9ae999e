import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError

from studyaid.dependencies import CurrentUserDep, NotesRepoDep
from studyaid.schemas.api.notes import NoteDTO

router = APIRouter(prefix="/notes", tags=["notes"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[NoteDTO])
def list_notes(
    owner_id: CurrentUserDep,
    repo: NotesRepoDep,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    return repo.list_for_owner(owner_id, limit=limit, offset=offset)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_note(note_id: UUID, owner_id: CurrentUserDep, repo: NotesRepoDep):
    try:
        deleted = repo.delete(note_id, owner_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to delete note {note_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete note")
    if not deleted:
        raise HTTPException(status_code=404, detail="Note not found")
    return None
