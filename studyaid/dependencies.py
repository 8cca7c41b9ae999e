from typing import Annotated, Generator
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from studyaid.config import Settings, get_settings
from studyaid.db.interfaces.postgresql import PostgreSQLDatabase
from studyaid.repositories.materials import MaterialsRepository
from studyaid.repositories.notes import NotesRepository
from studyaid.repositories.quizzes import QuizzesRepository
from studyaid.services.fanout import MaterialFanout
from studyaid.services.gateway.client import AIGatewayClient
from studyaid.services.gateway.factory import make_gateway_client
from studyaid.services.generation import ContentGenerationService
from studyaid.services.materials import MaterialPipeline


def get_database(request: Request) -> PostgreSQLDatabase:
    return request.app.state.database


def get_db_session(
    database: Annotated[PostgreSQLDatabase, Depends(get_database)],
) -> Generator[Session, None, None]:
    with database.get_session() as session:
        yield session


def get_gateway_client(request: Request) -> AIGatewayClient:
    client = getattr(request.app.state, "gateway_client", None)
    return client or make_gateway_client()


def get_current_user(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> UUID:
    """Owner id forwarded by the authentication layer."""
    raw = request.headers.get(settings.owner_header)
    if not raw:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        return UUID(raw)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid user id")


SessionDep = Annotated[Session, Depends(get_db_session)]
CurrentUserDep = Annotated[UUID, Depends(get_current_user)]
GatewayClientDep = Annotated[AIGatewayClient, Depends(get_gateway_client)]


def get_material_pipeline(session: SessionDep, client: GatewayClientDep) -> MaterialPipeline:
    return MaterialPipeline(
        generator=ContentGenerationService(client),
        fanout=MaterialFanout(MaterialsRepository(session)),
    )


def get_materials_repository(session: SessionDep) -> MaterialsRepository:
    return MaterialsRepository(session)


def get_notes_repository(session: SessionDep) -> NotesRepository:
    return NotesRepository(session)


def get_quizzes_repository(session: SessionDep) -> QuizzesRepository:
    return QuizzesRepository(session)


MaterialPipelineDep = Annotated[MaterialPipeline, Depends(get_material_pipeline)]
MaterialsRepoDep = Annotated[MaterialsRepository, Depends(get_materials_repository)]
NotesRepoDep = Annotated[NotesRepository, Depends(get_notes_repository)]
QuizzesRepoDep = Annotated[QuizzesRepository, Depends(get_quizzes_repository)]
