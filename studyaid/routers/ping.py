from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/ping")
def ping(request: Request):
    """Liveness plus a database round trip."""
    database = getattr(request.app.state, "database", None)
    error = database.health_check() if database is not None else "database not initialized"
    return {
        "status": "ok" if error is None else "degraded",
        "version": request.app.version,
        "database": "ok" if error is None else error,
    }
