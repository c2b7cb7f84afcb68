from time import perf_counter

from fastapi import APIRouter, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from legalhub.infrastructure.db.session import SessionLocal
from legalhub.infrastructure.observability.metrics import metrics_response

router = APIRouter()


@router.get("/health", status_code=status.HTTP_200_OK)
def health_check(response: Response) -> dict:
    db_status = "up"
    db_latency_ms: float | None = None

    try:
        db_started_at = perf_counter()
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        db_latency_ms = round((perf_counter() - db_started_at) * 1000, 2)
    except SQLAlchemyError:
        db_status = "down"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "ok" if db_status == "up" else "degraded",
        "services": {
            "api": "up",
            "database": db_status,
            "db_latency_ms": db_latency_ms,
        },
    }


@router.get("/metrics", include_in_schema=False)
def metrics():
    return metrics_response()
