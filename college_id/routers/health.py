from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from college_id.config.settings import settings
from college_id.db.student_store import StudentStore
from college_id.schemas.response_schemas import HealthResponse
from college_id.services.student_service import get_student_store
from college_id.utils.responses import ResponseBuilder

health_router = APIRouter()
root_router = APIRouter()


@root_router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def liveness():
    return f"{settings.NAME} is running"


@health_router.get("", response_model=HealthResponse)
async def health_check(store: StudentStore = Depends(get_student_store)):
    """
    Health check endpoint

    Reports whether the document store answers a ping. Always 200 so that a
    database outage is visible without the check itself failing.
    """
    reachable = await run_in_threadpool(store.ping)
    health = HealthResponse(
        status="healthy" if reachable else "degraded",
        service=settings.NAME,
        version=settings.VERSION,
        database="connected" if reachable else "unavailable",
    )
    return ResponseBuilder.success(
        data=health.model_dump(mode="json", by_alias=True, exclude={"success"})
    )
