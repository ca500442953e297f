# app/main.py

"""AI-IV-Planner Backend - industrial visit trip planning with Gemini."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from app.configs import settings
from app.errors import (
    AiError,
    PersistenceError,
    PlanningError,
    ai_exception_handler,
    persistence_exception_handler,
    planning_exception_handler,
    validation_exception_handler,
)
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.routes import auth_router, trips_router
from app.schemas import HealthCheckResponse
from app.utils.helpers import today_str

app = FastAPI(
    title=settings.APP_NAME,
    description="Industrial visit trip planner API",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)


routes = [
    trips_router,
    auth_router,
]

_ = [app.include_router(router) for router in routes]

errors = [
    (AiError, ai_exception_handler),
    (PersistenceError, persistence_exception_handler),
    (PlanningError, planning_exception_handler),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "ok",
                        "version": "1.0.0",
                        "timestamp": "2025-01-01 12:00:00",
                        "persistence": "local",
                        "ai_enabled": True,
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check(request: Request) -> ORJSONResponse:
    """
    Health check endpoint.

    Reports the active persistence backend and whether AI generation is
    live or serving placeholder content.
    """
    ai_client = getattr(request.app.state, "ai_client", None)
    store = getattr(request.app.state, "trip_store", None)

    response = HealthCheckResponse(
        status="ok",
        version=app.version,
        timestamp=today_str(),
        persistence=store.name if store else "unavailable",
        ai_enabled=bool(ai_client and ai_client.enabled),
    )
    return ORJSONResponse(response.model_dump())


if __name__ == "__main__":
    from uvicorn import run

    run(
        "app.main:app",
        host="127.0.0.1",
        port=8000,
        log_level="info",
        reload=True,
    )
