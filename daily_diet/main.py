import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import get_settings
from .core.database import Base, engine
from .core.exceptions import DailyDietError, ValidationError
from .models import base as _models  # noqa: F401
from .routers import health, meals

settings = get_settings()
logger = logging.getLogger("uvicorn")

app = FastAPI(title=settings.app_name, version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(meals.router, prefix=settings.api_prefix)


@app.exception_handler(DailyDietError)
async def _handle_domain_error(request: Request, exc: DailyDietError) -> JSONResponse:
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: invalid payload", request.method, request.url.path)
    error = ValidationError("Required fields are missing or invalid", details={"errors": jsonable_encoder(exc.errors())})
    return JSONResponse(status_code=error.http_status, content=error.to_dict())


@app.on_event("startup")
def _prepare_database() -> None:
    if settings.create_tables:
        Base.metadata.create_all(bind=engine)
