import tomllib
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from homerepair.ai.chat.router import router as chat_router
from homerepair.ai.vision.dependencies import close_vision_client
from homerepair.ai.vision.router import router as vision_router
from homerepair.config import get_app_settings
from homerepair.exceptions import register_exception_handlers
from homerepair.jobs.router import router as jobs_router
from homerepair.matching.dependencies import close_search_client
from homerepair.matching.router import router as matching_router
from homerepair.profiles.router import router as profiles_router
from homerepair.utils.logger import logger


def get_version():
    """Get version from pyproject.toml"""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)
    return data["project"]["version"]


settings = get_app_settings()


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    await close_search_client()
    await close_vision_client()
    logger.info("HomeRepair API shut down")


app = FastAPI(
    title="HomeRepair API",
    description="API for the HomeRepair AI assistant and trades marketplace",
    version=get_version(),
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.cors_allowed_origin],
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

register_exception_handlers(app)

app.include_router(chat_router, prefix=settings.api_prefix)
app.include_router(jobs_router, prefix=settings.api_prefix)
app.include_router(matching_router, prefix=settings.api_prefix)
app.include_router(profiles_router, prefix=settings.api_prefix)
app.include_router(vision_router, prefix=settings.api_prefix)

logger.info(
    "HomeRepair API configured",
    environment=settings.environment.value,
    api_prefix=settings.api_prefix,
    cors_allowed_origin=settings.cors_allowed_origin,
)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"status": "ok", "message": "HomeRepair API is running"}


@app.get("/healthcheck")
async def healthcheck():
    """Health check endpoint."""
    return {"status": "ok", "message": "HomeRepair API is running"}
