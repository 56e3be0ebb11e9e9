"""
Service entry point: FastAPI app exposing the registry and scoring engine.
Sets up the FastAPI server with CORS and the framework API routes.
"""

from __future__ import annotations

import contextlib
import datetime
import functools
from collections.abc import AsyncGenerator
from typing import Any

import dotenv
import fastapi
import pydantic
import uvicorn
from fastapi.middleware import cors
from starlette import responses

from maturity_engine import __version__, config, registry, scoring
from maturity_engine.models.framework import Framework
from maturity_engine.utils import errors, logger

dotenv.load_dotenv()

log = logger.create_logger("Server")

FALLBACK_HEADER = "X-Framework-Fallback"


class ScoreRequest(pydantic.BaseModel):
    """Body of a scoring request.

    Values are left untyped here so that a bad answer is reported by
    the engine with the question's valid values.
    """

    answers: dict[str, Any] = pydantic.Field(default_factory=dict)


@functools.lru_cache(maxsize=1)
def get_registry() -> registry.FrameworkRegistry:
    """Process-wide registry over the configured catalog."""
    return registry.create_registry(config.get_settings())


@contextlib.asynccontextmanager
async def lifespan(_app: fastapi.FastAPI) -> AsyncGenerator[None]:
    """Load the catalog and log server start on startup."""
    settings = config.get_settings()
    log.section("Maturity Engine Server Started")
    log.info("Environment", {"env": settings.environment})
    frameworks = get_registry().list_available()
    log.info("Frameworks available", {"count": len(frameworks)})
    yield


app = fastapi.FastAPI(title="Maturity Engine Server", version=__version__, lifespan=lifespan)

# ============================================================================
# Middleware
# ============================================================================

app.add_middleware(
    cors.CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _summary(framework: Framework, featured: set[str]) -> dict[str, Any]:
    return {
        "id": framework.id,
        "name": framework.name,
        "version": framework.version,
        "complexity": framework.complexity,
        "estimatedTime": framework.estimated_time,
        "questionCount": framework.question_count,
        "featured": framework.id in featured,
    }


# ============================================================================
# API Routes
# ============================================================================


@app.get("/api/health")
async def health(
    frameworks: registry.FrameworkRegistry = fastapi.Depends(get_registry),
) -> dict[str, Any]:
    """Report service status and whether the catalog is loaded."""
    settings = config.get_settings()
    available = frameworks.is_available
    return {
        "status": "healthy" if available else "degraded",
        "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
        "version": __version__,
        "environment": settings.environment,
        "checks": {"catalog": "ok" if available else "unavailable"},
        "frameworks": len(frameworks.list_available()),
    }


@app.get("/api/frameworks")
async def list_frameworks(
    frameworks: registry.FrameworkRegistry = fastapi.Depends(get_registry),
) -> list[dict[str, Any]]:
    """Summaries of every catalog framework in registration order."""
    featured = {framework.id for framework in frameworks.list_assessable()}
    return [_summary(framework, featured) for framework in frameworks.list_available()]


@app.get("/api/frameworks/{framework_id}")
async def get_framework(
    framework_id: str,
    frameworks: registry.FrameworkRegistry = fastapi.Depends(get_registry),
) -> responses.JSONResponse:
    """Resolve a framework; unknown ids return the fallback."""
    framework = frameworks.resolve(framework_id)
    headers = {FALLBACK_HEADER: "true"} if frameworks.is_fallback(framework) else {}
    return responses.JSONResponse(
        content=framework.model_dump(mode="json", by_alias=True),
        headers=headers,
    )


@app.post("/api/frameworks/{framework_id}/score")
async def score_framework(
    framework_id: str,
    request: ScoreRequest,
    frameworks: registry.FrameworkRegistry = fastapi.Depends(get_registry),
) -> responses.JSONResponse:
    """Score an answer set and attach the weakest categories."""
    framework = frameworks.resolve(framework_id)
    if frameworks.is_fallback(framework):
        return responses.JSONResponse(
            status_code=404,
            content={"error": "FrameworkNotFound", "message": f"Framework '{framework_id}' is not available"},
        )

    try:
        report = scoring.score(framework, request.answers)
    except errors.AnswerValidationError as exc:
        log.warn("Rejected answer set", {"framework": framework_id, "question": exc.question_id})
        return responses.JSONResponse(status_code=422, content=exc.to_dict())
    except errors.ScoreClassificationError as exc:
        log.error("Score could not be classified", {"framework": framework_id, "score": exc.score})
        return responses.JSONResponse(status_code=500, content=exc.to_dict())

    settings = config.get_settings()
    gaps = scoring.category_gaps(report, settings.gap_threshold, settings.gap_limit)
    log.info(
        "Scored assessment",
        {"framework": framework_id, "score": report.rounded_score, "answered": report.answered_count},
    )
    content = report.model_dump(mode="json", by_alias=True)
    content["gaps"] = [gap.model_dump(mode="json", by_alias=True) for gap in gaps]
    return responses.JSONResponse(content=content)


def main() -> None:
    """Run the service with uvicorn."""
    settings = config.get_settings()
    uvicorn.run("maturity_engine.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
