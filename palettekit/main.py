"""
palettekit FastAPI application.
"""
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from palettekit import __version__
from palettekit.api.v1 import router as v1_router
from palettekit.config import config
from palettekit.schemas import HealthResponse
from palettekit.services.colors.conversions import InvalidColorFormat
from palettekit.utils.logging import get_logger
from palettekit.utils.metrics import get_metrics

# Load environment variables
load_dotenv()

log = get_logger()

app = FastAPI(
    title="palettekit",
    description="Color palette generation, extraction and analysis",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.exception_handler(InvalidColorFormat)
async def invalid_color_handler(request: Request, exc: InvalidColorFormat):
    log.warning("Rejected malformed color", extra={"path": request.url.path, "value": str(exc.value)})
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.get("/palettekit/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(ok=True, version=__version__, service="palettekit")


@app.get("/palettekit/metrics")
async def metrics_summary():
    """In-process metrics summary."""
    return get_metrics().get_summary()
