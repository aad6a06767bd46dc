"""
palettekit v1 API Routes
Exposes harmony generation, image extraction, analytics and export.
"""
import random
import time

from fastapi import APIRouter, File, HTTPException, Query, UploadFile

from palettekit.config import config
from palettekit.schemas import (
    AnalyzeResponse, ColorInfo, ErrorResponse, ExportRequest, ExportResponse, ExtractResponse,
    GenerateRequest, GenerateResponse, PaletteRequest
)
from palettekit.services.colors.conversions import InvalidColorFormat, normalize_hex
from palettekit.services.colors.extraction import extract_palette
from palettekit.services.colors.harmony import generate, random_hex
from palettekit.services.colors.perception import analyze_palette, describe_color
from palettekit.services.colors.swatches import render_swatch_strip
from palettekit.services.export import export_palette
from palettekit.services.imaging import ImageLoadFailure, validate_file_upload
from palettekit.utils.ids import generate_request_id
from palettekit.utils.logging import get_logger
from palettekit.utils.metrics import get_metrics

router = APIRouter(prefix="/v1", tags=["Palettes"])
log = get_logger()


@router.post("/palettes/generate",
             response_model=GenerateResponse,
             responses={400: {"model": ErrorResponse}},
             summary="Generate a harmony palette")
async def generate_palette(body: GenerateRequest) -> GenerateResponse:
    """
    Generate ``count`` colors related to ``base_hex`` under ``mode``.

    The first color is always the base. Supplying ``seed`` makes the output
    reproducible.
    """
    request_id = generate_request_id("gen")
    metrics = get_metrics()
    start_time = time.time()

    rng = random.Random(body.seed) if body.seed is not None else random.Random()
    base_hex = body.base_hex or random_hex(rng)

    try:
        hexes = generate(base_hex, body.mode, body.count, rng=rng)
    except (InvalidColorFormat, ValueError) as e:
        metrics.increment_failure_count("generate_invalid")
        raise HTTPException(status_code=400, detail=str(e))

    swatch = render_swatch_strip(hexes, highlight_index=0) if body.include_swatch else None

    duration_ms = (time.time() - start_time) * 1000
    metrics.increment_generation_count(body.mode.value)
    metrics.record_timing("generate", duration_ms)
    metrics.record_palette_size(len(hexes))
    log.info("Palette generated", extra={
        "request_id": request_id, "mode": body.mode.value, "count": body.count,
        "ms_total": round(duration_ms, 2)
    })

    return GenerateResponse(
        mode=body.mode,
        base_hex=hexes[0],
        colors=[ColorInfo(**describe_color(h)) for h in hexes],
        swatch_png_b64=swatch,
    )


@router.post("/palettes/extract",
             response_model=ExtractResponse,
             responses={413: {"model": ErrorResponse}, 415: {"model": ErrorResponse},
                        422: {"model": ErrorResponse}},
             summary="Extract a palette from an image")
async def extract_image_palette(
    file: UploadFile = File(..., description="Image to analyze"),
    include_swatch: bool = Query(False, description="Include a PNG swatch strip")
) -> ExtractResponse:
    """
    Extract up to five dominant, mutually distinct colors from an image.

    An image without opaque pixels returns an empty ``colors`` list.
    """
    request_id = generate_request_id("ext")
    metrics = get_metrics()
    metrics.increment_extraction_count()

    validate_file_upload(file)

    try:
        result = await extract_palette(
            file,
            max_colors=config.EXTRACT_COLORS,
            edge=config.SAMPLE_EDGE,
            step=config.QUANTIZATION_STEP,
            alpha_threshold=config.ALPHA_THRESHOLD,
            min_distance=config.MIN_DISTANCE,
            max_passes=config.MAX_PASSES,
        )
    except ImageLoadFailure as e:
        metrics.increment_failure_count("image_load")
        log.warning("Image load failed", extra={"request_id": request_id, "error": str(e)})
        raise HTTPException(status_code=422, detail=str(e))

    swatch = None
    if include_swatch and result.colors:
        swatch = render_swatch_strip(result.colors)

    metrics.record_timing("extract", result.duration_ms)
    metrics.record_palette_size(len(result.colors))
    log.info("Palette extracted", extra={
        "request_id": request_id, "colors": len(result.colors),
        "buckets": result.bucket_count, "ms_extract": round(result.duration_ms, 2)
    })

    return ExtractResponse(
        colors=[ColorInfo(**describe_color(h)) for h in result.colors],
        sampled_pixels=result.sampled_pixels,
        opaque_pixels=result.opaque_pixels,
        bucket_count=result.bucket_count,
        swatch_png_b64=swatch,
        timings={"extract_ms": round(result.duration_ms, 2)},
    )


@router.post("/palettes/analyze", response_model=AnalyzeResponse, summary="Palette analytics")
async def analyze(body: PaletteRequest) -> AnalyzeResponse:
    return AnalyzeResponse(**analyze_palette(body.colors))


@router.post("/palettes/export", response_model=ExportResponse, summary="Export a palette")
async def export(body: ExportRequest) -> ExportResponse:
    content = export_palette(body.colors, body.format, body.palette_name)
    return ExportResponse(format=body.format, content=content)


@router.get("/colors/{hex_value}", response_model=ColorInfo,
            responses={400: {"model": ErrorResponse}}, summary="Describe one color")
async def describe(hex_value: str) -> ColorInfo:
    """Look up a color by its hex digits (3 or 6, without the leading ``#``)."""
    try:
        canonical = normalize_hex(f"#{hex_value.lstrip('#')}")
    except InvalidColorFormat as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ColorInfo(**describe_color(canonical))
