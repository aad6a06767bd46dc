"""
palettekit API Schemas
Pydantic models for palette generation, extraction and analysis.
"""
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from palettekit.config import config
from palettekit.services.colors.conversions import normalize_hex
from palettekit.services.colors.harmony import HarmonyMode

HEX_PATTERN = r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$"


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("palettekit", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")


class HSLModel(BaseModel):
    """HSL triple: hue in degrees, saturation/lightness in percent."""
    h: float = Field(..., ge=0.0, lt=360.0)
    s: float = Field(..., ge=0.0, le=100.0)
    l: float = Field(..., ge=0.0, le=100.0)  # noqa: E741


class ColorInfo(BaseModel):
    """A single color with its derived properties."""
    hex: str = Field(..., pattern=r"^#[0-9A-F]{6}$", description="Canonical hex code #RRGGBB")
    name: str = Field(..., description="Category name from the namer")
    rgb: List[int] = Field(..., min_length=3, max_length=3)
    hsl: HSLModel
    luminance: float = Field(..., ge=0.0, le=100.0, description="HSL lightness brightness proxy")
    contrast: Literal["black", "white"] = Field(..., description="Readable text color over this color")


# ============================================================================
# GENERATION
# ============================================================================

class GenerateRequest(BaseModel):
    """Harmony generation request."""
    base_hex: Optional[str] = Field(
        None,
        pattern=HEX_PATTERN,
        description="Base color; a random base is drawn when omitted"
    )
    mode: HarmonyMode = Field(HarmonyMode.RANDOM, description="Harmony relationship")
    count: int = Field(5, description="Number of colors to return")
    seed: Optional[int] = Field(None, description="Seed for reproducible output")
    include_swatch: bool = Field(False, description="Include a PNG swatch strip")

    @field_validator("count")
    @classmethod
    def validate_count(cls, v):
        if not config.validate_count(v):
            raise ValueError(f"count must be between 1 and {config.MAX_PALETTE_SIZE + config.HARMONY_OVERSAMPLE}")
        return v


class GenerateResponse(BaseModel):
    """Harmony generation response."""
    mode: HarmonyMode
    base_hex: str
    colors: List[ColorInfo]
    swatch_png_b64: Optional[str] = None


# ============================================================================
# EXTRACTION
# ============================================================================

class ExtractResponse(BaseModel):
    """Image palette extraction response."""
    colors: List[ColorInfo] = Field(..., max_length=5)
    sampled_pixels: int = Field(..., ge=0)
    opaque_pixels: int = Field(..., ge=0)
    bucket_count: int = Field(..., ge=0)
    swatch_png_b64: Optional[str] = None
    timings: Dict[str, float] = Field(default_factory=dict)


# ============================================================================
# ANALYSIS & EXPORT
# ============================================================================

class PaletteRequest(BaseModel):
    """A palette given as hex strings."""
    colors: List[str] = Field(..., min_length=1, max_length=32)

    @field_validator("colors")
    @classmethod
    def validate_colors(cls, v):
        return [normalize_hex(c) for c in v]


class AnalyzedColor(BaseModel):
    hex: str
    luminance: int
    contrast: Literal["black", "white"]
    name: str


class AnalyzeResponse(BaseModel):
    """Palette analytics."""
    colors: List[AnalyzedColor]
    count: int
    mean_luminance: Optional[float]
    min_luminance: Optional[float]
    max_luminance: Optional[float]
    min_pairwise_distance: Optional[float]


class ExportRequest(PaletteRequest):
    """Export request."""
    format: Literal["css", "json"] = "css"
    palette_name: Optional[str] = Field(None, max_length=120)


class ExportResponse(BaseModel):
    format: str
    content: str


# ============================================================================
# AI PALETTE PAYLOAD
# ============================================================================

class GeneratedColor(BaseModel):
    """One color as supplied by the prompt-driven palette collaborator."""
    hex: str = Field(..., description="6-character hex code, e.g. #FF5733")
    name: str = Field("", description="Creative name for the color")
    description: str = Field("", description="Why this color fits the theme")


class GeneratedPalette(BaseModel):
    """Palette payload from the prompt-driven palette collaborator."""
    palette_name: str = Field("", description="Creative name for the palette")
    colors: List[GeneratedColor] = Field(..., min_length=1)
