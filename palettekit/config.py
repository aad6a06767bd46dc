"""
palettekit Configuration
Manages environment variables and defaults for the palette engine and API.
"""
import os
from typing import List


class Config:
    """Configuration class for palettekit services."""

    # Upload limits
    MAX_FILE_MB: int = int(os.environ.get("PALETTEKIT_MAX_FILE_MB", "10"))

    # Logging
    LOG_LEVEL: str = os.environ.get("PALETTEKIT_LOG_LEVEL", "INFO")

    # Palette session
    DEFAULT_PALETTE_SIZE: int = int(os.environ.get("PALETTEKIT_DEFAULT_PALETTE_SIZE", "5"))
    MIN_PALETTE_SIZE: int = int(os.environ.get("PALETTEKIT_MIN_PALETTE_SIZE", "3"))
    MAX_PALETTE_SIZE: int = int(os.environ.get("PALETTEKIT_MAX_PALETTE_SIZE", "8"))
    HISTORY_LIMIT: int = int(os.environ.get("PALETTEKIT_HISTORY_LIMIT", "20"))
    HARMONY_OVERSAMPLE: int = int(os.environ.get("PALETTEKIT_HARMONY_OVERSAMPLE", "3"))

    # Image extraction
    SAMPLE_EDGE: int = int(os.environ.get("PALETTEKIT_SAMPLE_EDGE", "150"))
    QUANTIZATION_STEP: int = int(os.environ.get("PALETTEKIT_QUANTIZATION_STEP", "5"))
    ALPHA_THRESHOLD: int = int(os.environ.get("PALETTEKIT_ALPHA_THRESHOLD", "128"))
    MIN_DISTANCE: float = float(os.environ.get("PALETTEKIT_MIN_DISTANCE", "45"))
    MAX_PASSES: int = int(os.environ.get("PALETTEKIT_MAX_PASSES", "3"))
    EXTRACT_COLORS: int = int(os.environ.get("PALETTEKIT_EXTRACT_COLORS", "5"))

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get("PALETTEKIT_ALLOWED_ORIGINS", "")

    # Observability
    METRICS_ENABLED: bool = bool(int(os.environ.get("PALETTEKIT_METRICS_ENABLED", "1")))

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png", "image/webp", "image/gif"]
    SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif"}

    @classmethod
    def validate_palette_size(cls, size: int) -> bool:
        """Validate palette size parameter."""
        return cls.MIN_PALETTE_SIZE <= size <= cls.MAX_PALETTE_SIZE

    @classmethod
    def validate_count(cls, count: int) -> bool:
        """Validate harmony count parameter."""
        return 1 <= count <= cls.MAX_PALETTE_SIZE + cls.HARMONY_OVERSAMPLE

    @classmethod
    def allowed_origins(cls) -> List[str]:
        """Parse the comma separated CORS origin list."""
        origins = [o.strip() for o in cls.ALLOWED_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]


# Global config instance
config = Config()
