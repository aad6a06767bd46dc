"""
palettekit ID Utilities
Generate opaque identifiers for palette entries and requests.
"""
import uuid
from datetime import datetime


def generate_request_id(prefix: str = "req") -> str:
    """
    Generate a unique request ID for tracking.

    Returns:
        Unique request ID string like ``req-20250101120000-1a2b3c4d``
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"{prefix}-{timestamp}-{short_uuid}"


def generate_color_id(source: str = "col") -> str:
    """Opaque identifier for a ColorState; never derived from the color itself."""
    return f"{source}-{uuid.uuid4().hex[:12]}"


def extract_timestamp_from_request_id(request_id: str) -> str:
    """
    Extract timestamp from request ID.

    Args:
        request_id: Request ID string

    Returns:
        Timestamp string or empty if not found
    """
    parts = request_id.split("-")
    if len(parts) >= 3 and len(parts[1]) == 14 and parts[1].isdigit():
        return parts[1]
    return ""
