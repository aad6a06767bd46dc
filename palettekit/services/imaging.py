"""
palettekit Imaging Utilities
Handles image I/O, upload validation and decoding for palette extraction.

Loading is the only asynchronous step of extraction. Anything that prevents
a raster from being decoded raises ``ImageLoadFailure``; an image that
decodes but has no opaque pixels is not an error here.
"""
import asyncio
import base64
import binascii
import io
from pathlib import Path
from typing import Union

from fastapi import HTTPException, UploadFile
from loguru import logger
from PIL import Image
from starlette.datastructures import UploadFile as StarletteUploadFile

from palettekit.config import config


class ImageLoadFailure(ValueError):
    """Raised when an image resource cannot be read or decoded."""


ImageSource = Union[bytes, bytearray, str, Path, UploadFile, Image.Image]


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate an uploaded file's declared size, MIME type and extension.

    Raises:
        HTTPException: 413 for oversize files, 415 for unsupported formats
    """
    size = getattr(file, "size", None)
    if size and size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    if file.content_type and file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )

    if file.filename and '.' in file.filename:
        ext = file.filename.lower().rsplit('.', 1)[-1]
        if f".{ext}" not in config.SUPPORTED_EXTENSIONS:
            raise HTTPException(
                status_code=415,
                detail=f"Unsupported file extension. Supported: {', '.join(sorted(config.SUPPORTED_EXTENSIONS))}"
            )


def detect_image_format(file_bytes: bytes) -> str:
    """
    Identify a supported image format from its magic bytes.

    Returns:
        Detected MIME type

    Raises:
        ImageLoadFailure: for empty, truncated or unrecognized data
    """
    if len(file_bytes) < 12:
        raise ImageLoadFailure("File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    if file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    if file_bytes[:6] in (b'GIF87a', b'GIF89a'):
        return "image/gif"
    if file_bytes[:4] == b'RIFF' and file_bytes[8:12] == b'WEBP':
        return "image/webp"

    raise ImageLoadFailure("Invalid image file. Magic bytes don't match supported formats.")


def decode_image_bytes(file_bytes: bytes) -> Image.Image:
    """
    Decode raw bytes into an RGBA Pillow image.

    Raises:
        ImageLoadFailure: if the bytes are not a decodable raster
    """
    mime = detect_image_format(file_bytes)

    try:
        image = Image.open(io.BytesIO(file_bytes))
        image.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise ImageLoadFailure(f"Failed to decode {mime} image: {e}") from e

    if image.width == 0 or image.height == 0:
        raise ImageLoadFailure("Image has zero width or height")

    logger.debug(f"Decoded {mime} image {image.width}x{image.height} mode={image.mode}")
    return image.convert("RGBA")


def decode_base64_image(b64_data: str) -> Image.Image:
    """Decode base64 (optionally a data URL) into an RGBA Pillow image."""
    if ',' in b64_data:
        b64_data = b64_data.split(',', 1)[1]

    try:
        file_bytes = base64.b64decode(b64_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageLoadFailure(f"Invalid base64 image data: {e}") from e

    return decode_image_bytes(file_bytes)


async def read_upload(file: UploadFile) -> bytes:
    """Read an uploaded file, enforcing the size limit on the actual payload."""
    try:
        file_bytes = await file.read()
    except OSError as e:
        raise ImageLoadFailure(f"Failed to read file: {e}") from e

    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )
    return file_bytes


async def load_image(source: ImageSource) -> Image.Image:
    """
    Load an image from bytes, a filesystem path, a base64 data URL, an
    upload or a Pillow image.

    Returns:
        RGBA Pillow image

    Raises:
        ImageLoadFailure: if the resource cannot be read or decoded
    """
    if isinstance(source, Image.Image):
        return source.convert("RGBA")

    if isinstance(source, StarletteUploadFile):
        file_bytes = await read_upload(source)
    elif isinstance(source, str) and source.startswith("data:"):
        return await asyncio.to_thread(decode_base64_image, source)
    elif isinstance(source, (str, Path)):
        path = Path(source)
        try:
            file_bytes = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise ImageLoadFailure(f"Failed to read {path}: {e}") from e
    elif isinstance(source, (bytes, bytearray)):
        file_bytes = bytes(source)
    else:
        raise ImageLoadFailure(f"Unsupported image source: {type(source).__name__}")

    return await asyncio.to_thread(decode_image_bytes, file_bytes)
