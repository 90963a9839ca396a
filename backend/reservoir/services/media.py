from __future__ import annotations
import io
from PIL import Image

# Pillow format name -> (mime, extension)
KNOWN_FORMATS = {
    "JPEG": ("image/jpeg", "jpg"),
    "PNG": ("image/png", "png"),
    "GIF": ("image/gif", "gif"),
    "WEBP": ("image/webp", "webp"),
    "HEIF": ("image/heif", "heic"),
    "BMP": ("image/bmp", "bmp"),
    "TIFF": ("image/tiff", "tiff"),
}

IMAGE_EXTENSIONS = {"jpg", "jpeg", "jpe", "png", "gif", "webp", "heic", "heif", "bmp", "tif", "tiff"}

def sniff_image(data: bytes) -> tuple[str, str] | None:
    """
    Returns (mime, extension) when the bytes open as an image, else None.
    Only the header is parsed; pixels are never decoded.
    """
    if not data:
        return None
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format or ""
    except Exception:
        return None
    return KNOWN_FORMATS.get(fmt, (f"image/{fmt.lower()}", fmt.lower() or "bin"))

def photo_extension(filename: str | None, sniffed_ext: str) -> str:
    # Keep the uploader's extension only when it names an image type
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[1].strip().lower()
        if ext in IMAGE_EXTENSIONS:
            return ext
    return sniffed_ext
