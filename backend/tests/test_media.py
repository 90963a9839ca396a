from __future__ import annotations
import io
from PIL import Image
from reservoir.services.media import photo_extension, sniff_image


def _image(fmt: str) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (2, 2), (0, 0, 255)).save(buf, format=fmt)
    return buf.getvalue()


def test_sniff_known_formats():
    assert sniff_image(_image("JPEG")) == ("image/jpeg", "jpg")
    assert sniff_image(_image("PNG")) == ("image/png", "png")


def test_sniff_rejects_non_images():
    assert sniff_image(b"") is None
    assert sniff_image(b"%PDF-1.4 not an image") is None


def test_photo_extension_prefers_file_name():
    assert photo_extension("Butt.JPEG", "jpg") == "jpeg"
    assert photo_extension("garden.photo.png", "jpg") == "png"


def test_photo_extension_fallback():
    assert photo_extension(None, "png") == "png"
    assert photo_extension("no_extension", "png") == "png"
    assert photo_extension("weird.", "png") == "png"
    assert photo_extension("bad.ex t", "png") == "png"


def test_photo_extension_ignores_non_image_names():
    assert photo_extension("x.exe", "png") == "png"
    assert photo_extension("archive.tar.gz", "jpg") == "jpg"
    assert photo_extension("scan.TIF", "png") == "tif"
