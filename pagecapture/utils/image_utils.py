"""Pillow helpers for decoding, cropping, rotating and composing captures."""

from __future__ import annotations

import io

from PIL import Image

from pagecapture.models.geometry import Location, Region, Size


def image_from_bytes(data: bytes) -> Image.Image:
    with Image.open(io.BytesIO(data)) as img:
        img.load()
        return img.copy()


def image_to_bytes(image: Image.Image, fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    image.save(buf, format=fmt)
    return buf.getvalue()


def get_image_part(image: Image.Image, region: Region) -> Image.Image:
    """Crop ``region`` out of ``image``, clipped to the image bounds."""
    bounds = Region(left=0, top=0, width=image.width, height=image.height)
    part = region.intersect(bounds)
    if part.is_empty():
        raise ValueError(f"Region {region} is outside of the image ({image.width}x{image.height})")
    return image.crop((part.left, part.top, part.right, part.bottom))


def rotate_image(image: Image.Image, degrees: int) -> Image.Image:
    """Rotate by ``degrees``; positive is clockwise."""
    if degrees % 360 == 0:
        return image
    # Pillow rotates counter-clockwise for positive angles.
    return image.rotate(-degrees, expand=True)


def new_canvas(size: Size, like: Image.Image) -> Image.Image:
    return Image.new(like.mode, (size.width, size.height))


def paste_part(canvas: Image.Image, part: Image.Image, location: Location) -> None:
    """Write ``part`` into ``canvas`` at ``location``; overflow is clipped."""
    canvas.paste(part, (location.x, location.y))
