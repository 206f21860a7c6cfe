"""Image orientation correction for devices that report rotated captures."""

from __future__ import annotations

import logging
from typing import Optional

from PIL import Image

from pagecapture.utils.image_utils import rotate_image

logger = logging.getLogger(__name__)


def normalize_rotation(
    image: Image.Image,
    rotation: Optional[int],
    is_mobile: bool,
    is_landscape: bool,
    is_android: bool,
) -> Image.Image:
    """Rotate ``image`` as needed.

    Args:
        image: The captured image.
        rotation: Degrees to rotate by (positive is clockwise). 0 forces no
            rotation; None lets the device state decide.
        is_mobile: Whether the capture came from a mobile device.
        is_landscape: Whether the device is currently in landscape.
        is_android: Android captures are rotated right, iOS captures left.
    """
    if rotation is not None:
        if rotation != 0:
            logger.debug("Applying forced rotation of %d degrees", rotation)
            return rotate_image(image, rotation)
        return image

    if is_mobile and is_landscape and image.height > image.width:
        degrees = 90 if is_android else -90
        logger.debug("Portrait raster on a landscape device, rotating %d degrees", degrees)
        return rotate_image(image, degrees)

    return image
