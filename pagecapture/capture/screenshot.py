"""Viewport screenshot taker."""

from __future__ import annotations

import logging
from typing import Optional

from pagecapture.capture.rotation import normalize_rotation
from pagecapture.models.capture import CapturedRaster
from pagecapture.models.geometry import CoordinatesType, Location
from pagecapture.session import CaptureSession
from pagecapture.utils.image_utils import image_from_bytes

logger = logging.getLogger(__name__)


class ScreenshotTaker:
    """Captures the visible viewport as an orientation-normalized raster."""

    def __init__(self, session: CaptureSession, rotation: Optional[int] = None):
        self.session = session
        self.rotation = rotation

    def capture(self, scroll_position: Location | None = None) -> CapturedRaster:
        """Capture the viewport, tagged with the session's current frame chain.

        ``scroll_position`` is the active context's scroll offset when the
        caller already knows it; otherwise it is read from the driver.
        """
        data = self.session.driver.capture_screenshot()
        image = image_from_bytes(data)
        device = self.session.device
        image = normalize_rotation(
            image,
            self.rotation,
            is_mobile=device.is_mobile,
            is_landscape=self.session.is_landscape_orientation(),
            is_android=device.is_android,
        )
        if scroll_position is None:
            scroll_position = self.session.metrics.current_scroll_position()

        logger.debug("Captured viewport %dx%d at scroll %s", image.width, image.height, scroll_position)
        return CapturedRaster(
            image=image,
            coordinates_type=CoordinatesType.SCREENSHOT_AS_IS,
            frame_chain=self.session.frame_chain,
            scroll_position=scroll_position,
        )
