"""Viewport, page and scroll metrics read from the driver."""

from __future__ import annotations

import logging
from typing import Any

from pagecapture.driver.base import BrowserDriver
from pagecapture.driver.scripts import (
    JS_GET_ENTIRE_PAGE_METRICS,
    JS_GET_ORIENTATION,
    JS_GET_SCROLL_POSITION,
    JS_GET_VIEWPORT_SIZE,
)
from pagecapture.errors import ScrollPositionUnavailableError
from pagecapture.models.device import DeviceFamily
from pagecapture.models.geometry import Location, Size

logger = logging.getLogger(__name__)


def _to_int(value: Any) -> int:
    # Browsers report fractional values on scaled displays.
    return int(round(float(value)))


class MetricsResolver:
    """Reads metrics of the driver's current browsing context."""

    def __init__(self, driver: BrowserDriver, device: DeviceFamily = DeviceFamily.DESKTOP):
        self.driver = driver
        self.device = device

    def is_landscape_orientation(self) -> bool:
        if not self.device.is_mobile:
            return False
        try:
            orientation = self.driver.execute_script(JS_GET_ORIENTATION)
        except Exception as e:
            logger.debug("Orientation query failed (%s), assuming portrait", e)
            return False
        return bool(orientation) and str(orientation).lower().startswith("landscape")

    def viewport_size(self) -> Size:
        """Viewport size of the current context.

        Falls back to the window size when the script cannot report it
        (some mobile drivers), swapped to landscape when needed.
        """
        try:
            width, height = self.driver.execute_script(JS_GET_VIEWPORT_SIZE)
            if width and height:
                size = Size(width=_to_int(width), height=_to_int(height))
                logger.debug("Viewport size: %s", size)
                return size
            logger.warning("Viewport size script returned no size (%s, %s)", width, height)
        except Exception as e:
            logger.warning("Failed to extract viewport size using JavaScript: %s", e)

        window = self.driver.get_window_size()
        logger.info("Using window size %s as viewport size", window)
        if self.is_landscape_orientation() and window.height > window.width:
            return Size(width=window.height, height=window.width)
        return window

    def entire_page_size(self) -> Size:
        """Full scrollable size of the current context's document.

        Width and height are resolved independently; either the document
        element or the body may under-report.
        """
        (scroll_width, body_scroll_width,
         client_height, body_client_height,
         scroll_height, body_scroll_height) = (
            _to_int(v or 0) for v in self.driver.execute_script(JS_GET_ENTIRE_PAGE_METRICS)
        )
        width = max(scroll_width, body_scroll_width)
        height = max(client_height, body_client_height, scroll_height, body_scroll_height)
        size = Size(width=width, height=height)
        logger.debug("Entire page size: %s", size)
        return size

    def current_scroll_position(self) -> Location:
        result = self.driver.execute_script(JS_GET_SCROLL_POSITION)
        if not result or any(v is None for v in result):
            raise ScrollPositionUnavailableError(
                f"Could not get the scroll position of the current context (got {result!r})"
            )
        x, y = result
        position = Location(x=_to_int(x), y=_to_int(y))
        logger.debug("Current scroll position: %s", position)
        return position
