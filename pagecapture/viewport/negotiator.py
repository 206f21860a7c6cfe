"""Viewport-size negotiation — resize the window until the viewport fits."""

from __future__ import annotations

import logging
import time

from pagecapture.errors import ViewportSizeUnattainableError, WindowResizeError
from pagecapture.models.config import ResizeConfig
from pagecapture.models.geometry import Size
from pagecapture.session import CaptureSession

logger = logging.getLogger(__name__)


class ViewportSizeNegotiator:
    """Converges the browser viewport to a requested size.

    The outer window size and the viewport differ by browser chrome,
    borders and scroll bars, which vary by driver and OS. The negotiator
    measures that overhead and compensates for it with bounded retries.
    """

    def __init__(self, session: CaptureSession, config: ResizeConfig | None = None):
        self.session = session
        self.config = config or ResizeConfig()

    def set_viewport_size(self, size: Size) -> None:
        logger.info("Setting viewport size to %s", size)
        original_chain = self.session.frame_chain
        self.session.switch_to_default_content()
        try:
            self._negotiate(size)
        finally:
            # Leaves the session usable after a failure.
            self.session.switch_to_frames(original_chain)

    def _negotiate(self, size: Size) -> None:
        driver = self.session.driver

        window_size = self._resize_window(size)
        viewport_size = self.session.viewport_size()
        logger.debug("Initial viewport size: %s", viewport_size)

        driver.set_window_size(Size(
            width=2 * window_size.width - viewport_size.width,
            height=2 * window_size.height - viewport_size.height,
        ))
        viewport_size = self._wait_for_viewport(size)

        if viewport_size != size:
            # Border size of a maximized browser can differ from a normal
            # window, which throws the first estimate off.
            logger.debug("Viewport is %s, attempting one more time...", viewport_size)
            window_size = driver.get_window_size()
            required = Size(
                width=window_size.width + (size.width - viewport_size.width),
                height=window_size.height + (size.height - viewport_size.height),
            )
            logger.debug("Window size: %s, required window size: %s", window_size, required)
            driver.set_window_size(required)
            viewport_size = self._wait_for_viewport(size)

        if viewport_size != size:
            logger.error("Failed to set the viewport size to %s (got %s)", size, viewport_size)
            raise ViewportSizeUnattainableError(
                f"Failed to set the viewport size to {size} (got {viewport_size})"
            )
        logger.info("Viewport size set to %s", size)

    def _resize_window(self, size: Size) -> Size:
        driver = self.session.driver
        window_size = None
        for attempt in range(1, self.config.window_resize_retries + 1):
            driver.set_window_size(size)
            time.sleep(self.config.settle_seconds)
            window_size = driver.get_window_size()
            logger.debug("Window resize attempt %d/%d: window is %s",
                         attempt, self.config.window_resize_retries, window_size)
            if window_size == size:
                return window_size

        logger.error("Failed to set browser size to %s (got %s)", size, window_size)
        raise WindowResizeError(f"Failed to set browser size to {size} (got {window_size})")

    def _wait_for_viewport(self, size: Size) -> Size:
        viewport_size = None
        for _ in range(self.config.viewport_retries):
            time.sleep(self.config.settle_seconds)
            viewport_size = self.session.viewport_size()
            logger.debug("Viewport size: %s", viewport_size)
            if viewport_size == size:
                break
        return viewport_size
