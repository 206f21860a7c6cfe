"""Capture session — owns the driver and the canonical frame chain."""

from __future__ import annotations

import logging
from typing import Any, Optional

from pagecapture.capture.metrics import MetricsResolver
from pagecapture.driver.base import BrowserDriver
from pagecapture.driver.scripts import (
    JS_GET_COMPUTED_STYLE,
    JS_GET_USER_AGENT,
    JS_SET_OVERFLOW,
)
from pagecapture.models.capture import CapturedRaster
from pagecapture.models.device import DeviceFamily
from pagecapture.models.frame import Frame, FrameChain, FrameElement
from pagecapture.models.geometry import Size

logger = logging.getLogger(__name__)


class CaptureSession:
    """One automation session as seen by the capture core.

    The session's frame chain is only ever changed by its own
    context-switch methods; readers always get a snapshot.
    """

    def __init__(self, driver: BrowserDriver, device: DeviceFamily = DeviceFamily.DESKTOP):
        self.driver = driver
        self.device = device
        self.metrics = MetricsResolver(driver, device)
        self.last_capture: CapturedRaster | None = None
        self._frame_chain = FrameChain()
        self._dont_get_title = False

    @property
    def frame_chain(self) -> FrameChain:
        return self._frame_chain.snapshot()

    def navigate(self, url: str) -> None:
        logger.info("Navigating to %s", url)
        self._frame_chain.clear()
        self.driver.navigate(url)

    # ------------------------------------------------------------------
    # Context switching
    # ------------------------------------------------------------------

    def switch_to_frame(self, reference: Any) -> Frame:
        """Enter a frame of the current context and record it in the chain."""
        element = self.driver.find_frame(reference)
        left_border = self._border_width(element, "border-left-width")
        top_border = self._border_width(element, "border-top-width")
        parent_scroll = self.metrics.current_scroll_position()

        frame = Frame(
            frame_id=element.frame_id,
            location=element.location.offset(left_border, top_border),
            size=element.size,
            parent_scroll_position=parent_scroll,
            reference=element,
        )
        self.driver.switch_to_frame(element)
        self._frame_chain.push(frame)
        logger.debug("Entered frame %s at %s (parent scroll %s), chain depth %d",
                     frame.frame_id, frame.location, parent_scroll, len(self._frame_chain))
        return frame

    def switch_to_parent_frame(self) -> Frame:
        frame = self._frame_chain.pop()
        self.driver.switch_to_parent_frame()
        logger.debug("Left frame %s, chain depth %d", frame.frame_id, len(self._frame_chain))
        return frame

    def switch_to_default_content(self) -> None:
        self._frame_chain.clear()
        self.driver.switch_to_default_content()

    def switch_to_frames(self, chain: FrameChain) -> None:
        """Return to the top-level document and re-enter every frame of ``chain``."""
        self.switch_to_default_content()
        for frame in chain:
            self.switch_to_frame(frame.reference if frame.reference is not None else frame.frame_id)

    def _border_width(self, element: FrameElement, prop: str) -> int:
        try:
            value = self.driver.execute_script(JS_GET_COMPUTED_STYLE, element.handle, prop)
            return int(round(float(str(value).strip().replace("px", ""))))
        except Exception as e:
            logger.debug("Couldn't get frame %s: %s. Falling back to 0", prop, e)
            return 0

    # ------------------------------------------------------------------
    # Metrics and page state
    # ------------------------------------------------------------------

    def viewport_size(self) -> Size:
        return self.metrics.viewport_size()

    def default_content_viewport_size(self) -> Size:
        """Viewport size of the top-level document, whatever the active frame."""
        original = self.frame_chain
        self.switch_to_default_content()
        try:
            return self.metrics.viewport_size()
        finally:
            self.switch_to_frames(original)

    def is_landscape_orientation(self) -> bool:
        return self.metrics.is_landscape_orientation()

    def set_overflow(self, value: Optional[str]) -> Optional[str]:
        """Set the document element's overflow; returns the previous value."""
        original = self.driver.execute_script(JS_SET_OVERFLOW, value)
        logger.debug("Overflow set to %r (was %r)", value, original)
        return original

    def hide_scrollbars(self) -> Optional[str]:
        return self.set_overflow("hidden")

    def get_title(self) -> str:
        if self._dont_get_title:
            return ""
        try:
            return self.driver.get_title()
        except Exception as e:
            logger.warning("Failed to get page title: %s", e)
            self._dont_get_title = True
            return ""

    def get_user_agent(self) -> str | None:
        try:
            user_agent = self.driver.execute_script(JS_GET_USER_AGENT)
        except Exception as e:
            logger.warning("Failed to obtain user-agent string: %s", e)
            return None
        logger.debug("User agent: %s", user_agent)
        return user_agent

    def inferred_environment(self) -> str | None:
        user_agent = self.get_user_agent()
        return f"useragent:{user_agent}" if user_agent else None
