"""Page capturer — viewport and stitched captures for a session."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from pagecapture.capture.screenshot import ScreenshotTaker
from pagecapture.capture.stitcher import Stitcher
from pagecapture.coordinates.converter import convert_region, frame_chain_origin, frame_window
from pagecapture.errors import FrameNotVisibleError
from pagecapture.models.capture import CapturedRaster
from pagecapture.models.config import CaptureConfig
from pagecapture.models.geometry import EMPTY_REGION, CoordinatesType, Location, Region
from pagecapture.session import CaptureSession
from pagecapture.utils.image_utils import get_image_part

logger = logging.getLogger(__name__)


class PageCapturer:
    """Entry point for capturing what a session currently shows."""

    def __init__(self, session: CaptureSession, config: CaptureConfig | None = None):
        self.session = session
        self.config = config or CaptureConfig()
        self.screenshot_taker = ScreenshotTaker(session, rotation=self.config.rotation)
        self.stitcher = Stitcher(session, self.screenshot_taker, self.config.stitch)

    def capture(self) -> CapturedRaster:
        """Capture according to config: the full page or just the viewport."""
        if self.config.force_full_page:
            logger.info("Full page screenshot requested")
            return self.capture_full_page()
        return self.capture_viewport()

    def capture_viewport(self) -> CapturedRaster:
        with self._scrollbars_hidden():
            raster = self.screenshot_taker.capture()
        return self._record(raster)

    def capture_full_page(self) -> CapturedRaster:
        """Stitch the top-level document, whatever frame is active."""
        original = self.session.frame_chain
        self.session.switch_to_default_content()
        try:
            with self._scrollbars_hidden():
                raster = self.stitcher.capture_stitched()
        finally:
            self.session.switch_to_frames(original)
        return self._record(raster)

    def capture_frame(self) -> CapturedRaster:
        """Stitch the whole document of the active frame."""
        with self._scrollbars_hidden(), self._frame_in_view():
            raster = self._stitch_active_context()
        return self._record(raster)

    def capture_region(self, region: Region, coordinates_type: CoordinatesType) -> CapturedRaster:
        """Capture ``region`` of the active context, scrolling as needed."""
        scroll_position = self.session.metrics.current_scroll_position()
        in_context = convert_region(
            region, coordinates_type, CoordinatesType.CONTEXT_RELATIVE,
            self.session.frame_chain, scroll_position=scroll_position,
        )
        with self._scrollbars_hidden(), self._frame_in_view():
            whole = self._stitch_active_context()
        if in_context.is_empty():
            return self._record(whole)

        image = get_image_part(whole.image, in_context)
        clipped = in_context.intersect(whole.bounds)
        logger.debug("Region %s (%s) cut from stitched context at %s",
                     region, coordinates_type, clipped)
        raster = CapturedRaster(
            image=image,
            coordinates_type=CoordinatesType.CONTEXT_RELATIVE,
            frame_chain=whole.frame_chain,
            scroll_position=whole.scroll_position,
            viewport_offset=whole.viewport_offset.offset(-clipped.left, -clipped.top),
        )
        return self._record(raster)

    def _stitch_active_context(self) -> CapturedRaster:
        """Stitch the active document, cropping every part to the frame's window."""
        window = self._active_frame_window()
        logger.debug("Frame window in capture: %s", window)
        return self.stitcher.capture_stitched(window, CoordinatesType.SCREENSHOT_AS_IS)

    def _active_frame_window(self) -> Region:
        """Window of the active frame in a viewport screenshot, or ``EMPTY_REGION`` at top level."""
        if self.session.frame_chain.is_empty():
            return EMPTY_REGION
        window = self._visible_frame_window()
        if window is None:
            raise FrameNotVisibleError(
                f"Frame {self.session.frame_chain.current_frame.frame_id} can't be shown "
                f"from its top-left corner in the viewport"
            )
        return window

    def _visible_frame_window(self) -> Region | None:
        viewport = self.session.default_content_viewport_size()
        # Re-entering the frames refreshed their parent scroll positions.
        chain = self.session.frame_chain
        window = frame_window(chain, viewport)
        if window.is_empty() or window.location != frame_chain_origin(chain):
            logger.debug("Frame %s only partly visible: %s", chain.current_frame.frame_id, window)
            return None
        return window

    @contextmanager
    def _frame_in_view(self) -> Iterator[None]:
        """Scroll the ancestor documents until the active frame starts inside the viewport.

        Ancestor scroll positions are restored and the frames re-entered on exit.
        """
        original = self.session.frame_chain
        if original.is_empty() or self._visible_frame_window() is not None:
            yield
            return

        parent_scrolls: list[Location] = []
        self.session.switch_to_default_content()
        try:
            for frame in original:
                parent_scrolls.append(self.session.metrics.current_scroll_position())
                self.stitcher.scroll.scroll_and_settle(frame.location)
                self._enter(frame)
            logger.debug("Scrolled frame %s into view", original.current_frame.frame_id)
            yield
        finally:
            self.session.switch_to_default_content()
            for index, frame in enumerate(original):
                if index < len(parent_scrolls):
                    self.stitcher.scroll.scroll_to(parent_scrolls[index])
                self._enter(frame)

    def _enter(self, frame) -> None:
        self.session.switch_to_frame(frame.reference if frame.reference is not None else frame.frame_id)

    @contextmanager
    def _scrollbars_hidden(self) -> Iterator[None]:
        if not self.config.hide_scrollbars:
            yield
            return
        original_overflow = self.session.hide_scrollbars()
        try:
            yield
        finally:
            self.session.set_overflow(original_overflow)

    def _record(self, raster: CapturedRaster) -> CapturedRaster:
        self.session.last_capture = raster
        return raster
