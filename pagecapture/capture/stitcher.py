"""Stitcher — composes one image of a whole scrollable area from viewport captures."""

from __future__ import annotations

import logging

from pagecapture.capture.scroll import ScrollController
from pagecapture.capture.screenshot import ScreenshotTaker
from pagecapture.coordinates.converter import frame_chain_origin
from pagecapture.models.capture import CapturedRaster
from pagecapture.models.config import StitchConfig
from pagecapture.models.geometry import (
    EMPTY_REGION,
    ORIGIN,
    CoordinatesType,
    Region,
    Size,
)
from pagecapture.session import CaptureSession
from pagecapture.utils.image_utils import get_image_part, new_canvas, paste_part

logger = logging.getLogger(__name__)


class Stitcher:
    """Scrolls the active context part by part and stitches the captures."""

    def __init__(
        self,
        session: CaptureSession,
        screenshot_taker: ScreenshotTaker,
        config: StitchConfig | None = None,
    ):
        self.session = session
        self.screenshot_taker = screenshot_taker
        self.config = config or StitchConfig()
        self.scroll = ScrollController(
            session.driver,
            session.metrics,
            origin_retries=self.config.origin_scroll_retries,
            origin_settle_seconds=self.config.origin_scroll_settle_seconds,
            settle_seconds=self.config.part_scroll_settle_seconds,
        )

    def capture_stitched(
        self,
        region: Region = EMPTY_REGION,
        coordinates_type: CoordinatesType | None = None,
    ) -> CapturedRaster:
        """Capture the entire scrollable area of the active context.

        Args:
            region: Part of every viewport capture to keep (e.g. the window
                of the active frame). ``EMPTY_REGION`` keeps the whole capture.
            coordinates_type: Coordinates type ``region`` is expressed in.

        The original scroll position is restored before returning, and
        also when a part capture fails.
        """
        original_scroll = self.session.metrics.current_scroll_position()
        logger.debug("Stitching (region=%s), original scroll %s", region, original_scroll)
        self.scroll.scroll_to_origin(restore_to=original_scroll)
        try:
            return self._stitch(region, coordinates_type)
        finally:
            self.scroll.scroll_to(original_scroll)

    def _stitch(self, region: Region, coordinates_type: CoordinatesType | None) -> CapturedRaster:
        entire_size = self.session.metrics.entire_page_size()

        first = self.screenshot_taker.capture(scroll_position=ORIGIN)
        region_in_image = first.convert_region(
            region, coordinates_type, CoordinatesType.SCREENSHOT_AS_IS,
        )
        image = first.image
        if not region_in_image.is_empty():
            image = get_image_part(image, region_in_image)

        if image.width >= entire_size.width and image.height >= entire_size.height:
            logger.debug("Single capture %dx%d covers the page %s", image.width, image.height, entire_size)
            return self._result(image, first)

        # Parts are a bit shorter than the capture to drop duplicate bottom
        # scroll bars and fixed-position footers at the seams.
        part_size = Size(
            width=image.width,
            height=max(image.height - self.config.scrollbar_margin, self.config.min_part_height),
        )
        parts = Region.from_location_size(ORIGIN, entire_size).sub_regions(part_size)
        logger.info("Stitching %s page from %d parts of %s", entire_size, len(parts), part_size)

        stitched = new_canvas(entire_size, image)
        paste_part(stitched, image, ORIGIN)

        for part in parts:
            if part.left == 0 and part.top == 0:
                continue  # already captured
            logger.debug("Taking screenshot for %s", part)
            # The browser may clamp the scroll at the page edges, so parts
            # are placed where the viewport really is.
            actual = self.scroll.scroll_and_settle(part.location)
            capture = self.screenshot_taker.capture(scroll_position=actual)
            part_image = capture.image
            if not region_in_image.is_empty():
                part_image = get_image_part(part_image, region_in_image)
            paste_part(stitched, part_image, actual)

        logger.debug("Stitching done")
        return self._result(stitched, first)

    @staticmethod
    def _result(image, first: CapturedRaster) -> CapturedRaster:
        return CapturedRaster(
            image=image,
            coordinates_type=CoordinatesType.CONTEXT_RELATIVE,
            frame_chain=first.frame_chain,
            scroll_position=ORIGIN,
            # Stitched pixels sit at context coordinates.
            viewport_offset=frame_chain_origin(first.frame_chain).negated(),
        )
