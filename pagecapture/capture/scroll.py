"""Scroll controller for the driver's current browsing context."""

from __future__ import annotations

import logging
import time

from pagecapture.capture.metrics import MetricsResolver
from pagecapture.driver.base import BrowserDriver
from pagecapture.driver.scripts import JS_SCROLL_TO
from pagecapture.errors import ScrollToOriginError
from pagecapture.models.geometry import ORIGIN, Location

logger = logging.getLogger(__name__)


class ScrollController:
    """Moves the scroll offset and reads back where the browser really went."""

    def __init__(
        self,
        driver: BrowserDriver,
        metrics: MetricsResolver,
        origin_retries: int = 3,
        origin_settle_seconds: float = 0.15,
        settle_seconds: float = 0.1,
    ):
        self.driver = driver
        self.metrics = metrics
        self.origin_retries = origin_retries
        self.origin_settle_seconds = origin_settle_seconds
        self.settle_seconds = settle_seconds

    def scroll_to(self, position: Location) -> None:
        logger.debug("Scrolling to %s", position)
        self.driver.execute_script(JS_SCROLL_TO, position.x, position.y)

    def scroll_and_settle(self, position: Location) -> Location:
        """Scroll, wait for the renderer, and return the achieved offset.

        The achieved offset may differ from ``position`` when the browser
        clamps the scroll at the page edges.
        """
        self.scroll_to(position)
        time.sleep(self.settle_seconds)
        actual = self.metrics.current_scroll_position()
        if actual != position:
            logger.debug("Requested scroll %s, reached %s", position, actual)
        return actual

    def scroll_to_origin(self, restore_to: Location | None = None) -> Location:
        """Scroll to (0, 0), retrying a bounded number of times.

        Both axes must read zero. On failure the context is scrolled back
        to ``restore_to`` (when given) before ScrollToOriginError is raised.
        """
        position = None
        for attempt in range(1, self.origin_retries + 1):
            self.scroll_to(ORIGIN)
            time.sleep(self.origin_settle_seconds)
            position = self.metrics.current_scroll_position()
            if position == ORIGIN:
                return position
            logger.debug("Scroll to origin attempt %d/%d reached %s",
                         attempt, self.origin_retries, position)

        if restore_to is not None:
            self.scroll_to(restore_to)
        raise ScrollToOriginError(
            f"Couldn't scroll to the top/left of the frame (stuck at {position})"
        )
