"""BrowserDriver implementation over Playwright's sync API."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from playwright.sync_api import ElementHandle, Error as PlaywrightError, Frame, Page

from pagecapture.models.frame import FrameElement
from pagecapture.models.geometry import Location, Size

logger = logging.getLogger(__name__)

# Runs a script body that reads its inputs from `arguments`.
_EXECUTE_SCRIPT = "([body, args]) => new Function(body).apply(null, args)"

_STAMP_FRAME_ID = """(el, token) => {
    if (!el.dataset.pagecaptureFrameId) { el.dataset.pagecaptureFrameId = token; }
    return el.dataset.pagecaptureFrameId;
}"""

# Page coordinates of the element within its own document.
_ELEMENT_PAGE_RECT = """el => {
    const r = el.getBoundingClientRect();
    return [r.left + window.scrollX, r.top + window.scrollY, r.width, r.height];
}"""


def _css_string(value) -> str:
    """Quote ``value`` as a CSS string for attribute selectors."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\a ")
    return f'"{escaped}"'


class PlaywrightDriver:
    """Drives one Playwright page and tracks the frame scripts run in."""

    def __init__(self, page: Page):
        self.page = page
        self._current_frame: Frame = page.main_frame
        self._cdp = None
        self._window_id: int | None = None

    def navigate(self, url: str) -> None:
        self.page.goto(url, wait_until="domcontentloaded")
        try:
            self.page.wait_for_load_state("networkidle", timeout=10000)
        except PlaywrightError:
            logger.debug("Network idle timeout, continuing")
        self._current_frame = self.page.main_frame

    def execute_script(self, script: str, *args: Any) -> Any:
        return self._current_frame.evaluate(_EXECUTE_SCRIPT, [script, list(args)])

    def capture_screenshot(self) -> bytes:
        return self.page.screenshot(type="png", full_page=False)

    def get_title(self) -> str:
        return self.page.title()

    # ------------------------------------------------------------------
    # Window size
    # ------------------------------------------------------------------

    def _window_target(self) -> tuple[Any, int] | None:
        """DevTools session and window id, or None outside Chromium."""
        if self._cdp is None:
            try:
                self._cdp = self.page.context.new_cdp_session(self.page)
                self._window_id = self._cdp.send("Browser.getWindowForTarget")["windowId"]
            except PlaywrightError as e:
                logger.debug("No DevTools window control (%s), using the viewport as window", e)
                self._cdp = False
        if self._cdp is False:
            return None
        return self._cdp, self._window_id

    def get_window_size(self) -> Size:
        target = self._window_target()
        if target is None:
            viewport = self.page.viewport_size or {"width": 0, "height": 0}
            return Size(width=viewport["width"], height=viewport["height"])
        cdp, window_id = target
        bounds = cdp.send("Browser.getWindowBounds", {"windowId": window_id})["bounds"]
        return Size(width=bounds["width"], height=bounds["height"])

    def set_window_size(self, size: Size) -> None:
        target = self._window_target()
        if target is None:
            self.page.set_viewport_size({"width": size.width, "height": size.height})
            return
        cdp, window_id = target
        cdp.send("Browser.setWindowBounds", {
            "windowId": window_id,
            "bounds": {"windowState": "normal"},
        })
        cdp.send("Browser.setWindowBounds", {
            "windowId": window_id,
            "bounds": {"width": size.width, "height": size.height},
        })

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def find_frame(self, reference: Any) -> FrameElement:
        """Resolve a frame by index, name/id, element handle or FrameElement."""
        if isinstance(reference, FrameElement):
            handle = reference.handle
        elif isinstance(reference, ElementHandle):
            handle = reference
        elif isinstance(reference, int):
            handles = self._current_frame.query_selector_all("iframe, frame")
            if reference < 0 or reference >= len(handles):
                raise ValueError(f"No frame at index {reference}")
            handle = handles[reference]
        else:
            value = _css_string(reference)
            handle = self._current_frame.query_selector(
                f"iframe[name={value}], iframe[id={value}], "
                f"frame[name={value}], frame[id={value}]"
            )
            if handle is None:
                handle = self._current_frame.query_selector(f"[data-pagecapture-frame-id={value}]")
            if handle is None:
                raise ValueError(f"No frame with name or id '{reference}'")

        frame_id = handle.evaluate(_STAMP_FRAME_ID, uuid.uuid4().hex)
        left, top, width, height = handle.evaluate(_ELEMENT_PAGE_RECT)
        return FrameElement(
            frame_id=frame_id,
            location=Location(x=int(round(left)), y=int(round(top))),
            size=Size(width=int(round(width)), height=int(round(height))),
            handle=handle,
        )

    def switch_to_frame(self, element: FrameElement) -> None:
        frame = element.handle.content_frame()
        if frame is None:
            raise ValueError(f"Element {element.frame_id} is not a frame")
        self._current_frame = frame

    def switch_to_parent_frame(self) -> None:
        parent = self._current_frame.parent_frame
        if parent is not None:
            self._current_frame = parent

    def switch_to_default_content(self) -> None:
        self._current_frame = self.page.main_frame
