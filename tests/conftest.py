"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import pytest
from PIL import Image, ImageChops

from pagecapture.driver import scripts
from pagecapture.models.config import CaptureConfig, ResizeConfig, StitchConfig
from pagecapture.models.frame import FrameElement
from pagecapture.models.geometry import ORIGIN, Location, Size
from pagecapture.session import CaptureSession
from pagecapture.utils.image_utils import image_to_bytes


# ============================================================================
# Page images
# ============================================================================


def make_page_image(width: int, height: int, tint: int = 0) -> Image.Image:
    """An RGB image where every pixel encodes its own coordinates."""
    image = Image.new("RGB", (width, height))
    image.putdata([
        ((x * 7 + tint) % 256, y % 256, ((y // 256) * 16 + x // 256 + tint) % 256)
        for y in range(height)
        for x in range(width)
    ])
    return image


def images_equal(a: Image.Image, b: Image.Image) -> bool:
    if a.size != b.size:
        return False
    return ImageChops.difference(a.convert("RGB"), b.convert("RGB")).getbbox() is None


# ============================================================================
# In-memory browser
# ============================================================================


@dataclass
class FakeFrame:
    frame_id: str
    location: Location  # border-box position in the parent document
    size: Size  # border-box size
    document: "FakeDocument"
    border: Optional[int] = 0  # None makes the computed style lookup fail

    @property
    def inner_size(self) -> Size:
        border = self.border or 0
        return Size(width=self.size.width - 2 * border, height=self.size.height - 2 * border)


@dataclass
class FakeDocument:
    image: Image.Image
    scroll: Location = ORIGIN
    frames: dict[str, FakeFrame] = field(default_factory=dict)
    overflow: str = ""
    scroll_floor: Location = ORIGIN  # the document refuses to scroll above/left of this

    @property
    def size(self) -> Size:
        return Size(width=self.image.width, height=self.image.height)

    def add_frame(self, frame: FakeFrame) -> FakeFrame:
        self.frames[frame.frame_id] = frame
        return frame


_SCRIPT_NAMES = {
    scripts.JS_GET_VIEWPORT_SIZE: "viewport_size",
    scripts.JS_GET_ENTIRE_PAGE_METRICS: "entire_page_metrics",
    scripts.JS_GET_SCROLL_POSITION: "scroll_position",
    scripts.JS_SCROLL_TO: "scroll_to",
    scripts.JS_SET_OVERFLOW: "set_overflow",
    scripts.JS_GET_COMPUTED_STYLE: "computed_style",
    scripts.JS_GET_USER_AGENT: "user_agent",
    scripts.JS_GET_ORIENTATION: "orientation",
}


class FakeDriver:
    """A BrowserDriver that renders documents held in memory.

    The window is the viewport plus ``chrome``. Scroll offsets are clamped
    to the scrollable range the way browsers clamp them. Screenshots show
    the top-level viewport with every frame drawn at its on-screen spot.
    """

    def __init__(self, page: FakeDocument, viewport: Size = Size(width=200, height=150),
                 chrome: Size = Size(width=0, height=0)):
        self.page = page
        self.chrome = chrome
        self.chrome_sequence: list[Size] = []
        self.window_size = Size(width=viewport.width + chrome.width,
                                height=viewport.height + chrome.height)
        self.honor_resize = True
        self.context_path: list[str] = []
        self.title = "Fake page"
        self.user_agent: Optional[str] = "FakeBrowser/1.0"
        self.orientation: Optional[str] = None
        self.fail_title = False
        self.fail_viewport_script = False
        self.scroll_position_unavailable = False
        self.calls: list[tuple[str, tuple]] = []
        self.screenshots_taken = 0
        self.navigated_to: list[str] = []

    # -- navigation ---------------------------------------------------------

    def navigate(self, url: str) -> None:
        self.navigated_to.append(url)
        self.context_path = []

    def get_title(self) -> str:
        if self.fail_title:
            raise RuntimeError("title unavailable")
        return self.title

    # -- contexts -----------------------------------------------------------

    @property
    def viewport(self) -> Size:
        return Size(width=self.window_size.width - self.chrome.width,
                    height=self.window_size.height - self.chrome.height)

    def _current(self) -> tuple[FakeDocument, Size]:
        document, viewport = self.page, self.viewport
        for frame_id in self.context_path:
            frame = document.frames[frame_id]
            document, viewport = frame.document, frame.inner_size
        return document, viewport

    def find_frame(self, reference: Any) -> FrameElement:
        if isinstance(reference, FrameElement):
            return reference
        document, _ = self._current()
        if isinstance(reference, int):
            frame = list(document.frames.values())[reference]
        elif reference in document.frames:
            frame = document.frames[reference]
        else:
            raise ValueError(f"No frame '{reference}'")
        return FrameElement(frame_id=frame.frame_id, location=frame.location,
                            size=frame.size, handle=frame)

    def switch_to_frame(self, element: FrameElement) -> None:
        self.context_path.append(element.frame_id)

    def switch_to_parent_frame(self) -> None:
        if self.context_path:
            self.context_path.pop()

    def switch_to_default_content(self) -> None:
        self.context_path = []

    # -- window -------------------------------------------------------------

    def get_window_size(self) -> Size:
        return self.window_size

    def set_window_size(self, size: Size) -> None:
        self.calls.append(("set_window_size", (size,)))
        if self.honor_resize:
            self.window_size = size

    def _measure_chrome(self) -> Size:
        if self.chrome_sequence:
            self.chrome = self.chrome_sequence.pop(0)
        return self.chrome

    # -- scripts ------------------------------------------------------------

    def execute_script(self, script: str, *args: Any) -> Any:
        name = _SCRIPT_NAMES[script]
        self.calls.append((name, args))
        document, viewport = self._current()

        if name == "viewport_size":
            if self.fail_viewport_script:
                raise RuntimeError("script error")
            if not self.context_path:
                self._measure_chrome()
                viewport = self.viewport
            return [viewport.width, viewport.height]
        if name == "entire_page_metrics":
            size = document.size
            return [size.width, size.width, viewport.height, viewport.height,
                    size.height, size.height]
        if name == "scroll_position":
            if self.scroll_position_unavailable:
                return None
            return [document.scroll.x, document.scroll.y]
        if name == "scroll_to":
            document.scroll = self._clamp(document, viewport, Location(x=args[0], y=args[1]))
            return None
        if name == "set_overflow":
            original = document.overflow
            document.overflow = args[0] or ""
            return original
        if name == "computed_style":
            frame, prop = args
            if frame.border is None:
                raise RuntimeError(f"no computed style for {prop}")
            return f"{frame.border}px"
        if name == "user_agent":
            if self.user_agent is None:
                raise RuntimeError("navigator unavailable")
            return self.user_agent
        if name == "orientation":
            return self.orientation
        raise AssertionError(f"unexpected script {name}")

    @staticmethod
    def _clamp(document: FakeDocument, viewport: Size, position: Location) -> Location:
        max_x = max(document.size.width - viewport.width, 0)
        max_y = max(document.size.height - viewport.height, 0)
        floor = document.scroll_floor
        return Location(
            x=min(max(position.x, floor.x), max(max_x, floor.x)),
            y=min(max(position.y, floor.y), max(max_y, floor.y)),
        )

    def scroll_calls(self) -> list[Location]:
        return [Location(x=a[0], y=a[1]) for name, a in self.calls if name == "scroll_to"]

    # -- screenshots --------------------------------------------------------

    def capture_screenshot(self) -> bytes:
        self.screenshots_taken += 1
        viewport = self.viewport
        canvas = Image.new("RGB", (viewport.width, viewport.height), "white")
        self._draw(canvas, self.page, viewport, ORIGIN)
        return image_to_bytes(canvas)

    def _draw(self, canvas: Image.Image, document: FakeDocument, viewport: Size, at: Location) -> None:
        sx, sy = document.scroll.x, document.scroll.y
        canvas.paste(document.image.crop((sx, sy, sx + viewport.width, sy + viewport.height)),
                     (at.x, at.y))
        for frame in document.frames.values():
            border = frame.border or 0
            self._draw(canvas, frame.document, frame.inner_size, Location(
                x=at.x + frame.location.x + border - sx,
                y=at.y + frame.location.y + border - sy,
            ))


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def stitch_config() -> StitchConfig:
    """Stitch configuration without settle delays."""
    return StitchConfig(origin_scroll_settle_seconds=0, part_scroll_settle_seconds=0)


@pytest.fixture
def resize_config() -> ResizeConfig:
    """Resize configuration without settle delays."""
    return ResizeConfig(settle_seconds=0)


@pytest.fixture
def capture_config(stitch_config: StitchConfig, resize_config: ResizeConfig) -> CaptureConfig:
    return CaptureConfig(
        target_url="https://example.com",
        stitch=stitch_config,
        resize=resize_config,
    )


@pytest.fixture
def temp_config_file(capture_config: CaptureConfig, tmp_path: Path) -> Path:
    config_path = tmp_path / "capture-config.json"
    capture_config.save(config_path)
    return config_path


# ============================================================================
# Browser Fixtures
# ============================================================================


@pytest.fixture
def tall_page() -> FakeDocument:
    """A 200x520 page: taller than the 200x150 viewport, not a multiple of it."""
    return FakeDocument(make_page_image(200, 520))


@pytest.fixture
def driver(tall_page: FakeDocument) -> FakeDriver:
    return FakeDriver(tall_page)


@pytest.fixture
def session(driver: FakeDriver) -> CaptureSession:
    return CaptureSession(driver)


@pytest.fixture
def framed_page() -> FakeDocument:
    """A 300x400 page holding a 100x80 frame over a 100x300 document."""
    page = FakeDocument(make_page_image(300, 400))
    inner = FakeDocument(make_page_image(100, 300, tint=101))
    page.add_frame(FakeFrame("inner", Location(x=20, y=30), Size(width=100, height=80), inner))
    return page


@pytest.fixture
def framed_driver(framed_page: FakeDocument) -> FakeDriver:
    return FakeDriver(framed_page)


@pytest.fixture
def framed_session(framed_driver: FakeDriver) -> CaptureSession:
    return CaptureSession(framed_driver)
