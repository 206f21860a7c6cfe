"""The narrow driver interface the capture core depends on."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pagecapture.models.frame import FrameElement
from pagecapture.models.geometry import Size


@runtime_checkable
class BrowserDriver(Protocol):
    """Blocking operations of a remotely controlled browser.

    Everything else a browser automation library offers stays with that
    library; the capture core only scrolls, measures, resizes, captures
    and moves between frames.
    """

    def navigate(self, url: str) -> None: ...

    def execute_script(self, script: str, *args: Any) -> Any: ...

    def capture_screenshot(self) -> bytes:
        """PNG bytes of the currently visible top-level viewport."""
        ...

    def get_window_size(self) -> Size: ...

    def set_window_size(self, size: Size) -> None: ...

    def get_title(self) -> str: ...

    def find_frame(self, reference: Any) -> FrameElement:
        """Resolve a frame by index, name/id or element in the current context."""
        ...

    def switch_to_frame(self, element: FrameElement) -> None: ...

    def switch_to_parent_frame(self) -> None: ...

    def switch_to_default_content(self) -> None: ...
