"""Frame records and the frame chain of an automation session."""

from __future__ import annotations

from typing import Any, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field

from pagecapture.errors import EmptyFrameChainError
from pagecapture.models.geometry import ORIGIN, Location, Size


class FrameElement(BaseModel):
    """A frame element as resolved by the driver, before it is entered."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    frame_id: str
    location: Location  # within the parent document
    size: Size
    handle: Any = Field(default=None, exclude=True, repr=False)


class Frame(BaseModel):
    """An entered frame: its identity, border-adjusted origin and entry state."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    frame_id: str
    location: Location
    size: Size
    parent_scroll_position: Location = ORIGIN
    reference: Optional[FrameElement] = Field(default=None, exclude=True, repr=False)


class FrameChain:
    """Ordered path of entered frames, outermost first.

    Two chains are equal when their frame ids match in order and count;
    geometry and object identity do not take part in the comparison.
    """

    def __init__(self, frames: list[Frame] | None = None):
        self._frames: list[Frame] = list(frames or [])

    def push(self, frame: Frame) -> None:
        self._frames.append(frame)

    def pop(self) -> Frame:
        if not self._frames:
            raise EmptyFrameChainError("Cannot pop a frame from an empty frame chain")
        return self._frames.pop()

    def clear(self) -> None:
        self._frames.clear()

    def snapshot(self) -> FrameChain:
        """Independent copy; frames are immutable so copying the list suffices."""
        return FrameChain(self._frames)

    @property
    def frame_ids(self) -> list[str]:
        return [f.frame_id for f in self._frames]

    @property
    def current_frame(self) -> Frame | None:
        return self._frames[-1] if self._frames else None

    def is_empty(self) -> bool:
        return not self._frames

    def equals(self, other: FrameChain) -> bool:
        return is_same_frame_chain(self, other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrameChain):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # mutable

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(list(self._frames))

    def __getitem__(self, index: int) -> Frame:
        return self._frames[index]

    def __repr__(self) -> str:
        return f"FrameChain({self.frame_ids})"


def is_same_frame_chain(a: FrameChain, b: FrameChain) -> bool:
    """Compare two chains by the id sequence of their frames."""
    if len(a) != len(b):
        return False
    return a.frame_ids == b.frame_ids
