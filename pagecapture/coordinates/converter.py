"""Coordinate conversion between viewport, context and captured-image space.

Every conversion is additive offset arithmetic and never talks to the
driver: the caller resolves the frame chain, the viewport offset inside
the captured image and the active context's scroll position beforehand.
"""

from __future__ import annotations

import logging
from typing import Any

from pagecapture.errors import InvalidCoordinateSystemError
from pagecapture.models.frame import FrameChain
from pagecapture.models.geometry import (
    ORIGIN,
    CoordinatesType,
    Location,
    Region,
    Size,
)

logger = logging.getLogger(__name__)


def _coerce_type(value: Any, name: str) -> CoordinatesType:
    if isinstance(value, CoordinatesType):
        return value
    try:
        return CoordinatesType(value)
    except ValueError:
        raise InvalidCoordinateSystemError(
            f"Unrecognized coordinates type for {name}: {value!r}"
        ) from None


def frame_chain_origin(frame_chain: FrameChain) -> Location:
    """Location of the active frame's viewport within the top-level viewport.

    Each frame contributes its border-adjusted origin minus the scroll
    offset its parent had when the frame was entered.
    """
    x = y = 0
    for frame in frame_chain:
        x += frame.location.x - frame.parent_scroll_position.x
        y += frame.location.y - frame.parent_scroll_position.y
    return Location(x=x, y=y)


def _offset_to_image(
    coordinates_type: CoordinatesType,
    chain_origin: Location,
    viewport_offset: Location,
    scroll_position: Location,
) -> Location:
    match coordinates_type:
        case CoordinatesType.SCREENSHOT_AS_IS:
            return ORIGIN
        case CoordinatesType.VIEWPORT_RELATIVE:
            return chain_origin.offset_by(viewport_offset)
        case CoordinatesType.CONTEXT_RELATIVE:
            return chain_origin.offset_by(viewport_offset).offset_by(scroll_position.negated())
        case _:
            raise InvalidCoordinateSystemError(
                f"No image offset defined for {coordinates_type!r}"
            )


def convert_region(
    region: Region,
    from_type: CoordinatesType | str | None,
    to_type: CoordinatesType | str | None,
    frame_chain: FrameChain,
    viewport_offset: Location = ORIGIN,
    scroll_position: Location = ORIGIN,
) -> Region:
    """Convert ``region`` from one coordinates type to another.

    Args:
        region: The region to convert. ``EMPTY_REGION`` is returned as is.
        from_type: Coordinates type ``region`` is currently expressed in.
        to_type: Coordinates type to express the result in.
        frame_chain: Frames entered from the top-level document to the
            active context.
        viewport_offset: Location of the top-level viewport's top-left
            corner inside the captured image.
        scroll_position: Current scroll offset of the active context.
    """
    if region.is_empty():
        return region

    source = _coerce_type(from_type, "from_type")
    target = _coerce_type(to_type, "to_type")

    if source == target or CoordinatesType.CONTEXT_AS_IS in (source, target):
        return region

    chain_origin = frame_chain_origin(frame_chain)
    from_offset = _offset_to_image(source, chain_origin, viewport_offset, scroll_position)
    to_offset = _offset_to_image(target, chain_origin, viewport_offset, scroll_position)

    converted = region.offset(from_offset.x - to_offset.x, from_offset.y - to_offset.y)
    logger.debug("Converted %s (%s) -> %s (%s)", region, source.value, converted, target.value)
    return converted


def frame_window(
    frame_chain: FrameChain,
    image_size: Size,
    viewport_offset: Location = ORIGIN,
) -> Region:
    """Region of the active frame's viewport inside a captured image.

    For the top-level document this is the whole image.
    """
    image_bounds = Region(left=0, top=0, width=image_size.width, height=image_size.height)
    current = frame_chain.current_frame
    if current is None:
        return image_bounds

    origin = frame_chain_origin(frame_chain).offset_by(viewport_offset)
    window = Region.from_location_size(origin, current.size)
    return window.intersect(image_bounds)
