"""Captured rasters and the input triggers recorded against them."""

from __future__ import annotations

from typing import Any

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

from pagecapture.coordinates.converter import convert_region, frame_window
from pagecapture.models.frame import FrameChain
from pagecapture.models.geometry import ORIGIN, CoordinatesType, Location, Region, Size


class CapturedRaster(BaseModel):
    """A pixel buffer plus the context it was captured in."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    image: Image.Image
    coordinates_type: CoordinatesType = CoordinatesType.SCREENSHOT_AS_IS
    frame_chain: FrameChain = Field(default_factory=FrameChain)
    scroll_position: Location = ORIGIN  # of the active context at capture time
    viewport_offset: Location = ORIGIN

    @property
    def size(self) -> Size:
        return Size(width=self.image.width, height=self.image.height)

    @property
    def bounds(self) -> Region:
        return Region(left=0, top=0, width=self.image.width, height=self.image.height)

    @property
    def frame_window(self) -> Region:
        return frame_window(self.frame_chain, self.size, self.viewport_offset)

    def convert_region(
        self,
        region: Region,
        from_type: CoordinatesType | str | None,
        to_type: CoordinatesType | str | None,
    ) -> Region:
        return convert_region(
            region, from_type, to_type, self.frame_chain,
            viewport_offset=self.viewport_offset,
            scroll_position=self.scroll_position,
        )

    def intersected_region(self, region: Region, coordinates_type: CoordinatesType) -> Region:
        """Clip ``region`` to this raster, keeping it in ``coordinates_type``."""
        if region.is_empty():
            return region
        in_image = self.convert_region(region, coordinates_type, CoordinatesType.SCREENSHOT_AS_IS)
        clipped = in_image.intersect(self.bounds)
        if clipped.is_empty():
            return clipped
        return self.convert_region(clipped, CoordinatesType.SCREENSHOT_AS_IS, coordinates_type)


class MouseTrigger(BaseModel):
    action: str  # click, right_click, double_click, move, down, up
    control: Region  # captured-image coordinates
    cursor: Location  # relative to the control


class TextTrigger(BaseModel):
    control: Region
    text: str


def raster_summary(raster: CapturedRaster) -> dict[str, Any]:
    """Plain-data description of a raster, for logging and reports."""
    return {
        "size": str(raster.size),
        "coordinates_type": raster.coordinates_type.value,
        "frame_chain": raster.frame_chain.frame_ids,
        "scroll_position": str(raster.scroll_position),
    }
