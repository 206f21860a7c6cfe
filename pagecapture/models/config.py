"""Configuration models for page capture."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from pagecapture.models.device import DeviceFamily
from pagecapture.models.geometry import Size


class ViewportConfig(BaseModel):
    width: int = Field(default=1280, gt=0)
    height: int = Field(default=720, gt=0)
    name: str = "desktop"

    def to_size(self) -> Size:
        return Size(width=self.width, height=self.height)


class StitchConfig(BaseModel):
    # Covers scroll bars and most fixed-position footers at part seams.
    scrollbar_margin: int = Field(default=50, ge=0)
    min_part_height: int = Field(default=10, gt=0)
    origin_scroll_retries: int = Field(default=3, ge=1)
    origin_scroll_settle_seconds: float = Field(default=0.15, ge=0)
    part_scroll_settle_seconds: float = Field(default=0.1, ge=0)


class ResizeConfig(BaseModel):
    window_resize_retries: int = Field(default=3, ge=1)
    viewport_retries: int = Field(default=3, ge=1)
    settle_seconds: float = Field(default=1.0, ge=0)


class CaptureConfig(BaseModel):
    # Target
    target_url: str = ""

    # Browser
    viewport: Optional[ViewportConfig] = None  # None keeps whatever size the browser has
    device: DeviceFamily = DeviceFamily.DESKTOP
    headless: bool = True

    # Capture behavior
    rotation: Optional[int] = None  # degrees clockwise; 0 forces no rotation
    force_full_page: bool = False
    hide_scrollbars: bool = False
    output_path: str = "capture.png"

    stitch: StitchConfig = Field(default_factory=StitchConfig)
    resize: ResizeConfig = Field(default_factory=ResizeConfig)

    @field_validator("rotation")
    @classmethod
    def validate_rotation(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v % 90 != 0:
            raise ValueError(f"Rotation must be a multiple of 90 degrees, got {v}")
        return v

    @classmethod
    def load(cls, path: str | Path) -> "CaptureConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)
