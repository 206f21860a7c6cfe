"""Device capability descriptor attached to a capture session."""

from __future__ import annotations

from enum import Enum


class DeviceFamily(str, Enum):
    DESKTOP = "desktop"
    MOBILE_ANDROID = "mobile-android"
    MOBILE_IOS = "mobile-ios"

    @property
    def is_mobile(self) -> bool:
        return self is not DeviceFamily.DESKTOP

    @property
    def is_android(self) -> bool:
        return self is DeviceFamily.MOBILE_ANDROID

    @property
    def is_ios(self) -> bool:
        return self is DeviceFamily.MOBILE_IOS
