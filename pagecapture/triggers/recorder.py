"""Trigger recorder — keeps input events that belong to the last capture's context."""

from __future__ import annotations

import logging

from pagecapture.models.capture import MouseTrigger, TextTrigger
from pagecapture.models.frame import is_same_frame_chain
from pagecapture.models.geometry import CoordinatesType, Location, Region
from pagecapture.session import CaptureSession

logger = logging.getLogger(__name__)


class TriggerRecorder:
    """Records mouse and keyboard triggers against the session's last capture.

    Triggers are performed on the previously captured window, so a trigger
    is dropped when there is no capture yet or when the session has since
    moved to a different frame.
    """

    def __init__(self, session: CaptureSession):
        self.session = session
        self.mouse_triggers: list[MouseTrigger] = []
        self.text_triggers: list[TextTrigger] = []

    def add_mouse_trigger(self, action: str, control: Region, cursor: Location) -> bool:
        control_in_image = self._control_in_last_capture(control, f"mouse {action}")
        if control_in_image is None:
            return False
        self.mouse_triggers.append(
            MouseTrigger(action=action, control=control_in_image, cursor=cursor)
        )
        logger.debug("Added mouse trigger %s on %s", action, control_in_image)
        return True

    def add_text_trigger(self, control: Region, text: str) -> bool:
        control_in_image = self._control_in_last_capture(control, f"text '{text}'")
        if control_in_image is None:
            return False
        self.text_triggers.append(TextTrigger(control=control_in_image, text=text))
        logger.debug("Added text trigger '%s' on %s", text, control_in_image)
        return True

    def clear(self) -> None:
        self.mouse_triggers.clear()
        self.text_triggers.clear()

    def _control_in_last_capture(self, control: Region, description: str) -> Region | None:
        last = self.session.last_capture
        if last is None:
            logger.debug("Ignoring %s (no screenshot)", description)
            return None

        if not is_same_frame_chain(self.session.frame_chain, last.frame_chain):
            logger.debug("Ignoring %s (different frame)", description)
            return None

        in_image = last.convert_region(
            control, CoordinatesType.CONTEXT_RELATIVE, CoordinatesType.SCREENSHOT_AS_IS,
        ).intersect(last.bounds)
        if in_image.is_empty():
            logger.debug("Ignoring %s (out of the captured area)", description)
            return None
        return in_image
