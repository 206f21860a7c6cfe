"""Exceptions raised by the capture subsystem."""

from __future__ import annotations


class CaptureError(Exception):
    """Base class for capture failures."""


class ScrollToOriginError(CaptureError):
    """The active context could not be scrolled back to (0, 0)."""


class ScrollPositionUnavailableError(CaptureError):
    """The driver could not report the current scroll position."""


class WindowResizeError(CaptureError):
    """The browser window did not take the requested outer size."""


class ViewportSizeUnattainableError(CaptureError):
    """The viewport never converged to the requested size."""


class InvalidCoordinateSystemError(CaptureError, ValueError):
    """A coordinates type was missing or not recognized."""


class EmptyFrameChainError(CaptureError, IndexError):
    """A frame was popped from an empty frame chain."""


class FrameNotVisibleError(CaptureError):
    """The active frame's top-left corner cannot be scrolled into the viewport."""
