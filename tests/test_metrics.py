"""Tests for viewport, page and scroll metrics."""

from unittest.mock import Mock

import pytest

from pagecapture.capture.metrics import MetricsResolver
from pagecapture.driver.scripts import (
    JS_GET_ENTIRE_PAGE_METRICS,
    JS_GET_ORIENTATION,
    JS_GET_SCROLL_POSITION,
    JS_GET_VIEWPORT_SIZE,
)
from pagecapture.errors import ScrollPositionUnavailableError
from pagecapture.models.device import DeviceFamily
from pagecapture.models.geometry import Location, Size


def _script_driver(results, window=Size(width=400, height=800)):
    """Mock driver answering scripts from a dict; exceptions are raised."""
    driver = Mock()

    def execute(script, *args):
        result = results[script]
        if isinstance(result, Exception):
            raise result
        return result

    driver.execute_script = Mock(side_effect=execute)
    driver.get_window_size = Mock(return_value=window)
    return driver


class TestViewportSize:
    """Tests for MetricsResolver.viewport_size."""

    def test_from_script(self):
        driver = _script_driver({JS_GET_VIEWPORT_SIZE: [1280, 720]})
        assert MetricsResolver(driver).viewport_size() == Size(width=1280, height=720)
        driver.get_window_size.assert_not_called()

    def test_rounds_fractional_values(self):
        driver = _script_driver({JS_GET_VIEWPORT_SIZE: [1279.6, 720.2]})
        assert MetricsResolver(driver).viewport_size() == Size(width=1280, height=720)

    def test_falls_back_to_window_on_error(self):
        driver = _script_driver({JS_GET_VIEWPORT_SIZE: RuntimeError("no js")})
        assert MetricsResolver(driver).viewport_size() == Size(width=400, height=800)

    def test_falls_back_to_window_on_missing_values(self):
        driver = _script_driver({JS_GET_VIEWPORT_SIZE: [None, None]})
        assert MetricsResolver(driver).viewport_size() == Size(width=400, height=800)

    def test_landscape_fallback_swaps_portrait_window(self):
        driver = _script_driver({
            JS_GET_VIEWPORT_SIZE: RuntimeError("no js"),
            JS_GET_ORIENTATION: "landscape-primary",
        })
        resolver = MetricsResolver(driver, DeviceFamily.MOBILE_IOS)
        assert resolver.viewport_size() == Size(width=800, height=400)

    def test_desktop_fallback_never_swaps(self):
        driver = _script_driver({
            JS_GET_VIEWPORT_SIZE: RuntimeError("no js"),
            JS_GET_ORIENTATION: "landscape-primary",
        })
        assert MetricsResolver(driver).viewport_size() == Size(width=400, height=800)


class TestOrientation:
    """Tests for MetricsResolver.is_landscape_orientation."""

    def test_desktop_is_never_landscape(self):
        driver = _script_driver({JS_GET_ORIENTATION: "landscape-primary"})
        assert MetricsResolver(driver).is_landscape_orientation() is False
        driver.execute_script.assert_not_called()

    @pytest.mark.parametrize("orientation,expected", [
        ("landscape-primary", True),
        ("landscape-secondary", True),
        ("portrait-primary", False),
        (None, False),
    ])
    def test_mobile_orientation(self, orientation, expected):
        driver = _script_driver({JS_GET_ORIENTATION: orientation})
        resolver = MetricsResolver(driver, DeviceFamily.MOBILE_ANDROID)
        assert resolver.is_landscape_orientation() is expected

    def test_query_failure_assumes_portrait(self):
        driver = _script_driver({JS_GET_ORIENTATION: RuntimeError("unsupported")})
        assert MetricsResolver(driver, DeviceFamily.MOBILE_IOS).is_landscape_orientation() is False


class TestEntirePageSize:
    """Tests for MetricsResolver.entire_page_size."""

    def test_takes_largest_reported_values(self):
        driver = _script_driver({JS_GET_ENTIRE_PAGE_METRICS: [1000, 1200, 700, 300, 2400, 2500]})
        assert MetricsResolver(driver).entire_page_size() == Size(width=1200, height=2500)

    def test_client_height_wins_on_short_pages(self):
        driver = _script_driver({JS_GET_ENTIRE_PAGE_METRICS: [800, 800, 600, 0, 200, 150]})
        assert MetricsResolver(driver).entire_page_size() == Size(width=800, height=600)

    def test_missing_values_count_as_zero(self):
        driver = _script_driver({JS_GET_ENTIRE_PAGE_METRICS: [800, None, 600, None, 900, None]})
        assert MetricsResolver(driver).entire_page_size() == Size(width=800, height=900)


class TestScrollPosition:
    """Tests for MetricsResolver.current_scroll_position."""

    def test_reads_position(self):
        driver = _script_driver({JS_GET_SCROLL_POSITION: [10, 250.4]})
        assert MetricsResolver(driver).current_scroll_position() == Location(x=10, y=250)

    @pytest.mark.parametrize("result", [None, [], [0, None]])
    def test_unavailable(self, result):
        driver = _script_driver({JS_GET_SCROLL_POSITION: result})
        with pytest.raises(ScrollPositionUnavailableError):
            MetricsResolver(driver).current_scroll_position()
