"""Tests for the UI → PDF y-axis transform."""

from __future__ import annotations

import pytest

from docsign.infrastructure.pdf.coordinates import to_draw_y


class TestToDrawY:
    def test_flips_axis(self) -> None:
        """A point 100 below the top of a 792-high page sits 692 above the bottom."""
        assert to_draw_y(792, 100) == 692

    def test_top_and_bottom_edges(self) -> None:
        assert to_draw_y(800, 0) == 800
        assert to_draw_y(800, 800) == 0

    @pytest.mark.parametrize("ui_y", [0, 12.5, 400, 799.75])
    def test_inverse_is_itself(self, ui_y: float) -> None:
        """Applying the transform twice returns the UI value."""
        assert to_draw_y(800, to_draw_y(800, ui_y)) == pytest.approx(ui_y)

    def test_out_of_page_values_are_not_clamped(self) -> None:
        assert to_draw_y(800, 900) == -100
        assert to_draw_y(800, -50) == 850
