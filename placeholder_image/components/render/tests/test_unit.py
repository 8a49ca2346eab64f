"""
Render component unit tests.

Tests for colour parsing, font sizing and centring math.
"""

from __future__ import annotations

import pytest

from placeholder_image.adapters.render.fonts import MatplotlibFontProvider
from placeholder_image.components.render import (
    MAX_CANVAS_SIDE,
    InvalidDimensionsError,
    RenderInput,
    RGBColor,
    compute_font_size,
    compute_text_origin,
    parse_hex_color,
    run,
    run_render,
    scan_hex_int,
    single_line,
    validate_dimensions,
)

WHITE = RGBColor(255, 255, 255)
RED = RGBColor(255, 0, 0)


@pytest.fixture(scope="module")
def fonts() -> MatplotlibFontProvider:
    return MatplotlibFontProvider()


# --- Hex Scanning Tests ---


class TestScanHexInt:
    """Lenient hex scanning never raises."""

    def test_six_digits(self) -> None:
        assert scan_hex_int("dddddd") == 0xDDDDDD
        assert scan_hex_int("202f55") == 0x202F55

    def test_uppercase(self) -> None:
        assert scan_hex_int("FF00AA") == 0xFF00AA

    def test_hash_prefix_yields_zero(self) -> None:
        assert scan_hex_int("#ff0000") == 0

    def test_empty_yields_zero(self) -> None:
        assert scan_hex_int("") == 0

    def test_no_hex_digits_yields_zero(self) -> None:
        assert scan_hex_int("zzz") == 0

    def test_stops_at_first_non_hex(self) -> None:
        assert scan_hex_int("ffzz00") == 0xFF

    def test_leading_whitespace_skipped(self) -> None:
        assert scan_hex_int("  ff") == 0xFF

    def test_0x_prefix_skipped(self) -> None:
        assert scan_hex_int("0xff") == 0xFF
        assert scan_hex_int("0X10") == 0x10

    def test_overflow_saturates(self) -> None:
        assert scan_hex_int("f" * 20) == 2**64 - 1


class TestParseHexColor:
    """Colour uses the low 24 bits of the scanned value."""

    def test_channels(self) -> None:
        assert parse_hex_color("202f55") == RGBColor(0x20, 0x2F, 0x55)

    def test_short_value(self) -> None:
        assert parse_hex_color("fff") == RGBColor(0, 0x0F, 0xFF)

    def test_long_value_keeps_low_bits(self) -> None:
        assert parse_hex_color("12ffffff") == RGBColor(255, 255, 255)

    def test_malformed_is_black(self) -> None:
        assert parse_hex_color("#ff0000") == RGBColor(0, 0, 0)
        assert parse_hex_color("GG0000") == RGBColor(0, 0, 0)

    def test_round_trips_hex_property(self) -> None:
        assert RGBColor.from_hex("dddddd").hex == "dddddd"

    def test_as_tuple(self) -> None:
        assert RGBColor.from_hex("ff0000").as_tuple() == (255, 0, 0)


# --- Layout Math Tests ---


class TestComputeFontSize:
    def test_height_bound(self) -> None:
        # min(300 * 0.8 / 5, 200 * 0.2) = min(48, 40)
        assert compute_font_size(300, 200, "Hello") == pytest.approx(40.0)

    def test_width_bound(self) -> None:
        # min(1000 * 0.8 / 40, 500 * 0.2) = min(20, 100)
        assert compute_font_size(1000, 500, "x" * 40) == pytest.approx(20.0)

    def test_defaults(self) -> None:
        assert compute_font_size(250, 250, "dummy") == pytest.approx(40.0)

    def test_empty_text_counts_as_one(self) -> None:
        assert compute_font_size(100, 1000, "") == pytest.approx(80.0)


class TestComputeTextOrigin:
    def test_centres_line_box(self) -> None:
        x, y = compute_text_origin(300, 200, text_width=100.0, line_height=50.0)
        assert (x, y) == (100.0, 75.0)

    def test_overflowing_text_goes_negative(self) -> None:
        x, _ = compute_text_origin(100, 100, text_width=140.0, line_height=10.0)
        assert x == -20.0


class TestSingleLine:
    def test_line_breaks_collapse(self) -> None:
        assert single_line("a\nb\r\nc") == "a b c"

    def test_plain_text_unchanged(self) -> None:
        assert single_line("Hello") == "Hello"


class TestValidateDimensions:
    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-1, 10), (10, -5)])
    def test_rejects_non_positive(self, width: int, height: int) -> None:
        with pytest.raises(InvalidDimensionsError):
            validate_dimensions(width, height)

    def test_accepts_positive(self) -> None:
        validate_dimensions(1, 1)

    @pytest.mark.parametrize(
        "width,height,field",
        [
            (MAX_CANVAS_SIDE + 1, 1, "width"),
            (1, MAX_CANVAS_SIDE + 1, "height"),
            (2**63 - 1, 1, "width"),
        ],
    )
    def test_rejects_oversized(self, width: int, height: int, field: str) -> None:
        with pytest.raises(InvalidDimensionsError) as exc_info:
            validate_dimensions(width, height)
        assert exc_info.value.field == field

    def test_accepts_largest_side(self) -> None:
        validate_dimensions(MAX_CANVAS_SIDE, 1)


# --- Component Entry Point Tests ---


class TestRunRender:
    def test_success(self, fonts: MatplotlibFontProvider) -> None:
        out = run_render(
            RenderInput(width=120, height=80, text="Hi", fg=WHITE, bg=RED),
            fonts=fonts,
        )
        assert out.success is True
        assert out.errors == []
        assert out.raster is not None
        assert out.raster.size == (120, 80)
        assert out.layout is not None
        assert out.layout.font_size == pytest.approx(16.0)

    def test_invalid_dimensions(self, fonts: MatplotlibFontProvider) -> None:
        out = run_render(
            RenderInput(width=0, height=80, text="Hi", fg=WHITE, bg=RED),
            fonts=fonts,
        )
        assert out.success is False
        assert out.raster is None
        assert out.errors[0].code == "invalid_dimensions"
        assert out.errors[0].field == "width"

    def test_oversized_height(self, fonts: MatplotlibFontProvider) -> None:
        out = run_render(
            RenderInput(width=10, height=MAX_CANVAS_SIDE + 1, text="Hi", fg=WHITE, bg=RED),
            fonts=fonts,
        )
        assert out.success is False
        assert out.errors[0].code == "invalid_dimensions"
        assert out.errors[0].field == "height"

    def test_dispatch(self, fonts: MatplotlibFontProvider) -> None:
        out = run(RenderInput(width=10, height=10, text="", fg=WHITE, bg=RED), fonts=fonts)
        assert out.success is True

    def test_dispatch_unknown_input(self, fonts: MatplotlibFontProvider) -> None:
        with pytest.raises(ValueError):
            run(object(), fonts=fonts)  # type: ignore[arg-type]
