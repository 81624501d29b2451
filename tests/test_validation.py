"""
Tests for render parameter validation.
"""
import pytest


class TestDimensions:
    """Tests for width/height bounds."""

    @pytest.mark.parametrize("width,height", [(1, 1), (1920, 1080), (7680, 4320)])
    def test_valid(self, width, height):
        """Values inside the bounds are returned unchanged."""
        from reelforge.rendering.validation import validate_dimensions

        assert validate_dimensions(width, height) == (width, height)

    @pytest.mark.parametrize("width,height", [(0, 1080), (1920, 0), (7681, 1080), (1920, 4321), (-5, 10)])
    def test_out_of_range(self, width, height):
        """Zero, negative or oversized dimensions are rejected."""
        from reelforge.exceptions import ValidationError
        from reelforge.rendering.validation import validate_dimensions

        with pytest.raises(ValidationError):
            validate_dimensions(width, height)

    @pytest.mark.parametrize("value", [1920.0, "1920", True, None])
    def test_non_integer_rejected(self, value):
        """Floats, strings and booleans are not dimensions."""
        from reelforge.exceptions import ValidationError
        from reelforge.rendering.validation import validate_dimensions

        with pytest.raises(ValidationError) as exc:
            validate_dimensions(value, 1080)
        assert exc.value.field == "width"


class TestScalars:
    """Tests for fps, duration and volume."""

    def test_fps_bounds(self):
        """fps must be within [1, 120]."""
        from reelforge.exceptions import ValidationError
        from reelforge.rendering.validation import validate_fps

        assert validate_fps(120) == 120
        with pytest.raises(ValidationError):
            validate_fps(121)
        with pytest.raises(ValidationError):
            validate_fps(0)

    def test_duration_bounds(self):
        """duration must be within [0.1, 3600]."""
        from reelforge.exceptions import ValidationError
        from reelforge.rendering.validation import validate_duration

        assert validate_duration(0.1) == 0.1
        assert validate_duration(3600) == 3600.0
        for bad in (0.05, 3600.5, float("nan"), "5"):
            with pytest.raises(ValidationError):
                validate_duration(bad)

    def test_volume_non_negative(self):
        """Volume is any finite value >= 0."""
        from reelforge.exceptions import ValidationError
        from reelforge.rendering.validation import validate_volume

        assert validate_volume(0) == 0.0
        assert validate_volume(250) == 250.0
        for bad in (-1, float("inf"), float("nan")):
            with pytest.raises(ValidationError):
                validate_volume(bad, "music_volume")

    def test_error_message_has_kind_and_detail(self):
        """Errors render as '[kind] detail'."""
        from reelforge.exceptions import ValidationError
        from reelforge.rendering.validation import validate_fps

        with pytest.raises(ValidationError) as exc:
            validate_fps(500)
        assert str(exc.value).startswith("[validation] fps=500")
        assert exc.value.kind == "validation"

    def test_hex_color(self):
        """Colours are six hex digits, with or without '#'."""
        from reelforge.exceptions import ValidationError
        from reelforge.rendering.validation import validate_color

        assert validate_color("#FFD700") == "#FFD700"
        assert validate_color("34ab12") == "34ab12"
        for bad in ("white", "#FFF", "#GGGGGG", None):
            with pytest.raises(ValidationError) as exc:
                validate_color(bad, "font_color")
            assert exc.value.field == "font_color"
