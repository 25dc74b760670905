import pytest

from roomplan.utils import EditorConfig, clamp, format_mm, parse_mm, parse_number, snap


@pytest.mark.parametrize("text,expected", [
    ("1200", 1.2),
    (" 450 ", 0.45),
    ("12,5", 0.0125),
    ("0", 0.0),
    (900, 0.9),
])
def test_parse_mm(text, expected):
    assert parse_mm(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "  ", "abc", "-10", "nan", "inf", None])
def test_parse_mm_rejects(text):
    assert parse_mm(text) is None


def test_parse_number_keeps_units():
    assert parse_number("90") == 90.0


def test_format_mm():
    assert format_mm(1.2) == "1200"
    assert format_mm(0.45) == "450"


def test_snap_has_no_float_noise():
    assert snap(1.6625, 0.05) == 1.65
    assert snap(33 * 0.05, 0.05) == 1.65


def test_snap_and_clamp():
    assert snap(0.97, 0.05) == pytest.approx(0.95)
    assert clamp(5.0, 0.0, 3.0) == 3.0
    assert clamp(1.0, 0.0, -2.0) == 0.0


def test_config_threshold_in_meters():
    assert EditorConfig().snap_threshold == 0.125
    assert EditorConfig(pixels_per_meter=100).to_meters(50) == 0.5
