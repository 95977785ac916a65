import pytest

from calculator_engine.formatter import format_result


@pytest.mark.parametrize("value, expected", [
    (4.0, "4"),
    (-12.0, "-12"),
    (0.0, "0"),
    (-0.0, "0"),
    (2.03, "2.03"),
    (0.1 + 0.2, "0.3"),
    (-2.5, "-2.5"),
    (12345.6789, "12345.6789"),
    (2 / 3, "0.6666666667"),
    (1.5e-7, "0.00000015"),
    (1e20, "100000000000000000000"),
])
def test_format_result(value, expected):
    assert format_result(value) == expected


def test_thirds_keep_ten_digits_without_trailing_zeros():
    text = format_result(1.0 / 3.0)
    assert text.startswith("0.3333333333")
    assert not text.endswith("0")


def test_values_near_an_integer_snap_to_it():
    assert format_result(-0.00000000001) == "0"
    assert format_result(0.99999999999) == "1"
    assert format_result(2.0000000000004) == "2"


def test_rounding_is_half_up():
    assert format_result(0.125, precision=2) == "0.13"
    assert format_result(-0.125, precision=2) == "-0.13"


def test_never_uses_exponent_notation():
    assert "e" not in format_result(1.23e-8).lower()
    assert "e" not in format_result(123456789.123).lower()
