"""Unit tests for CEP validation and temperature conversion.

These helpers carry no I/O; the tests pin down the accepted CEP formats
(including the lenient single-separator rule) and the exact, unrounded
conversion formulas.
"""

import pytest
from utils import normalize_cep, is_valid_cep, celsius_to_fahrenheit, celsius_to_kelvin


@pytest.mark.parametrize("cep, expected_output", [
    ("01310100", True),
    ("01310-100", True),
    ("01-310100", True),
    ("0131010-0", True),
    ("0131010", False),
    ("013101000", False),
    ("0131010a", False),
    ("", False),
    ("01310 100", False),
    (" 01310100", False),
    ("01-310-100", False),
    ("--01310100", False),
    ("０１３１０１００", False),
    ("0131010\n", False),
])
def test_is_valid_cep(cep, expected_output):
    """Verifies that exactly 8 ASCII digits, with at most one separator anywhere, are accepted.

        Full-width digits and trailing newlines are rejected, so only the
        ASCII range 0-9 counts as a digit.
    """
    assert is_valid_cep(cep) is expected_output


def test_normalize_cep_removes_only_first_separator():
    """Ensures only one separator is stripped before the digit-count check."""
    assert normalize_cep("01310-100") == "01310100"
    assert normalize_cep("01-310-100") == "01310-100"
    assert normalize_cep("01310100") == "01310100"


@pytest.mark.parametrize("temp_c, expected_output", [
    (0, 32),
    (100, 212),
    (-40, -40),
    (25, 77),
])
def test_celsius_to_fahrenheit(temp_c, expected_output):
    assert celsius_to_fahrenheit(temp_c) == expected_output


@pytest.mark.parametrize("temp_c, expected_output", [
    (0, 273.15),
    (-273.15, 0),
    (25, 298.15),
])
def test_celsius_to_kelvin(temp_c, expected_output):
    """Validates the additive Kelvin conversion, including the 0.15 offset."""
    assert celsius_to_kelvin(temp_c) == expected_output
