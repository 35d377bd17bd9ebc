"""Unit tests for SA ID number parsing and validation"""

import pytest
from origination_gateway.domain.sa_id import (
    extract_date_of_birth,
    extract_gender,
    parse_id_number,
    validate_id_number,
)

REFERENCE_YEAR = 2026

VALID_IDS = ["8001015009181", "8001010009084", "9501035523081", "0002290080856", "8001015009083"]


@pytest.mark.parametrize("id_number", ["", "invalid", "800101500918", "80010150091811", None])
def test_wrong_length_is_rejected_everywhere(id_number):
    """Anything other than 13 characters yields None/False, never an exception"""
    assert extract_date_of_birth(id_number, REFERENCE_YEAR) is None
    assert extract_gender(id_number) is None
    assert validate_id_number(id_number) is False


def test_extract_date_of_birth_previous_century():
    """Two-digit years above the pivot fall in the previous century"""
    assert extract_date_of_birth("8001015009181", REFERENCE_YEAR) == "1980-01-01"
    assert extract_date_of_birth("9501035523081", REFERENCE_YEAR) == "1995-01-03"
    assert extract_date_of_birth("3101015009181", REFERENCE_YEAR) == "1931-01-01"


def test_extract_date_of_birth_current_century_pivot_inclusive():
    """Two-digit years up to and including 30 fall in the current century"""
    assert extract_date_of_birth("0002290080856", REFERENCE_YEAR) == "2000-02-29"
    assert extract_date_of_birth("3001015009181", REFERENCE_YEAR) == "2030-01-01"


def test_extract_date_of_birth_window_slides_with_reference_year():
    """The century window moves with the reference year"""
    assert extract_date_of_birth("8001015009181", 2126) == "2080-01-01"
    # 2100 is not a leap year
    assert extract_date_of_birth("0002290080856", 2126) is None


def test_extract_date_of_birth_defaults_to_current_year():
    """Without a reference year the current calendar year is used"""
    assert extract_date_of_birth("8001015009181") == "1980-01-01"


def test_extract_date_of_birth_custom_pivot():
    assert extract_date_of_birth("2501015009181", REFERENCE_YEAR, century_pivot=20) == "1925-01-01"


@pytest.mark.parametrize(
    "id_number",
    [
        "8013015009181",  # month 13
        "8000015009181",  # month 00
        "8001325009181",  # day 32
        "8001005009181",  # day 00
        "8002305009181",  # Feb 30
        "8004315009181",  # Apr 31
        "8102295009181",  # Feb 29 in 1981
    ],
)
def test_extract_date_of_birth_rejects_impossible_dates(id_number):
    assert extract_date_of_birth(id_number, REFERENCE_YEAR) is None


def test_extract_date_of_birth_accepts_leap_day():
    assert extract_date_of_birth("8402295009181", REFERENCE_YEAR) == "1984-02-29"


def test_extract_date_of_birth_non_digit_prefix():
    """Only the YYMMDD prefix has to be numeric"""
    assert extract_date_of_birth("80a1015009181", REFERENCE_YEAR) is None
    assert extract_date_of_birth("800101500918a", REFERENCE_YEAR) == "1980-01-01"


def test_extract_gender_boundaries():
    """Digit at index 6: 0-4 female, 5-9 male"""
    assert extract_gender("8001010009084") == "F"
    assert extract_gender("8001014009183") == "F"
    assert extract_gender("8001015009183") == "M"
    assert extract_gender("8001015509183") == "M"
    assert extract_gender("8001019009183") == "M"


def test_extract_gender_ignores_other_positions():
    assert extract_gender("800101500918a") == "M"
    assert extract_gender("800101x009181") is None


@pytest.mark.parametrize("id_number", VALID_IDS)
def test_validate_accepts_correct_check_digit(id_number):
    assert validate_id_number(id_number) is True


@pytest.mark.parametrize("id_number", VALID_IDS)
def test_validate_detects_any_single_digit_change(id_number):
    """Luhn catches every single-digit substitution"""
    for position in range(13):
        digit = int(id_number[position])
        mutated = id_number[:position] + str((digit + 1) % 10) + id_number[position + 1:]
        assert validate_id_number(mutated) is False, f"mutation at {position} not detected"


def test_validate_scan_direction():
    """Doubling starts at index 10, scanning right to left"""
    assert validate_id_number("8001015009181") is True
    # Check digit produced when doubling from index 11 instead
    assert validate_id_number("8001015009186") is False
    assert validate_id_number("8001015009183") is False


@pytest.mark.parametrize(
    "id_number",
    [
        "800101500918a",
        " 800101500918",
        "800101500918 ",
        "+800101500918",
        "80010150-9181",
        "８００１０１５００９１８１",  # full-width digits
    ],
)
def test_validate_rejects_non_ascii_digit_shapes(id_number):
    assert validate_id_number(id_number) is False


def test_parse_id_number_bundles_results():
    details = parse_id_number("0002290080856", reference_year=REFERENCE_YEAR)

    assert details.id_number == "0002290080856"
    assert details.valid is True
    assert details.date_of_birth == "2000-02-29"
    assert details.gender == "F"


def test_parse_id_number_invalid_input():
    details = parse_id_number(None)

    assert details.id_number == ""
    assert details.valid is False
    assert details.date_of_birth is None
    assert details.gender is None


def test_extraction_is_idempotent():
    first = parse_id_number("9501035523081", reference_year=REFERENCE_YEAR)
    second = parse_id_number("9501035523081", reference_year=REFERENCE_YEAR)
    assert first == second
