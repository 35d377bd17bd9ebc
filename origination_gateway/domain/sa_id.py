"""South African national ID number parsing and validation"""

import re
from typing import Optional

from origination_gateway.domain.models import IdentityDetails
from origination_gateway.utils.date_utils import build_date, current_year, resolve_century

ID_NUMBER_LENGTH = 13

# ASCII only: str.isdigit() and \d also accept other Unicode digits
_ID_NUMBER_PATTERN = re.compile(r"[0-9]{13}")
_BIRTH_DATE_PATTERN = re.compile(r"[0-9]{6}")
_DIGITS = "0123456789"


def extract_date_of_birth(
    id_number: Optional[str],
    reference_year: Optional[int] = None,
    century_pivot: int = 30,
) -> Optional[str]:
    """
    Decode the YYMMDD prefix of an ID number into a YYYY-MM-DD string.

    Two-digit years up to the pivot resolve into the reference year's century,
    the rest into the previous one. reference_year defaults to the current
    calendar year, read once per call.

    Returns None for anything that is not 13 characters long, a prefix that is
    not six digits, or a date that does not exist on the calendar. Never raises.
    """
    if not id_number or len(id_number) != ID_NUMBER_LENGTH:
        return None

    prefix = id_number[:6]
    if not _BIRTH_DATE_PATTERN.fullmatch(prefix):
        return None

    year_digits = int(prefix[0:2])
    month = int(prefix[2:4])
    day = int(prefix[4:6])

    if month < 1 or month > 12 or day < 1 or day > 31:
        return None

    if reference_year is None:
        reference_year = current_year()
    full_year = resolve_century(year_digits, reference_year, century_pivot)

    # date() rejects day 31 in 30-day months, Feb 30 and Feb 29 outside leap years
    birth_date = build_date(full_year, month, day)
    if birth_date is None:
        return None

    return f"{full_year:04d}-{month:02d}-{day:02d}"


def extract_gender(id_number: Optional[str]) -> Optional[str]:
    """Digit at index 6: 0-4 is female ("F"), 5-9 is male ("M")"""
    if not id_number or len(id_number) != ID_NUMBER_LENGTH:
        return None

    gender_digit = id_number[6]
    if gender_digit not in _DIGITS:
        return None

    return "F" if int(gender_digit) < 5 else "M"


def validate_id_number(id_number: Optional[str]) -> bool:
    """
    Check shape and Luhn check digit.

    The first 12 digits are scanned right to left starting at index 11, doubling
    every second digit beginning with index 10. Doubled values above 9 are
    reduced to the sum of their digits. The expected check digit is
    (10 - sum % 10) % 10 and must equal the 13th digit.
    """
    if not id_number or not _ID_NUMBER_PATTERN.fullmatch(id_number):
        return False

    total = 0
    double_next = False
    for i in range(len(id_number) - 2, -1, -1):
        digit = int(id_number[i])
        if double_next:
            digit *= 2
            if digit > 9:
                digit = (digit % 10) + (digit // 10)
        total += digit
        double_next = not double_next

    check_digit = (10 - (total % 10)) % 10
    return check_digit == int(id_number[-1])


def parse_id_number(
    id_number: Optional[str],
    reference_year: Optional[int] = None,
    century_pivot: int = 30,
) -> IdentityDetails:
    """Run every extraction once and bundle the results for intake and fraud-check screens"""
    return IdentityDetails(
        id_number=id_number or "",
        valid=validate_id_number(id_number),
        date_of_birth=extract_date_of_birth(id_number, reference_year, century_pivot),
        gender=extract_gender(id_number),
    )
