"""
Funeral cover premium calculator.

Premiums come from a rate table quoted per R1000 of cover, by benefit option
and age band. The main policy rate is chosen from the family composition
(spouses, children) and the main member's age; spouses and children are
included in that premium. Extended family members are priced one by one on
their own age.
"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from origination_gateway.domain.exceptions import InvalidCoverRequestError, RateNotFoundError
from origination_gateway.domain.models import (
    FamilyMember,
    FuneralPremium,
    MemberPremium,
    RateBand,
    RateEntry,
)

MAIN_MEMBER_ONLY = "Main Member Only"
MAIN_MEMBER_AND_SPOUSE = "Main Member and Spouse"
MAIN_MEMBER_AND_CHILDREN = "Main Member and up to 6 Children"
MAIN_MEMBER_SPOUSE_AND_CHILDREN = "Main Member, Spouse and up to 6 Children"
MAIN_MEMBER_AND_2_SPOUSES = "Main Member and 2 Spouses"
MAIN_MEMBER_2_SPOUSES_AND_CHILDREN = "Main Member, 2 Spouses and up to 6 Children"
EXTENDED_FAMILY = "Extended family"

MAX_CHILDREN = 6

AGE_BAND_PATTERN = re.compile(r"(\d+)\s*-\s*(\d+)")

_ADULT_AGE_BANDS = ("(18 - 65)", "(66 - 75)", "(76 - 80)", "(81 - 85)", "(86 - 90)", "(91 - 95)", "(96 - 100)")


def _rows(benefit_option: str, rates: Sequence[float], age_bands: Sequence[str] = _ADULT_AGE_BANDS) -> Tuple[RateEntry, ...]:
    return tuple(RateEntry(benefit_option, age_band, rate) for age_band, rate in zip(age_bands, rates))


FUNERAL_RATE_TABLE: Tuple[RateEntry, ...] = (
    _rows(MAIN_MEMBER_ONLY, (1.8, 4.93, 12.06, 17.71, 25.8, 36.73, 49.57))
    + _rows(MAIN_MEMBER_AND_SPOUSE, (2.87, 7.9, 19.29, 28.34, 41.27, 58.77, 79.3))
    + _rows(MAIN_MEMBER_AND_CHILDREN, (2.7, 7.4, 18.09, 26.57, 38.7, 55.1, 74.34))
    + _rows(MAIN_MEMBER_SPOUSE_AND_CHILDREN, (4.31, 11.84, 28.93, 42.51, 61.91, 88.16, 118.96))
    + _rows(MAIN_MEMBER_AND_2_SPOUSES, (4.6, 12.63, 30.86, 45.36, 66.04, 94.03, 126.89))
    + _rows(MAIN_MEMBER_2_SPOUSES_AND_CHILDREN, (6.9, 18.94, 46.3, 68.03, 99.07, 141.04, 190.33))
    + _rows(
        EXTENDED_FAMILY,
        (0.4, 1.97, 6.41, 16.87, 26.57, 38.7, 55.1, 74.34),
        age_bands=("(0 - 17)",) + _ADULT_AGE_BANDS,
    )
)


def normalize_benefit_option(benefit_option: str) -> str:
    """Strip quotes and line breaks carried over from spreadsheet exports"""
    return benefit_option.replace('"', "").replace("\n", " ").strip()


def parse_age_band(age_band: str) -> Tuple[int, int]:
    """
    Parse an age band such as "(18 - 65)" into inclusive (min_age, max_age).

    Raises:
        ValueError: no "<min> - <max>" pair in the string
    """
    match = AGE_BAND_PATTERN.search(age_band)
    if match is None:
        raise ValueError(f"Invalid age band format: {age_band}")
    return int(match.group(1)), int(match.group(2))


def determine_benefit_option(spouse_count: int, has_children: bool) -> str:
    """Pick the main policy benefit option for a family composition"""
    if spouse_count > 1:
        return MAIN_MEMBER_2_SPOUSES_AND_CHILDREN if has_children else MAIN_MEMBER_AND_2_SPOUSES
    if spouse_count == 1:
        return MAIN_MEMBER_SPOUSE_AND_CHILDREN if has_children else MAIN_MEMBER_AND_SPOUSE
    if has_children:
        return MAIN_MEMBER_AND_CHILDREN
    return MAIN_MEMBER_ONLY


def premium_for_cover(cover_amount: float, rate: float) -> float:
    """Premium = cover / 1000 * rate per R1000"""
    return cover_amount / 1000 * rate


def to_cents(amount: float) -> float:
    return float(Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class FuneralCoverCalculator:
    """Monthly premiums for a main member plus immediate and extended family"""

    def __init__(self, rate_table: Iterable[RateEntry] = FUNERAL_RATE_TABLE):
        self.rates: Dict[str, List[RateBand]] = {}
        for entry in rate_table:
            min_age, max_age = parse_age_band(entry.age_band)
            key = normalize_benefit_option(entry.benefit_option)
            self.rates.setdefault(key, []).append(RateBand(min_age, max_age, entry.rate))

        for bands in self.rates.values():
            bands.sort(key=lambda band: band.min_age)

    def find_rate(self, benefit_option: str, age: int) -> float:
        """
        Rate per R1000 for a benefit option at an age (band bounds inclusive).

        Raises:
            RateNotFoundError: unknown benefit option or no band covers the age
        """
        bands = self.rates.get(normalize_benefit_option(benefit_option))
        if bands is None:
            raise RateNotFoundError(f'Benefit option not found: "{benefit_option}"')

        for band in bands:
            if band.min_age <= age <= band.max_age:
                return band.rate

        raise RateNotFoundError(f'No applicable age band found for age {age} under option "{benefit_option}"')

    def calculate_total_premium(
        self,
        main_member_age: int,
        cover_amount: float,
        additional_members: Optional[List[FamilyMember]] = None,
    ) -> FuneralPremium:
        """
        Price a policy. Every member gets the same cover amount.

        Raises:
            InvalidCoverRequestError: more than six children, or an extended
                family member without an age
            RateNotFoundError: an age falls outside the rate table
        """
        members = additional_members or []
        spouses = [m for m in members if m.relationship == "spouse"]
        children = [m for m in members if m.relationship == "child"]
        extended = [m for m in members if m.relationship == "extended"]

        if len(children) > MAX_CHILDREN:
            raise InvalidCoverRequestError(
                f"Maximum of {MAX_CHILDREN} children can be covered under the main policy"
            )
        if any(m.age is None for m in extended):
            raise InvalidCoverRequestError("Age is required for all extended family members")

        benefit_option = determine_benefit_option(len(spouses), bool(children))
        main_policy_premium = premium_for_cover(cover_amount, self.find_rate(benefit_option, main_member_age))

        # Spouses and children are priced into the main policy
        immediate_family = [
            MemberPremium(m.relationship, m.age or 0, cover_amount, 0.0) for m in spouses + children
        ]

        extended_family = []
        extended_family_premium = 0.0
        for member in extended:
            premium = premium_for_cover(cover_amount, self.find_rate(EXTENDED_FAMILY, member.age))
            extended_family_premium += premium
            extended_family.append(MemberPremium("extended", member.age, cover_amount, to_cents(premium)))

        return FuneralPremium(
            main_policy_premium=to_cents(main_policy_premium),
            extended_family_premium=to_cents(extended_family_premium),
            total_premium=to_cents(main_policy_premium + extended_family_premium),
            benefit_option=benefit_option,
            main_member=MemberPremium("main", main_member_age, cover_amount, to_cents(main_policy_premium)),
            immediate_family=immediate_family,
            extended_family=extended_family,
        )
