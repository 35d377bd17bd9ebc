"""Unit tests for funeral cover premiums"""

import pytest
from origination_gateway.domain.funeral_cover import (
    EXTENDED_FAMILY,
    MAIN_MEMBER_2_SPOUSES_AND_CHILDREN,
    MAIN_MEMBER_AND_2_SPOUSES,
    MAIN_MEMBER_AND_CHILDREN,
    MAIN_MEMBER_AND_SPOUSE,
    MAIN_MEMBER_ONLY,
    MAIN_MEMBER_SPOUSE_AND_CHILDREN,
    FuneralCoverCalculator,
    determine_benefit_option,
    parse_age_band,
)
from origination_gateway.domain.exceptions import InvalidCoverRequestError, RateNotFoundError
from origination_gateway.domain.models import FamilyMember, RateEntry

COVER = 50000


@pytest.fixture
def calculator():
    return FuneralCoverCalculator()


def spouse():
    return FamilyMember("spouse")


def child():
    return FamilyMember("child")


def extended(age=None):
    return FamilyMember("extended", age)


@pytest.mark.parametrize(
    "age_band,expected",
    [
        ("(18 - 65)", (18, 65)),
        ("(0 - 17)", (0, 17)),
        ("96-100", (96, 100)),
    ],
)
def test_parse_age_band(age_band, expected):
    assert parse_age_band(age_band) == expected


def test_parse_age_band_rejects_malformed():
    with pytest.raises(ValueError):
        parse_age_band("18 to 65")


@pytest.mark.parametrize(
    "spouse_count,has_children,expected",
    [
        (0, False, MAIN_MEMBER_ONLY),
        (1, False, MAIN_MEMBER_AND_SPOUSE),
        (0, True, MAIN_MEMBER_AND_CHILDREN),
        (1, True, MAIN_MEMBER_SPOUSE_AND_CHILDREN),
        (2, False, MAIN_MEMBER_AND_2_SPOUSES),
        (2, True, MAIN_MEMBER_2_SPOUSES_AND_CHILDREN),
    ],
)
def test_determine_benefit_option(spouse_count, has_children, expected):
    assert determine_benefit_option(spouse_count, has_children) == expected


def test_main_member_only(calculator):
    premium = calculator.calculate_total_premium(35, COVER)

    assert premium.benefit_option == MAIN_MEMBER_ONLY
    assert premium.total_premium == pytest.approx(90.0)
    assert premium.extended_family_premium == 0
    assert premium.main_member.premium == pytest.approx(90.0)
    assert premium.main_member.cover_amount == COVER
    assert premium.immediate_family == []


def test_main_member_and_spouse(calculator):
    premium = calculator.calculate_total_premium(35, COVER, [spouse()])

    assert premium.benefit_option == MAIN_MEMBER_AND_SPOUSE
    assert premium.total_premium == pytest.approx(143.5)


def test_children_ages_do_not_affect_pricing(calculator):
    """Spouse and children ride on the main policy rate whatever their ages"""
    without_ages = calculator.calculate_total_premium(35, COVER, [spouse(), child(), child(), child()])
    with_ages = calculator.calculate_total_premium(
        35, COVER, [spouse(), FamilyMember("child", 2), FamilyMember("child", 9), FamilyMember("child", 16)]
    )

    assert without_ages.benefit_option == MAIN_MEMBER_SPOUSE_AND_CHILDREN
    assert without_ages.total_premium == pytest.approx(215.5)
    assert with_ages.total_premium == without_ages.total_premium
    assert len(without_ages.immediate_family) == 4
    assert all(m.premium == 0 and m.cover_amount == COVER for m in without_ages.immediate_family)
    assert without_ages.immediate_family[0].age == 0


def test_extended_family_priced_by_age(calculator):
    premium = calculator.calculate_total_premium(35, COVER, [spouse(), child(), extended(15), extended(70)])

    assert premium.main_policy_premium == pytest.approx(215.5)
    assert premium.extended_family_premium == pytest.approx(20.0 + 320.5)
    assert premium.total_premium == pytest.approx(556.0)
    assert [(m.age, m.premium) for m in premium.extended_family] == [
        (15, pytest.approx(20.0)),
        (70, pytest.approx(320.5)),
    ]


def test_full_family_with_elderly_extended_member(calculator):
    premium = calculator.calculate_total_premium(35, COVER, [spouse(), child(), child(), extended(70)])

    assert premium.main_policy_premium == pytest.approx(215.5)
    assert premium.extended_family_premium == pytest.approx(320.5)
    assert premium.total_premium == pytest.approx(536.0)


def test_two_spouses(calculator):
    assert calculator.calculate_total_premium(40, COVER, [spouse(), spouse()]).total_premium == pytest.approx(230.0)

    with_child = calculator.calculate_total_premium(40, COVER, [spouse(), spouse(), child()])
    assert with_child.benefit_option == MAIN_MEMBER_2_SPOUSES_AND_CHILDREN
    assert with_child.total_premium == pytest.approx(345.0)


def test_main_member_age_band_edges(calculator):
    assert calculator.calculate_total_premium(65, COVER).total_premium == pytest.approx(90.0)
    assert calculator.calculate_total_premium(66, COVER).total_premium == pytest.approx(246.5)


def test_six_children_allowed(calculator):
    premium = calculator.calculate_total_premium(35, COVER, [child() for _ in range(6)])

    assert premium.benefit_option == MAIN_MEMBER_AND_CHILDREN
    assert premium.total_premium == pytest.approx(135.0)


def test_seventh_child_rejected(calculator):
    with pytest.raises(InvalidCoverRequestError, match="Maximum of 6 children"):
        calculator.calculate_total_premium(35, COVER, [child() for _ in range(7)])


def test_extended_family_requires_age(calculator):
    with pytest.raises(InvalidCoverRequestError, match="Age is required"):
        calculator.calculate_total_premium(35, COVER, [extended()])


def test_age_outside_rate_table(calculator):
    with pytest.raises(RateNotFoundError):
        calculator.calculate_total_premium(17, COVER)

    with pytest.raises(RateNotFoundError):
        calculator.calculate_total_premium(35, COVER, [extended(101)])


def test_custom_rate_table_keys_are_normalized():
    calculator = FuneralCoverCalculator(
        [
            RateEntry('"Main Member\nOnly"', "(66 - 75)", 5.75),
            RateEntry("Main Member Only ", "(18 - 65)", 2.10),
            RateEntry(EXTENDED_FAMILY, "(0 - 17)", 0.47),
        ]
    )

    assert [band.min_age for band in calculator.rates[MAIN_MEMBER_ONLY]] == [18, 66]
    assert calculator.find_rate(MAIN_MEMBER_ONLY, 30) == 2.10
    assert calculator.find_rate('"Main Member Only"', 70) == 5.75
    assert calculator.calculate_total_premium(35, COVER).total_premium == pytest.approx(105.0)


def test_missing_benefit_option_in_custom_table():
    calculator = FuneralCoverCalculator([RateEntry(MAIN_MEMBER_ONLY, "(18 - 65)", 2.10)])

    with pytest.raises(RateNotFoundError, match="Benefit option not found"):
        calculator.calculate_total_premium(35, COVER, [spouse()])
