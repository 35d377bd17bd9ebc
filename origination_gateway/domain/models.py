"""Domain models - pure Python dataclasses representing applicant and policy data"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class IdentityDetails:
    """Everything derivable from a single SA ID number"""

    id_number: str
    valid: bool
    date_of_birth: Optional[str]  # YYYY-MM-DD
    gender: Optional[str]  # "M" or "F"


@dataclass(frozen=True)
class MinimumNorms:
    """NCA minimum living expense formula for one income band"""

    fixed_factor: float
    percentage_above: float
    threshold: float


@dataclass(frozen=True)
class IncomeBand:
    """Gross monthly income range; upper_limit is inclusive, None means unbounded"""

    label: str
    upper_limit: Optional[float]
    norms: MinimumNorms


@dataclass
class AffordabilityItem:
    """Single declared income, expense or deduction line"""

    type: str
    amount: Optional[float]


@dataclass
class AffordabilityData:
    """Declared affordability lines captured on a loan application"""

    income: List[AffordabilityItem] = field(default_factory=list)
    expenses: List[AffordabilityItem] = field(default_factory=list)
    deductions: List[AffordabilityItem] = field(default_factory=list)


@dataclass
class AffordabilityCalculation:
    """Net and disposable income derived from declared figures"""

    monthly_income: float
    additional_income: float
    total_gross_income: float
    total_deductions: float
    total_expenses: float
    net_income: float
    disposable_income: float


@dataclass
class AffordabilityAssessment:
    """Output of an affordability check against the minimum norms"""

    calculation: AffordabilityCalculation
    income_band: IncomeBand
    minimum_expenses: float
    surplus: float
    expenses_below_norms: bool
    expenses_unrealistic: bool
    disposable_status: str


@dataclass(frozen=True)
class RateEntry:
    """One row of a funeral cover rate table; rate is the premium per R1000 of cover"""

    benefit_option: str
    age_band: str  # e.g. "(18 - 65)"
    rate: float


@dataclass(frozen=True)
class RateBand:
    """Parsed age band with inclusive bounds"""

    min_age: int
    max_age: int
    rate: float


@dataclass
class FamilyMember:
    """Additional person on a funeral policy; age is only needed for extended family"""

    relationship: str  # spouse | child | extended
    age: Optional[int] = None


@dataclass
class MemberPremium:
    relationship: str
    age: int
    cover_amount: float
    premium: float


@dataclass
class FuneralPremium:
    """Monthly funeral cover premium with a per-member breakdown"""

    main_policy_premium: float
    extended_family_premium: float
    total_premium: float
    benefit_option: str
    main_member: MemberPremium
    immediate_family: List[MemberPremium] = field(default_factory=list)
    extended_family: List[MemberPremium] = field(default_factory=list)
