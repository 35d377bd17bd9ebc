"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field, field_validator
from datetime import date
from typing import Dict, List, Literal, Optional, Union

# Upper bound on any single Rand figure; keeps totals finite
MAX_RAND_AMOUNT = 1e12


class IdVerificationRequest(BaseModel):
    """Request body for POST /v1/id-number/verify"""

    id_number: Union[str, int] = Field(..., description="Candidate 13-digit SA ID number")

    @field_validator("id_number")
    @classmethod
    def id_number_as_text(cls, v: Union[str, int]) -> str:
        # Numeric JSON IDs lose leading zeros, so only the digits sent are checked
        return str(v)


class IdVerificationResponse(BaseModel):
    """Response for POST /v1/id-number/verify"""

    id_number: str
    valid: bool
    date_of_birth: Optional[str] = None
    gender: Optional[Literal["M", "F"]] = None


class MinimumExpensesRequest(BaseModel):
    """Request body for POST /v1/affordability/minimum-expenses"""

    gross_income: float = Field(..., ge=0, le=MAX_RAND_AMOUNT, allow_inf_nan=False, description="Gross monthly income in Rand")


class MinimumNormsSchema(BaseModel):
    fixed_factor: float
    percentage_above: float
    threshold: float


class MinimumExpensesResponse(BaseModel):
    """Response for POST /v1/affordability/minimum-expenses"""

    gross_income: float
    income_band: str
    norms: MinimumNormsSchema
    minimum_expenses: float


class AffordabilityItemSchema(BaseModel):
    """Single declared income, expense or deduction line"""

    type: str = Field(..., min_length=1)
    amount: Optional[float] = Field(default=0, ge=0, le=MAX_RAND_AMOUNT, allow_inf_nan=False)


class AffordabilityDataSchema(BaseModel):
    income: List[AffordabilityItemSchema] = Field(default_factory=list)
    expenses: List[AffordabilityItemSchema] = Field(default_factory=list)
    deductions: List[AffordabilityItemSchema] = Field(default_factory=list)


class AssessmentRequest(BaseModel):
    """Request body for POST /v1/affordability/assessment"""

    application_id: str = Field(..., min_length=1, description="Loan application identifier")
    monthly_income: float = Field(..., ge=0, le=MAX_RAND_AMOUNT, allow_inf_nan=False, description="Gross monthly salary in Rand")
    affordability: Optional[AffordabilityDataSchema] = None


class CalculationSchema(BaseModel):
    monthly_income: float
    additional_income: float
    total_gross_income: float
    total_deductions: float
    total_expenses: float
    net_income: float
    disposable_income: float


class AssessmentResponse(BaseModel):
    """Response for POST /v1/affordability/assessment and GET /v1/affordability/assessments/{id}"""

    assessment_id: str
    application_id: str
    calculation: CalculationSchema
    income_band: str
    minimum_expenses: float
    surplus: float
    expenses_below_norms: bool
    expenses_unrealistic: bool
    disposable_status: Literal["negative", "low", "moderate", "healthy"]
    formatted: Dict[str, str] = Field(default_factory=dict)
    created_at: Optional[str] = None


class AssessmentHistoryItem(BaseModel):
    """Single assessment in history"""

    assessment_id: str
    total_gross_income: float
    disposable_income: float
    minimum_expenses: float
    surplus: float
    expenses_below_norms: bool
    created_at: str


class AssessmentHistoryResponse(BaseModel):
    """Response for GET /v1/affordability/history"""

    application_id: str
    assessments: List[AssessmentHistoryItem]


class LoanQuoteRequest(BaseModel):
    """Request body for POST /v1/loans/quote"""

    principal: float = Field(..., gt=0, allow_inf_nan=False, description="Loan amount in Rand")
    term_in_days: int = Field(..., gt=0, le=366)
    loan_start_date: date
    annual_interest_rate: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    late_payment_fee: float = Field(default=0, ge=0, allow_inf_nan=False)


class LoanQuoteResponse(BaseModel):
    """Response for POST /v1/loans/quote"""

    principal: float
    term_in_days: int
    initiation_fee: float
    service_fee: float
    interest: float
    total_repayment: float
    number_of_payments: int
    monthly_repayment: float
    total_with_late_fee: float


class LoanBalanceRequest(LoanQuoteRequest):
    """Request body for POST /v1/loans/balance and POST /v1/loans/settlement"""

    as_of: date
    previous_payments: float = Field(default=0, allow_inf_nan=False)


class LoanBalanceResponse(BaseModel):
    """Response for POST /v1/loans/balance"""

    as_of: date
    outstanding_amount: float
    next_payment_amount: float


class LoanSettlementResponse(BaseModel):
    """Response for POST /v1/loans/settlement"""

    settlement_date: date
    settlement_amount: float


class FamilyMemberSchema(BaseModel):
    """Spouse, child or extended family member on a funeral policy"""

    relationship: Literal["spouse", "child", "extended"]
    age: Optional[int] = Field(default=None, ge=0, le=100, description="Required for extended family")


class FuneralPremiumRequest(BaseModel):
    """Request body for POST /v1/insurance/funeral/premium"""

    main_member_age: int = Field(..., ge=18, le=100)
    cover_amount: float = Field(..., ge=10000, le=500000, description="Cover per member in Rand")
    additional_members: List[FamilyMemberSchema] = Field(default_factory=list)


class MemberPremiumSchema(BaseModel):
    relationship: str
    age: int
    cover_amount: float
    premium: float


class FuneralPremiumResponse(BaseModel):
    """Response for POST /v1/insurance/funeral/premium"""

    benefit_option: str
    main_policy_premium: float
    extended_family_premium: float
    total_premium: float
    main_member: MemberPremiumSchema
    immediate_family: List[MemberPremiumSchema]
    extended_family: List[MemberPremiumSchema]
