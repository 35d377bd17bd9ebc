"""Payday loan pricing: fees, interest, repayments and settlement"""

import math
from datetime import date

from origination_gateway.domain.exceptions import InvalidLoanTermsError
from origination_gateway.utils.date_utils import days_between


class PaydayLoanCalculator:
    """
    Pricing for a single short-term loan.

    Fees:
    - Initiation: R165 plus 10% of the principal above R1000, always charged in full
    - Service: R65 per 30 days, pro-rated by day
    - Interest: simple daily interest at annual_interest_rate / 365
    """

    INITIATION_FEE_BASE = 165
    INITIATION_FEE_THRESHOLD = 1000
    INITIATION_FEE_PERCENTAGE = 0.1
    MONTHLY_SERVICE_FEE = 65
    DAYS_IN_YEAR = 365
    DAYS_IN_MONTH_FOR_FEE = 30

    def __init__(
        self,
        principal: float,
        term_in_days: int,
        loan_start_date: date,
        annual_interest_rate: float = 0.05,
        late_payment_fee: float = 0.0,
    ):
        self.principal = principal
        self.term_in_days = term_in_days
        self.loan_start_date = loan_start_date
        self.annual_interest_rate = annual_interest_rate
        self.late_payment_fee = late_payment_fee

    def initiation_fee(self) -> float:
        additional_fee = 0.0
        if self.principal > self.INITIATION_FEE_THRESHOLD:
            additional_fee = (self.principal - self.INITIATION_FEE_THRESHOLD) * self.INITIATION_FEE_PERCENTAGE
        return self.INITIATION_FEE_BASE + additional_fee

    def service_fee(self, days: int) -> float:
        return days / self.DAYS_IN_MONTH_FOR_FEE * self.MONTHLY_SERVICE_FEE

    def interest(self, days: int) -> float:
        daily_rate = self.annual_interest_rate / self.DAYS_IN_YEAR
        return self.principal * daily_rate * days

    def _amount_due(self, days: int) -> float:
        return self.principal + self.initiation_fee() + self.service_fee(days) + self.interest(days)

    def _check_inputs(self, on_date: date, previous_payments: float) -> None:
        if on_date < self.loan_start_date:
            raise InvalidLoanTermsError("Date cannot be before the loan start date")
        if previous_payments < 0:
            raise InvalidLoanTermsError("Previous payments cannot be negative")

    def total_repayment(self) -> float:
        """Principal plus every fee and the full term's interest"""
        return self._amount_due(self.term_in_days)

    def number_of_payments(self) -> int:
        """One payment per started 30-day period"""
        return math.ceil(self.term_in_days / self.DAYS_IN_MONTH_FOR_FEE)

    def monthly_repayment(self) -> float:
        total = self.total_repayment()
        payments = self.number_of_payments()
        if payments == 0:
            return total
        return total / payments

    def total_with_late_fee(self) -> float:
        return self.total_repayment() + self.late_payment_fee

    def early_settlement_amount(self, settlement_date: date, previous_payments: float = 0) -> float:
        """
        Amount to close the loan before maturity.

        Service fee and interest are pro-rated to the days held; the initiation
        fee is not.

        Raises:
            InvalidLoanTermsError: settlement before the start date, negative
                previous payments, or a settlement date after maturity
        """
        self._check_inputs(settlement_date, previous_payments)

        days_held = days_between(self.loan_start_date, settlement_date)
        if days_held > self.term_in_days:
            raise InvalidLoanTermsError(
                "Settlement date is after the loan maturity, use the total repayment instead"
            )

        return max(0.0, self._amount_due(days_held) - previous_payments)

    def outstanding_amount(self, as_of: date, previous_payments: float = 0) -> float:
        """Amount still owed on a date; accrual stops at maturity"""
        self._check_inputs(as_of, previous_payments)

        days_active = days_between(self.loan_start_date, as_of)
        effective_days = min(days_active, self.term_in_days)

        return max(0.0, self._amount_due(effective_days) - previous_payments)

    def next_payment_amount(self, as_of: date, previous_payments: float = 0) -> float:
        """
        Next instalment: the outstanding amount spread over the remaining
        30-day periods, or all of it once the term has elapsed.
        """
        outstanding = self.outstanding_amount(as_of, previous_payments)
        if outstanding == 0:
            return 0.0

        days_elapsed = days_between(self.loan_start_date, as_of)
        days_remaining = max(0, self.term_in_days - days_elapsed)
        if days_remaining == 0:
            return outstanding

        remaining_periods = math.ceil(days_remaining / self.DAYS_IN_MONTH_FOR_FEE)
        return outstanding / remaining_periods
