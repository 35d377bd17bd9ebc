"""POST /v1/loans/* - payday loan quote, balance and settlement endpoints"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from origination_gateway.api.v1.schemas import (
    LoanBalanceRequest,
    LoanBalanceResponse,
    LoanQuoteRequest,
    LoanQuoteResponse,
    LoanSettlementResponse,
)
from origination_gateway.api.dependencies import get_request_id, get_settings
from origination_gateway.config import Settings
from origination_gateway.domain.loan_calculator import PaydayLoanCalculator
from origination_gateway.domain.exceptions import InvalidLoanTermsError
from origination_gateway.infrastructure.observability.metrics import loan_quote_counter
from origination_gateway.infrastructure.observability.logging import log_loan_quote

router = APIRouter()


def build_calculator(request_body: LoanQuoteRequest, settings: Settings) -> PaydayLoanCalculator:
    rate = request_body.annual_interest_rate
    if rate is None:
        rate = settings.default_annual_interest_rate
    return PaydayLoanCalculator(
        principal=request_body.principal,
        term_in_days=request_body.term_in_days,
        loan_start_date=request_body.loan_start_date,
        annual_interest_rate=rate,
        late_payment_fee=request_body.late_payment_fee,
    )


@router.post("/loans/quote", response_model=LoanQuoteResponse)
def quote_loan(
    request_body: LoanQuoteRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """Price a loan over its full term"""
    calculator = build_calculator(request_body, settings)
    total = calculator.total_repayment()

    loan_quote_counter.inc()
    log_loan_quote(get_request_id(request), request_body.principal, request_body.term_in_days, total)

    return LoanQuoteResponse(
        principal=calculator.principal,
        term_in_days=calculator.term_in_days,
        initiation_fee=calculator.initiation_fee(),
        service_fee=calculator.service_fee(calculator.term_in_days),
        interest=calculator.interest(calculator.term_in_days),
        total_repayment=total,
        number_of_payments=calculator.number_of_payments(),
        monthly_repayment=calculator.monthly_repayment(),
        total_with_late_fee=calculator.total_with_late_fee(),
    )


@router.post("/loans/balance", response_model=LoanBalanceResponse)
def get_loan_balance(
    request_body: LoanBalanceRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """Outstanding amount and next instalment as of a date"""
    calculator = build_calculator(request_body, settings)

    try:
        outstanding = calculator.outstanding_amount(request_body.as_of, request_body.previous_payments)
        next_payment = calculator.next_payment_amount(request_body.as_of, request_body.previous_payments)
    except InvalidLoanTermsError as e:
        logging.warning(f"Invalid loan terms: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return LoanBalanceResponse(
        as_of=request_body.as_of,
        outstanding_amount=outstanding,
        next_payment_amount=next_payment,
    )


@router.post("/loans/settlement", response_model=LoanSettlementResponse)
def get_settlement_amount(
    request_body: LoanBalanceRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """Early settlement amount, with fees and interest pro-rated to the days held"""
    calculator = build_calculator(request_body, settings)

    try:
        amount = calculator.early_settlement_amount(request_body.as_of, request_body.previous_payments)
    except InvalidLoanTermsError as e:
        logging.warning(f"Invalid loan terms: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return LoanSettlementResponse(settlement_date=request_body.as_of, settlement_amount=amount)
