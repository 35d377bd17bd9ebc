"""POST /v1/affordability/* - minimum norms and affordability assessment endpoints"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from origination_gateway.api.v1.schemas import (
    AssessmentRequest,
    AssessmentResponse,
    CalculationSchema,
    MinimumExpensesRequest,
    MinimumExpensesResponse,
    MinimumNormsSchema,
)
from origination_gateway.api.dependencies import get_request_id
from origination_gateway.infrastructure.database.session import get_db
from origination_gateway.infrastructure.database.repositories import AssessmentRepository
from origination_gateway.domain.affordability import (
    assess_affordability,
    calculate_minimum_expenses,
    find_income_band,
    format_affordability_calculation,
)
from origination_gateway.domain.models import AffordabilityData, AffordabilityItem
from origination_gateway.infrastructure.observability.metrics import record_assessment, record_minimum_norms
from origination_gateway.infrastructure.observability.logging import log_assessment

router = APIRouter()


def to_affordability_data(request_body: AssessmentRequest) -> AffordabilityData | None:
    """Convert validated request lines into domain affordability data"""
    if request_body.affordability is None:
        return None

    def items(lines):
        return [AffordabilityItem(type=line.type, amount=line.amount) for line in lines]

    return AffordabilityData(
        income=items(request_body.affordability.income),
        expenses=items(request_body.affordability.expenses),
        deductions=items(request_body.affordability.deductions),
    )


@router.post("/affordability/minimum-expenses", response_model=MinimumExpensesResponse)
def get_minimum_expenses(request_body: MinimumExpensesRequest):
    """Look up the NCA minimum living expenses for a gross monthly income"""
    band = find_income_band(request_body.gross_income)
    minimum_expenses = calculate_minimum_expenses(request_body.gross_income)

    record_minimum_norms(band.label)

    return MinimumExpensesResponse(
        gross_income=request_body.gross_income,
        income_band=band.label,
        norms=MinimumNormsSchema(
            fixed_factor=band.norms.fixed_factor,
            percentage_above=band.norms.percentage_above,
            threshold=band.norms.threshold,
        ),
        minimum_expenses=minimum_expenses,
    )


@router.post("/affordability/assessment", response_model=AssessmentResponse)
def create_assessment(
    request_body: AssessmentRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Assess an application's affordability against the minimum norms.

    Flow:
    1. Total declared income, deductions and expenses
    2. Look up minimum living expenses for the gross income band
    3. Flag expenses below the norms and compute the surplus
    4. Format display figures
    5. Persist the assessment and return it
    """
    start_time = time.time()
    request_id = get_request_id(request)

    affordability_data = to_affordability_data(request_body)
    assessment = assess_affordability(request_body.monthly_income, affordability_data)
    calculation = assessment.calculation

    try:
        formatted = format_affordability_calculation(calculation)
        formatted.pop("raw")

        repo = AssessmentRepository(db)
        record = repo.create_assessment(
            application_id=request_body.application_id,
            assessment=assessment,
            affordability_data=affordability_data,
        )
        db.commit()

    except Exception as e:
        db.rollback()
        logging.error(f"Failed to store assessment: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_assessment(assessment.income_band.label, assessment.expenses_below_norms, assessment.surplus)
    log_assessment(
        request_id,
        request_body.application_id,
        assessment.income_band.label,
        assessment.surplus,
        assessment.expenses_below_norms,
        duration_ms,
    )

    return AssessmentResponse(
        assessment_id=str(record.id),
        application_id=request_body.application_id,
        calculation=CalculationSchema(**vars(calculation)),
        income_band=assessment.income_band.label,
        minimum_expenses=assessment.minimum_expenses,
        surplus=assessment.surplus,
        expenses_below_norms=assessment.expenses_below_norms,
        expenses_unrealistic=assessment.expenses_unrealistic,
        disposable_status=assessment.disposable_status,
        formatted=formatted,
        created_at=record.created_at.isoformat() if record.created_at else None,
    )
