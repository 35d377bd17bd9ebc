"""GET /v1/affordability/assessments/{id} and /v1/affordability/history - stored assessments"""

import uuid
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from origination_gateway.api.v1.schemas import (
    AssessmentHistoryItem,
    AssessmentHistoryResponse,
    AssessmentResponse,
    CalculationSchema,
)
from origination_gateway.api.dependencies import get_settings
from origination_gateway.config import Settings
from origination_gateway.domain.affordability import format_affordability_calculation
from origination_gateway.domain.models import AffordabilityCalculation
from origination_gateway.infrastructure.database.session import get_db
from origination_gateway.infrastructure.database.repositories import AssessmentRepository

router = APIRouter()


@router.get("/affordability/assessments/{assessment_id}", response_model=AssessmentResponse)
def get_assessment(assessment_id: str, db: Session = Depends(get_db)):
    """Retrieve a stored affordability assessment"""
    try:
        assessment_uuid = uuid.UUID(assessment_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid assessment ID format")

    repo = AssessmentRepository(db)
    record = repo.get_assessment_by_id(assessment_uuid)

    if not record:
        raise HTTPException(status_code=404, detail="Assessment not found")

    calculation = AffordabilityCalculation(
        monthly_income=record.monthly_income,
        additional_income=record.additional_income,
        total_gross_income=record.total_gross_income,
        total_deductions=record.total_deductions,
        total_expenses=record.total_expenses,
        net_income=record.net_income,
        disposable_income=record.disposable_income,
    )
    formatted = format_affordability_calculation(calculation)
    formatted.pop("raw")

    return AssessmentResponse(
        assessment_id=str(record.id),
        application_id=record.application_id,
        calculation=CalculationSchema(**vars(calculation)),
        income_band=record.income_band,
        minimum_expenses=record.minimum_expenses,
        surplus=record.surplus,
        expenses_below_norms=record.expenses_below_norms,
        expenses_unrealistic=record.expenses_unrealistic,
        disposable_status=record.disposable_status,
        formatted=formatted,
        created_at=record.created_at.isoformat(),
    )


@router.get("/affordability/history", response_model=AssessmentHistoryResponse)
def get_assessment_history(
    application_id: str = Query(..., min_length=1, description="Loan application identifier"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Retrieve recent affordability assessments for an application.

    Returns:
        Assessments newest first, at most history_limit of them
    """
    repo = AssessmentRepository(db)
    records = repo.get_assessments_by_application(application_id, limit=settings.history_limit)

    history_items = [
        AssessmentHistoryItem(
            assessment_id=str(r.id),
            total_gross_income=r.total_gross_income,
            disposable_income=r.disposable_income,
            minimum_expenses=r.minimum_expenses,
            surplus=r.surplus,
            expenses_below_norms=r.expenses_below_norms,
            created_at=r.created_at.isoformat(),
        )
        for r in records
    ]

    return AssessmentHistoryResponse(application_id=application_id, assessments=history_items)
