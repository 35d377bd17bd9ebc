"""Data access layer for affordability assessments"""

import uuid
from dataclasses import asdict
from typing import List, Optional
from sqlalchemy.orm import Session
from origination_gateway.infrastructure.database.models import AffordabilityAssessmentRecord
from origination_gateway.domain.models import AffordabilityAssessment, AffordabilityData


class AssessmentRepository:
    """Repository for affordability assessments"""

    def __init__(self, db: Session):
        self.db = db

    def create_assessment(
        self,
        application_id: str,
        assessment: AffordabilityAssessment,
        affordability_data: Optional[AffordabilityData] = None,
    ) -> AffordabilityAssessmentRecord:
        """Persist assessment to database"""
        calculation = assessment.calculation
        record = AffordabilityAssessmentRecord(
            application_id=application_id,
            monthly_income=calculation.monthly_income,
            additional_income=calculation.additional_income,
            total_gross_income=calculation.total_gross_income,
            total_deductions=calculation.total_deductions,
            total_expenses=calculation.total_expenses,
            net_income=calculation.net_income,
            disposable_income=calculation.disposable_income,
            minimum_expenses=assessment.minimum_expenses,
            surplus=assessment.surplus,
            income_band=assessment.income_band.label,
            expenses_below_norms=assessment.expenses_below_norms,
            expenses_unrealistic=assessment.expenses_unrealistic,
            disposable_status=assessment.disposable_status,
            norms=asdict(assessment.income_band.norms),
            declared_items=asdict(affordability_data) if affordability_data is not None else None,
        )
        self.db.add(record)
        self.db.flush()  # Get ID without committing
        return record

    def get_assessment_by_id(self, assessment_id: uuid.UUID) -> Optional[AffordabilityAssessmentRecord]:
        return (
            self.db.query(AffordabilityAssessmentRecord)
            .filter(AffordabilityAssessmentRecord.id == assessment_id)
            .first()
        )

    def get_assessments_by_application(
        self, application_id: str, limit: int = 10
    ) -> List[AffordabilityAssessmentRecord]:
        """Fetch recent assessments for an application, newest first"""
        return (
            self.db.query(AffordabilityAssessmentRecord)
            .filter(AffordabilityAssessmentRecord.application_id == application_id)
            .order_by(AffordabilityAssessmentRecord.created_at.desc())
            .limit(limit)
            .all()
        )
