"""SQLAlchemy ORM models for stored affordability assessments"""

import uuid
from sqlalchemy import Column, Boolean, Float, DateTime, Text, JSON, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class AffordabilityAssessmentRecord(Base):
    """Affordability check run against a loan application"""

    __tablename__ = "affordability_assessment"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    application_id = Column(Text, nullable=False, index=True)
    monthly_income = Column(Float, nullable=False)
    additional_income = Column(Float, nullable=False)
    total_gross_income = Column(Float, nullable=False)
    total_deductions = Column(Float, nullable=False)
    total_expenses = Column(Float, nullable=False)
    net_income = Column(Float, nullable=False)
    disposable_income = Column(Float, nullable=False)
    minimum_expenses = Column(Float, nullable=False)
    surplus = Column(Float, nullable=False)
    income_band = Column(Text, nullable=False)
    expenses_below_norms = Column(Boolean, nullable=False)
    expenses_unrealistic = Column(Boolean, nullable=False)
    disposable_status = Column(Text, nullable=False)
    norms = Column(JSON, nullable=True)
    declared_items = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
