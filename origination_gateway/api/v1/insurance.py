"""POST /v1/insurance/funeral/premium - funeral cover premium quotes"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from origination_gateway.api.v1.schemas import (
    FuneralPremiumRequest,
    FuneralPremiumResponse,
    MemberPremiumSchema,
)
from origination_gateway.api.dependencies import get_request_id
from origination_gateway.domain.exceptions import DomainException
from origination_gateway.domain.funeral_cover import FuneralCoverCalculator
from origination_gateway.domain.models import FamilyMember
from origination_gateway.infrastructure.observability.metrics import record_funeral_quote
from origination_gateway.infrastructure.observability.logging import log_funeral_quote

router = APIRouter()

calculator = FuneralCoverCalculator()


@router.post("/insurance/funeral/premium", response_model=FuneralPremiumResponse)
def quote_funeral_premium(request_body: FuneralPremiumRequest, request: Request):
    """
    Quote the monthly premium for a funeral policy.

    Spouses and children are included in the main policy premium; extended
    family members are priced on their own ages and added on top.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    members = [FamilyMember(relationship=m.relationship, age=m.age) for m in request_body.additional_members]

    try:
        premium = calculator.calculate_total_premium(
            request_body.main_member_age,
            request_body.cover_amount,
            members,
        )
    except DomainException as e:
        logging.warning(f"Funeral cover not quotable: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_funeral_quote(premium.benefit_option)
    log_funeral_quote(
        request_id,
        premium.benefit_option,
        len(premium.extended_family),
        premium.total_premium,
        duration_ms,
    )

    return FuneralPremiumResponse(
        benefit_option=premium.benefit_option,
        main_policy_premium=premium.main_policy_premium,
        extended_family_premium=premium.extended_family_premium,
        total_premium=premium.total_premium,
        main_member=MemberPremiumSchema(**vars(premium.main_member)),
        immediate_family=[MemberPremiumSchema(**vars(m)) for m in premium.immediate_family],
        extended_family=[MemberPremiumSchema(**vars(m)) for m in premium.extended_family],
    )
