"""POST /v1/id-number/verify - SA ID number verification endpoint"""

import time
from fastapi import APIRouter, Depends, Request

from origination_gateway.api.v1.schemas import IdVerificationRequest, IdVerificationResponse
from origination_gateway.api.dependencies import get_request_id, get_settings
from origination_gateway.config import Settings
from origination_gateway.domain.sa_id import parse_id_number
from origination_gateway.infrastructure.observability.metrics import record_id_check
from origination_gateway.infrastructure.observability.logging import log_id_check

router = APIRouter()


@router.post("/id-number/verify", response_model=IdVerificationResponse)
def verify_id_number(
    request_body: IdVerificationRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """
    Check an ID number and derive date of birth and gender from it.

    Always responds 200: an unusable ID number comes back with valid=false
    and null fields, the caller decides how to surface it.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    details = parse_id_number(request_body.id_number, century_pivot=settings.id_century_pivot)

    duration_ms = (time.time() - start_time) * 1000
    record_id_check(details.valid)
    log_id_check(request_id, details.id_number, details.valid, duration_ms)

    return IdVerificationResponse(
        id_number=details.id_number,
        valid=details.valid,
        date_of_birth=details.date_of_birth,
        gender=details.gender,
    )
