"""Alumni check endpoint kept for older integrations.

Callers authenticate with a shared key in the path instead of a bearer token.
"""

import hmac
from typing import Optional

from fastapi import APIRouter, Depends, Form

from alumni_api.api.deps import get_alumni_repository
from alumni_api.config import settings
from alumni_api.core.exceptions import BadRequestError, UnauthorizedError
from alumni_api.repositories.base import AlumniRepository
from alumni_api.schemas.alumni import AlumniCheckResponse, AlumniResponse

router = APIRouter()


@router.post("/check/{key}", response_model=AlumniCheckResponse, summary="Check alumni status")
async def check_alumni(
    key: str,
    student_number: Optional[str] = Form(None),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> AlumniCheckResponse:
    """Tell whether a student number belongs to a registered alumni."""
    if not hmac.compare_digest(key, settings.API_KEY):
        raise UnauthorizedError("Invalid API key")
    if not student_number:
        raise BadRequestError("student_number is required")

    record = await alumni.get_by_student_number(student_number)
    return AlumniCheckResponse(
        student_number=student_number,
        is_alumni=record is not None,
        alumni=AlumniResponse.model_validate(record) if record else None,
    )
