from fastapi import APIRouter, Depends, File, UploadFile

from sigil.core.dependencies import get_verification_service
from sigil.schemas.verification import FileVerificationResponse
from sigil.services.verification_service import VerificationService

router = APIRouter()


@router.post(
    "/upload",
    response_model=FileVerificationResponse,
    summary="Verify an uploaded file against its extension",
)
async def verify_upload(
    file: UploadFile = File(...),
    service: VerificationService = Depends(get_verification_service),
) -> FileVerificationResponse:
    """
    Compare the type declared by the uploaded file's extension with the
    type detected from its leading bytes.

    Status is one of:
    - correct: the header matches the extension
    - incorrect: the header belongs to another known type
    - unknown: no known signature matched
    """
    return await service.verify_upload(file)
