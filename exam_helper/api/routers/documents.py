"""
Document API endpoints.

Routes: POST /documents/upload

Dependencies: exam_helper.application.services.study_service, exam_helper.models
System role: Document upload HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from exam_helper.api.deps import get_settings_dependency, get_study_service
from exam_helper.application.services.study_service import StudyService
from exam_helper.configs import Settings
from exam_helper.core.exceptions import ValidationError
from exam_helper.models.document import UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/upload", response_model=UploadResponse, response_model_by_alias=True)
async def upload_document(
    file: UploadFile | None = File(default=None),
    study_service: StudyService = Depends(get_study_service),
    settings: Settings = Depends(get_settings_dependency),
) -> UploadResponse:
    """
    Upload a PDF, DOCX or TXT file and index it for study.

    Args:
        file: Multipart file field
        study_service: Injected StudyService
        settings: Injected settings (upload size cap)

    Returns:
        UploadResponse: docId, name and chunkCount

    Raises:
        HTTPException(413): File exceeds max_upload_bytes
        ValidationError: No file in the request
    """
    if file is None:
        raise ValidationError("No file uploaded.", field="file")

    # Read one byte past the cap to detect oversize uploads without buffering them
    file_bytes = await file.read(settings.max_upload_bytes + 1)
    await file.close()
    if len(file_bytes) > settings.max_upload_bytes:
        logger.warning(
            f"{__name__}:upload_document - Rejected oversize upload",
            extra={"upload_name": file.filename, "limit_bytes": settings.max_upload_bytes},
        )
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds the {settings.max_upload_bytes} byte upload limit.",
        )

    return await study_service.upload(file_bytes, file.filename or "")
