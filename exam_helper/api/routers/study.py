"""
Study API endpoints.

Routes:
- POST /study/summary - Exam study summary of a document
- POST /study/important-questions - Likely exam questions for a document
- POST /study/ask - Question answered from a document's content

Dependencies: exam_helper.application.services.study_service, exam_helper.models
System role: Study HTTP API
"""

from fastapi import APIRouter, Depends

from exam_helper.api.deps import get_study_service
from exam_helper.application.services.study_service import StudyService
from exam_helper.models.study import AskRequest, DocumentRequest, StudyAnswer

router = APIRouter(prefix="/study", tags=["study"])


@router.post("/summary", response_model=StudyAnswer)
async def summarize(
    request: DocumentRequest,
    study_service: StudyService = Depends(get_study_service),
) -> StudyAnswer:
    """Summarize the document in exam study bullet points."""
    return await study_service.summarize(request.doc_id)


@router.post("/important-questions", response_model=StudyAnswer)
async def important_questions(
    request: DocumentRequest,
    study_service: StudyService = Depends(get_study_service),
) -> StudyAnswer:
    """Generate important exam questions for the document."""
    return await study_service.important_questions(request.doc_id)


@router.post("/ask", response_model=StudyAnswer)
async def ask(
    request: AskRequest,
    study_service: StudyService = Depends(get_study_service),
) -> StudyAnswer:
    """
    Answer a question using only the document's content.

    Args:
        request: AskRequest with docId and question
        study_service: Injected StudyService

    Returns:
        StudyAnswer: Answer with {source, page} citations
    """
    return await study_service.ask(request.doc_id, request.question)
