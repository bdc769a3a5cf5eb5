from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool

from core.config import get_settings
from readiness.question_bank import get_question_bank
from readiness.visibility import applicable_sections, applies_to_permission
from schemas.responses import QuestionCatalog

router = APIRouter()

@router.get("/questions", response_model=QuestionCatalog, tags=["Questions"])
async def list_questions(permission: Optional[str] = None):
    """
    List the sections and questions that apply to a permission code.

    Display conditions depend on answers and are not applied here.
    """
    settings = get_settings()
    permission = permission or settings.default_permission
    try:
        question_set = await run_in_threadpool(
            get_question_bank, settings.question_bank_path
        )
    except FileNotFoundError as e:
        raise HTTPException(status_code=400, detail=str(e))

    sections = applicable_sections(question_set, permission)
    section_ids = {section.id for section in sections}
    return QuestionCatalog(
        version=question_set.version,
        permission=permission,
        sections=sections,
        questions=[
            question
            for question in question_set.questions
            if question.section_id in section_ids
            and applies_to_permission(question, permission)
        ],
    )
