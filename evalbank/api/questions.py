import logging
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session
from evalbank.core.auth import TokenData, require_group_member, require_roles
from evalbank.core.config import settings
from evalbank.core.database import get_db, transaction
from evalbank.core.errors import QuestionNotFoundError
from evalbank.models import Group, Question, QuestionSource, Role
from evalbank.services.copy import copy_question
from evalbank.services.questions import archive_question, unarchive_question
from evalbank.services.questions_filter import build_question_filters
from evalbank.services.select import find_many, find_one, select_for_question_copy, select_for_question_listing

router = APIRouter()
logger = logging.getLogger(__name__)

professor = require_roles(Role.PROFESSOR.value)

def _get_question(db: Session, group: Group, question_id: uuid.UUID) -> Question:
    question = db.scalar(select(Question).where(Question.id == question_id, Question.group_id == group.id))
    if question is None:
        raise QuestionNotFoundError(question_id)
    return question

@router.get("/{group_scope}/questions")
def list_questions(
    search: Optional[str] = None,
    tags: Optional[str] = None,
    question_types: Optional[str] = None,
    code_languages: Optional[str] = None,
    question_status: Optional[str] = None,
    unused: bool = False,
    group: Group = Depends(require_group_member),
    user: TokenData = Depends(professor),
    db: Session = Depends(get_db),
):
    try:
        criteria = build_question_filters(group.scope, search, tags, question_types, code_languages, question_status, unused)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return find_many(db, Question, select_for_question_listing(), *criteria, order_by=(Question.updated_at.desc(),))

@router.get("/{group_scope}/questions/{question_id}")
def get_question(question_id: uuid.UUID, group: Group = Depends(require_group_member), user: TokenData = Depends(professor), db: Session = Depends(get_db)):
    question = _get_question(db, group, question_id)
    return find_one(db, Question, select_for_question_copy(), Question.id == question.id)

@router.post("/{group_scope}/questions/{question_id}/copy")
def copy_question_in_group(question_id: uuid.UUID, group: Group = Depends(require_group_member), user: TokenData = Depends(professor), db: Session = Depends(get_db)):
    _get_question(db, group, question_id)
    with transaction(db):
        new_question = copy_question(db, question_id, source=QuestionSource.COPY, prefix=settings.COPY_TITLE_PREFIX)
    logger.info(f"{user.sub} copied question {question_id} in {group.scope}")
    return find_one(db, Question, select_for_question_copy(), Question.id == new_question.id)

@router.post("/{group_scope}/questions/{question_id}/archive")
def archive(question_id: uuid.UUID, group: Group = Depends(require_group_member), user: TokenData = Depends(professor), db: Session = Depends(get_db)):
    with transaction(db):
        question = archive_question(db, _get_question(db, group, question_id))
    return {"id": question.id, "status": question.status}

@router.post("/{group_scope}/questions/{question_id}/unarchive")
def unarchive(question_id: uuid.UUID, group: Group = Depends(require_group_member), user: TokenData = Depends(professor), db: Session = Depends(get_db)):
    with transaction(db):
        question = unarchive_question(db, _get_question(db, group, question_id))
    return {"id": question.id, "status": question.status}
