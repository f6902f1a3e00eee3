import logging
import uuid
from sqlalchemy.orm import Session
from evalbank.core.errors import QuestionNotFoundError
from evalbank.models import Question, QuestionSource
from evalbank.services.copy.base import build_base_data
from evalbank.services.copy.registry import get_replicator
from evalbank.services.select import find_one, select_for_question_copy

logger = logging.getLogger(__name__)

def copy_question(db: Session, question_id: uuid.UUID, source: QuestionSource = QuestionSource.COPY, prefix: str = "") -> Question:
    """Create an independent copy of a question and all of its type-specific rows.

    Runs inside the caller's transaction and never commits: wrap the call in
    ``evalbank.core.database.transaction`` so a failure leaves no partial copy.
    """
    payload = find_one(db, Question, select_for_question_copy(), Question.id == question_id)
    if payload is None:
        raise QuestionNotFoundError(question_id)

    base_fields = build_base_data(payload, source, prefix)
    replicator = get_replicator(payload["type"])
    new_question = replicator.replicate(db, payload, base_fields)
    logger.info(f"Copied question {question_id} to {new_question.id} ({payload['type'].value}, source={source.value})")
    return new_question
