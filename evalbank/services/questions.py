import logging
from sqlalchemy import select
from sqlalchemy.orm import Session
from evalbank.core.errors import InvalidTransitionError
from evalbank.models import Evaluation, EvaluationPhase, EvaluationToQuestion, Question, QuestionStatus

logger = logging.getLogger(__name__)

# evaluations whose composition can still change
EDITABLE_PHASES = (EvaluationPhase.NEW, EvaluationPhase.SETTINGS, EvaluationPhase.COMPOSITION)

def archive_question(db: Session, question: Question) -> Question:
    """Archive an active question and pull it out of evaluations still being composed."""
    if question.status != QuestionStatus.ACTIVE:
        raise InvalidTransitionError("Only active questions can be archived")

    links = db.scalars(
        select(EvaluationToQuestion)
        .join(Evaluation, Evaluation.id == EvaluationToQuestion.evaluation_id)
        .where(EvaluationToQuestion.question_id == question.id, Evaluation.phase.in_(EDITABLE_PHASES))
    ).all()
    for link in links:
        following = db.scalars(
            select(EvaluationToQuestion).where(
                EvaluationToQuestion.evaluation_id == link.evaluation_id,
                EvaluationToQuestion.order > link.order,
            )
        ).all()
        for other in following:
            other.order -= 1
        db.delete(link)

    question.status = QuestionStatus.ARCHIVED
    db.flush()
    logger.info(f"Archived question {question.id}, removed from {len(links)} evaluation(s)")
    return question

def unarchive_question(db: Session, question: Question) -> Question:
    if question.status != QuestionStatus.ARCHIVED:
        raise InvalidTransitionError("Only archived questions can be unarchived")
    question.status = QuestionStatus.ACTIVE
    db.flush()
    logger.info(f"Unarchived question {question.id}")
    return question
