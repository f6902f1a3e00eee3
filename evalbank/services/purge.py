"""
Removal of student data from an evaluation.

Questions and the evaluation itself are kept; what goes is everything students
produced: answers (with their per-type children and gradings), the database
queries and code files they own, and the code history snapshots.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict
from sqlalchemy import delete, select
from sqlalchemy.orm import Session
from evalbank.models import (
    ArchivalPhase, DatabaseQuery, Evaluation, EvaluationToQuestion, File, StudentAnswer, StudentAnswerCodeHistory,
    StudentAnswerCodeToFile, StudentAnswerDatabaseToQuery, UserOnEvaluation,
)

logger = logging.getLogger(__name__)

def _mark_purged(evaluation: Evaluation, user_email: str, phase: ArchivalPhase) -> None:
    evaluation.archival_phase = phase
    evaluation.purged_at = datetime.now(timezone.utc)
    evaluation.purged_by_user_email = user_email

def purge_evaluation_data(
    db: Session, evaluation: Evaluation, user_email: str, phase: ArchivalPhase = ArchivalPhase.PURGED
) -> Dict[str, Any]:
    question_ids = list(db.scalars(
        select(EvaluationToQuestion.question_id).where(EvaluationToQuestion.evaluation_id == evaluation.id)
    ))
    emails = list(db.scalars(
        select(UserOnEvaluation.user_email).where(UserOnEvaluation.evaluation_id == evaluation.id)
    ))

    if not question_ids or not emails:
        _mark_purged(evaluation, user_email, phase)
        db.flush()
        logger.info(f"Evaluation {evaluation.id} had no student data, marked {phase.value}")
        return {
            "message": "Nothing to purge - evaluation updated to purged state",
            "stats": {"student_db_queries": 0, "files": 0, "code_history": 0, "student_answers": 0},
        }

    query_ids = list(db.scalars(
        select(StudentAnswerDatabaseToQuery.query_id).where(
            StudentAnswerDatabaseToQuery.question_id.in_(question_ids), StudentAnswerDatabaseToQuery.user_email.in_(emails)
        )
    ))
    file_ids = list(db.scalars(
        select(StudentAnswerCodeToFile.file_id).where(
            StudentAnswerCodeToFile.question_id.in_(question_ids), StudentAnswerCodeToFile.user_email.in_(emails)
        )
    ))

    answers = db.scalars(
        select(StudentAnswer).where(StudentAnswer.question_id.in_(question_ids), StudentAnswer.user_email.in_(emails))
    ).all()
    for answer in answers:
        db.delete(answer)
    db.flush()

    if query_ids:
        db.execute(delete(DatabaseQuery).where(DatabaseQuery.id.in_(query_ids)))
    if file_ids:
        db.execute(delete(File).where(File.id.in_(file_ids)))
    history = db.execute(
        delete(StudentAnswerCodeHistory).where(
            StudentAnswerCodeHistory.question_id.in_(question_ids), StudentAnswerCodeHistory.user_email.in_(emails)
        )
    )

    _mark_purged(evaluation, user_email, phase)
    db.flush()

    stats = {
        "student_db_queries": len(query_ids),
        "files": len(file_ids),
        "code_history": history.rowcount,
        "student_answers": len(answers),
    }
    logger.info(f"Purged evaluation {evaluation.id}: {stats}")
    return {"message": "Evaluation data purged successfully", "stats": stats}
