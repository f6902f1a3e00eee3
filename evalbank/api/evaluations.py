import uuid
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session
from evalbank.core.auth import TokenData, get_current_user, require_group_member, require_roles
from evalbank.core.database import get_db
from evalbank.core.errors import EvaluationNotFoundError, EvaluationPurgedError
from evalbank.models import Evaluation, EvaluationPhase, Group, Role, UserOnEvaluation
from evalbank.services.export import consult_for_student, export_for_professor, export_for_student, results_for_professor

router = APIRouter()
student_router = APIRouter()

professor = require_roles(Role.PROFESSOR.value)

def _get_evaluation(db: Session, evaluation_id: uuid.UUID, group: Group | None = None) -> Evaluation:
    stmt = select(Evaluation).where(Evaluation.id == evaluation_id)
    if group is not None:
        stmt = stmt.where(Evaluation.group_id == group.id)
    evaluation = db.scalar(stmt)
    if evaluation is None:
        raise EvaluationNotFoundError(evaluation_id)
    return evaluation

def _not_purged(evaluation: Evaluation) -> Evaluation:
    if evaluation.purged_at is not None:
        raise EvaluationPurgedError(evaluation.id)
    return evaluation

@router.get("/{group_scope}/evaluations/{evaluation_id}/export")
def export_evaluation(
    evaluation_id: uuid.UUID,
    include_submissions: bool = False,
    group: Group = Depends(require_group_member),
    user: TokenData = Depends(professor),
    db: Session = Depends(get_db),
):
    return export_for_professor(db, _get_evaluation(db, evaluation_id, group), include_submissions)

@router.get("/{group_scope}/evaluations/{evaluation_id}/results")
def evaluation_results(evaluation_id: uuid.UUID, group: Group = Depends(require_group_member), user: TokenData = Depends(professor), db: Session = Depends(get_db)):
    return results_for_professor(db, _not_purged(_get_evaluation(db, evaluation_id, group)))

def _finished_evaluation_for_student(db: Session, evaluation_id: uuid.UUID, user: TokenData) -> Evaluation:
    evaluation = _not_purged(_get_evaluation(db, evaluation_id))
    if evaluation.phase != EvaluationPhase.FINISHED:
        raise HTTPException(status_code=400, detail="Evaluation is not finished")
    if not evaluation.consultation_enabled:
        raise HTTPException(status_code=403, detail="Consultation is disabled for this evaluation")
    enrolled = db.scalar(select(UserOnEvaluation).where(
        UserOnEvaluation.evaluation_id == evaluation.id, UserOnEvaluation.user_email == user.sub
    ))
    if enrolled is None:
        raise HTTPException(status_code=403, detail="Not registered to this evaluation")
    return evaluation

@student_router.get("/users/evaluations/{evaluation_id}/consult")
def consult_evaluation(evaluation_id: uuid.UUID, user: TokenData = Depends(get_current_user), db: Session = Depends(get_db)):
    evaluation = _finished_evaluation_for_student(db, evaluation_id, user)
    return consult_for_student(db, evaluation, user.sub)

@student_router.get("/users/evaluations/{evaluation_id}/export")
def export_own_submission(evaluation_id: uuid.UUID, user: TokenData = Depends(get_current_user), db: Session = Depends(get_db)):
    evaluation = _finished_evaluation_for_student(db, evaluation_id, user)
    return export_for_student(db, evaluation, user.sub)
