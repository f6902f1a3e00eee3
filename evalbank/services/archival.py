"""
Archival lifecycle of evaluations.

    ACTIVE -> MARKED_FOR_ARCHIVAL -> ARCHIVED -> PURGED
    ACTIVE -> EXCLUDED_FROM_ARCHIVAL
    ACTIVE -> PURGED_WITHOUT_ARCHIVAL

Marked and archived evaluations can go back to ACTIVE. Every action lists the
phases it may start from; anything else raises ``InvalidTransitionError``.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session
from evalbank.core.errors import InvalidTransitionError
from evalbank.models import ArchivalPhase, Evaluation, EvaluationPhase
from evalbank.services.purge import purge_evaluation_data

logger = logging.getLogger(__name__)

ALLOWED_FROM = {
    "mark_for_archival": (ArchivalPhase.ACTIVE,),
    "archive": (ArchivalPhase.ACTIVE, ArchivalPhase.MARKED_FOR_ARCHIVAL, ArchivalPhase.EXCLUDED_FROM_ARCHIVAL),
    "back_to_active": (ArchivalPhase.MARKED_FOR_ARCHIVAL, ArchivalPhase.ARCHIVED),
    "exclude_from_archival": (ArchivalPhase.ACTIVE,),
    "purge": (ArchivalPhase.ARCHIVED,),
    "purge_without_archive": (ArchivalPhase.ACTIVE,),
}

LIST_MODES = ("todo", "pending", "done")

# only evaluations that have started are archival candidates
LISTED_PHASES = (EvaluationPhase.IN_PROGRESS, EvaluationPhase.GRADING, EvaluationPhase.FINISHED)

def _now() -> datetime:
    return datetime.now(timezone.utc)

def _require(evaluation: Evaluation, action: str) -> None:
    allowed = ALLOWED_FROM[action]
    if evaluation.archival_phase not in allowed:
        raise InvalidTransitionError(
            f"Cannot {action.replace('_', ' ')} evaluation in phase {evaluation.archival_phase.value}"
        )

def _log(evaluation: Evaluation, action: str) -> None:
    logger.info(f"Evaluation {evaluation.id}: {action} -> {evaluation.archival_phase.value}")

def mark_for_archival(db: Session, evaluation: Evaluation, deadline: Optional[datetime] = None) -> Evaluation:
    _require(evaluation, "mark_for_archival")
    if deadline is not None and deadline.date() < _now().date():
        raise InvalidTransitionError("Archival deadline cannot be in the past")
    evaluation.archival_phase = ArchivalPhase.MARKED_FOR_ARCHIVAL
    evaluation.archival_deadline = deadline
    db.flush()
    _log(evaluation, "mark_for_archival")
    return evaluation

def archive(db: Session, evaluation: Evaluation, user_email: str, archived_at: Optional[datetime] = None) -> Evaluation:
    _require(evaluation, "archive")
    evaluation.archival_phase = ArchivalPhase.ARCHIVED
    evaluation.archived_at = archived_at or _now()
    evaluation.archived_by_user_email = user_email
    db.flush()
    _log(evaluation, "archive")
    return evaluation

def back_to_active(db: Session, evaluation: Evaluation) -> Evaluation:
    _require(evaluation, "back_to_active")
    evaluation.archival_phase = ArchivalPhase.ACTIVE
    evaluation.archival_deadline = None
    db.flush()
    _log(evaluation, "back_to_active")
    return evaluation

def exclude_from_archival(db: Session, evaluation: Evaluation, user_email: str, comment: str) -> Evaluation:
    _require(evaluation, "exclude_from_archival")
    if not comment or not comment.strip():
        raise InvalidTransitionError("A comment is required to exclude an evaluation from archival")
    evaluation.archival_phase = ArchivalPhase.EXCLUDED_FROM_ARCHIVAL
    evaluation.excluded_from_archival_at = _now()
    evaluation.excluded_from_archival_by_user_email = user_email
    evaluation.excluded_from_archival_comment = comment.strip()
    db.flush()
    _log(evaluation, "exclude_from_archival")
    return evaluation

def purge(db: Session, evaluation: Evaluation, user_email: str) -> Dict[str, Any]:
    _require(evaluation, "purge")
    if evaluation.purged_at is not None:
        raise InvalidTransitionError("Evaluation data has already been purged")
    return purge_evaluation_data(db, evaluation, user_email, ArchivalPhase.PURGED)

def purge_without_archive(db: Session, evaluation: Evaluation, user_email: str) -> Dict[str, Any]:
    _require(evaluation, "purge_without_archive")
    if evaluation.purged_at is not None:
        raise InvalidTransitionError("Evaluation data has already been purged")
    return purge_evaluation_data(db, evaluation, user_email, ArchivalPhase.PURGED_WITHOUT_ARCHIVAL)

def list_evaluations_for_archival(db: Session, mode: str = "todo") -> List[Evaluation]:
    """Work lists of the archival screen.

    ``todo``: needs a decision (active, deadline passed, or archived but not purged).
    ``pending``: marked with a deadline still ahead.
    ``done``: purged, with or without archival.

    Only evaluations that have started (see ``LISTED_PHASES``) are listed.
    """
    now = _now()
    stmt = select(Evaluation).where(Evaluation.phase.in_(LISTED_PHASES))
    if mode == "todo":
        stmt = stmt.where(or_(
            Evaluation.archival_phase == ArchivalPhase.ACTIVE,
            and_(Evaluation.archival_phase == ArchivalPhase.MARKED_FOR_ARCHIVAL, Evaluation.archival_deadline < now),
            Evaluation.archival_phase == ArchivalPhase.ARCHIVED,
        )).order_by(Evaluation.created_at.asc())
    elif mode == "pending":
        stmt = stmt.where(
            Evaluation.archival_phase == ArchivalPhase.MARKED_FOR_ARCHIVAL,
            or_(Evaluation.archival_deadline.is_(None), Evaluation.archival_deadline >= now),
        ).order_by(Evaluation.archival_deadline.asc(), Evaluation.created_at.asc())
    elif mode == "done":
        stmt = stmt.where(
            Evaluation.archival_phase.in_([ArchivalPhase.PURGED, ArchivalPhase.PURGED_WITHOUT_ARCHIVAL])
        ).order_by(Evaluation.purged_at.desc(), Evaluation.archived_at.desc(), Evaluation.created_at.desc())
    else:
        raise ValueError(f"Unknown archival list mode {mode!r}")
    return list(db.scalars(stmt))
