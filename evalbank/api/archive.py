import uuid
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session
from evalbank.core.auth import TokenData, require_roles
from evalbank.core.database import get_db, transaction
from evalbank.core.errors import EvaluationNotFoundError
from evalbank.models import Evaluation, Role, to_dict
from evalbank.services import archival

router = APIRouter()

archivist = require_roles(Role.SUPER_ADMIN.value, Role.ARCHIVIST.value)

class MarkForArchival(BaseModel):
    archival_deadline: Optional[datetime] = None

class ArchiveNow(BaseModel):
    archived_at: Optional[datetime] = None

class ExcludeFromArchival(BaseModel):
    comment: str

def _get_evaluation(db: Session, evaluation_id: uuid.UUID) -> Evaluation:
    evaluation = db.get(Evaluation, evaluation_id)
    if evaluation is None:
        raise EvaluationNotFoundError(evaluation_id)
    return evaluation

@router.get("/archive", dependencies=[Depends(archivist)])
def list_for_archival(mode: str = "todo", db: Session = Depends(get_db)):
    if mode not in archival.LIST_MODES:
        raise HTTPException(status_code=400, detail=f"mode must be one of {', '.join(archival.LIST_MODES)}")
    return [to_dict(e) for e in archival.list_evaluations_for_archival(db, mode)]

@router.post("/archive/{evaluation_id}/mark-for-archival", dependencies=[Depends(archivist)])
def mark_for_archival(evaluation_id: uuid.UUID, payload: MarkForArchival, db: Session = Depends(get_db)):
    with transaction(db):
        evaluation = archival.mark_for_archival(db, _get_evaluation(db, evaluation_id), payload.archival_deadline)
    return to_dict(evaluation)

@router.post("/archive/{evaluation_id}/archive")
def archive_evaluation(evaluation_id: uuid.UUID, payload: ArchiveNow, user: TokenData = Depends(archivist), db: Session = Depends(get_db)):
    with transaction(db):
        evaluation = archival.archive(db, _get_evaluation(db, evaluation_id), user.sub, payload.archived_at)
    return to_dict(evaluation)

@router.post("/archive/{evaluation_id}/back-to-active", dependencies=[Depends(archivist)])
def back_to_active(evaluation_id: uuid.UUID, db: Session = Depends(get_db)):
    with transaction(db):
        evaluation = archival.back_to_active(db, _get_evaluation(db, evaluation_id))
    return to_dict(evaluation)

@router.post("/archive/{evaluation_id}/exclude-from-archival")
def exclude_from_archival(evaluation_id: uuid.UUID, payload: ExcludeFromArchival, user: TokenData = Depends(archivist), db: Session = Depends(get_db)):
    with transaction(db):
        evaluation = archival.exclude_from_archival(db, _get_evaluation(db, evaluation_id), user.sub, payload.comment)
    return to_dict(evaluation)

@router.post("/archive/{evaluation_id}/purge-data")
def purge_data(evaluation_id: uuid.UUID, user: TokenData = Depends(archivist), db: Session = Depends(get_db)):
    with transaction(db):
        result = archival.purge(db, _get_evaluation(db, evaluation_id), user.sub)
    return result

@router.post("/archive/{evaluation_id}/purge-without-archive")
def purge_without_archive(evaluation_id: uuid.UUID, user: TokenData = Depends(archivist), db: Session = Depends(get_db)):
    with transaction(db):
        result = archival.purge_without_archive(db, _get_evaluation(db, evaluation_id), user.sub)
    return result
