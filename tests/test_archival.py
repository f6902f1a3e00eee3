from datetime import datetime, timedelta, timezone

import pytest

from evalbank.core.errors import InvalidTransitionError
from evalbank.models import ArchivalPhase, EvaluationPhase
from evalbank.services import archival

ARCHIVIST = "archivist@heig.ch"

def _in_days(days: int) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)

def test_mark_then_archive_then_back_to_active(db, make_evaluation):
    evaluation = make_evaluation()

    archival.mark_for_archival(db, evaluation, _in_days(10))
    assert evaluation.archival_phase == ArchivalPhase.MARKED_FOR_ARCHIVAL
    assert evaluation.archival_deadline is not None

    archival.archive(db, evaluation, ARCHIVIST)
    assert evaluation.archival_phase == ArchivalPhase.ARCHIVED
    assert evaluation.archived_by_user_email == ARCHIVIST
    assert evaluation.archived_at is not None

    archival.back_to_active(db, evaluation)
    assert evaluation.archival_phase == ArchivalPhase.ACTIVE
    assert evaluation.archival_deadline is None

def test_mark_without_deadline(db, make_evaluation):
    evaluation = archival.mark_for_archival(db, make_evaluation())
    assert evaluation.archival_phase == ArchivalPhase.MARKED_FOR_ARCHIVAL
    assert evaluation.archival_deadline is None

def test_deadline_today_is_accepted(db, make_evaluation):
    evaluation = archival.mark_for_archival(db, make_evaluation(), _in_days(0))
    assert evaluation.archival_phase == ArchivalPhase.MARKED_FOR_ARCHIVAL

def test_deadline_in_the_past_is_rejected(db, make_evaluation):
    evaluation = make_evaluation()
    with pytest.raises(InvalidTransitionError):
        archival.mark_for_archival(db, evaluation, _in_days(-2))
    assert evaluation.archival_phase == ArchivalPhase.ACTIVE

def test_archive_keeps_explicit_date(db, make_evaluation):
    archived_at = datetime(2024, 1, 31, tzinfo=timezone.utc)
    evaluation = archival.archive(db, make_evaluation(), ARCHIVIST, archived_at)
    assert evaluation.archived_at == archived_at

def test_exclusion_requires_a_comment(db, make_evaluation):
    evaluation = make_evaluation()
    with pytest.raises(InvalidTransitionError):
        archival.exclude_from_archival(db, evaluation, ARCHIVIST, "   ")

    archival.exclude_from_archival(db, evaluation, ARCHIVIST, "  kept for the accreditation audit ")
    assert evaluation.archival_phase == ArchivalPhase.EXCLUDED_FROM_ARCHIVAL
    assert evaluation.excluded_from_archival_comment == "kept for the accreditation audit"
    assert evaluation.excluded_from_archival_by_user_email == ARCHIVIST

def test_excluded_evaluation_can_still_be_archived(db, make_evaluation):
    evaluation = make_evaluation()
    archival.exclude_from_archival(db, evaluation, ARCHIVIST, "reason")
    archival.archive(db, evaluation, ARCHIVIST)
    assert evaluation.archival_phase == ArchivalPhase.ARCHIVED

@pytest.mark.parametrize("action, phase", [
    ("mark_for_archival", ArchivalPhase.ARCHIVED),
    ("back_to_active", ArchivalPhase.ACTIVE),
    ("exclude_from_archival", ArchivalPhase.MARKED_FOR_ARCHIVAL),
    ("purge", ArchivalPhase.ACTIVE),
    ("purge_without_archive", ArchivalPhase.ARCHIVED),
    ("archive", ArchivalPhase.PURGED),
])
def test_actions_outside_their_phases_are_rejected(db, make_evaluation, action, phase):
    evaluation = make_evaluation()
    evaluation.archival_phase = phase
    calls = {
        "mark_for_archival": lambda: archival.mark_for_archival(db, evaluation),
        "archive": lambda: archival.archive(db, evaluation, ARCHIVIST),
        "back_to_active": lambda: archival.back_to_active(db, evaluation),
        "exclude_from_archival": lambda: archival.exclude_from_archival(db, evaluation, ARCHIVIST, "reason"),
        "purge": lambda: archival.purge(db, evaluation, ARCHIVIST),
        "purge_without_archive": lambda: archival.purge_without_archive(db, evaluation, ARCHIVIST),
    }
    with pytest.raises(InvalidTransitionError):
        calls[action]()
    assert evaluation.archival_phase == phase

def test_purge_after_archive(db, make_evaluation):
    evaluation = make_evaluation()
    archival.archive(db, evaluation, ARCHIVIST)

    result = archival.purge(db, evaluation, ARCHIVIST)

    assert result["message"].startswith("Nothing to purge")
    assert evaluation.archival_phase == ArchivalPhase.PURGED
    assert evaluation.purged_by_user_email == ARCHIVIST
    assert evaluation.purged_at is not None

def test_purge_without_archive(db, make_evaluation):
    evaluation = make_evaluation()
    archival.purge_without_archive(db, evaluation, ARCHIVIST)
    assert evaluation.archival_phase == ArchivalPhase.PURGED_WITHOUT_ARCHIVAL

def test_work_lists(db, make_evaluation):
    active = make_evaluation(label="active")
    overdue = make_evaluation(label="overdue")
    upcoming = make_evaluation(label="upcoming")
    archived = make_evaluation(label="archived")
    purged = make_evaluation(label="purged")
    draft = make_evaluation(label="draft", phase=EvaluationPhase.COMPOSITION)
    marked_draft = make_evaluation(label="marked draft", phase=EvaluationPhase.NEW)

    overdue.archival_phase = ArchivalPhase.MARKED_FOR_ARCHIVAL
    overdue.archival_deadline = _in_days(-3)
    archival.mark_for_archival(db, upcoming, _in_days(5))
    archival.archive(db, archived, ARCHIVIST)
    archival.purge_without_archive(db, purged, ARCHIVIST)
    archival.mark_for_archival(db, marked_draft, _in_days(5))
    db.flush()

    def labels(mode):
        return {e.label for e in archival.list_evaluations_for_archival(db, mode)}

    assert labels("todo") == {active.label, overdue.label, archived.label}
    assert labels("pending") == {upcoming.label}
    assert labels("done") == {purged.label}
    assert draft.label not in labels("todo")
    assert marked_draft.label not in labels("pending")

def test_unknown_list_mode(db):
    with pytest.raises(ValueError):
        archival.list_evaluations_for_archival(db, "later")
