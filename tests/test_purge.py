from sqlalchemy import func, select

from evalbank.models import (
    ArchivalPhase, DatabaseQuery, File, Question, StudentAnswer, StudentAnswerCode, StudentAnswerCodeHistory,
    StudentAnswerCodeToFile, StudentAnswerDatabase, StudentAnswerDatabaseToQuery, StudentAnswerEssay,
    StudentAnswerStatus, StudentPermission, StudentQuestionGrading, StudentQuestionGradingStatus,
)
from evalbank.services.purge import purge_evaluation_data

ARCHIVIST = "archivist@heig.ch"
STUDENT = "ada@heig.ch"

def _count(db, model, *criteria) -> int:
    return db.scalar(select(func.count()).select_from(model).where(*criteria))

def _code_answer(question, content="print(1)"):
    return StudentAnswer(
        user_email=STUDENT, question_id=question.id, status=StudentAnswerStatus.SUBMITTED,
        code=StudentAnswerCode(files=[
            StudentAnswerCodeToFile(order=0, student_permission=StudentPermission.UPDATE,
                                    file=File(path="main.py", content=content)),
        ]),
        student_grading=StudentQuestionGrading(status=StudentQuestionGradingStatus.GRADED, points_obtained=3),
    )

def _database_answer(question):
    return StudentAnswer(
        user_email=STUDENT, question_id=question.id, status=StudentAnswerStatus.SUBMITTED,
        database=StudentAnswerDatabase(queries=[
            StudentAnswerDatabaseToQuery(order=0, query=DatabaseQuery(
                order=0, content="SELECT 42", student_permission=StudentPermission.UPDATE,
            )),
        ]),
    )

def test_nothing_to_purge_without_students(db, questions, make_evaluation):
    evaluation = make_evaluation([questions.essay()])

    result = purge_evaluation_data(db, evaluation, ARCHIVIST)

    assert result == {
        "message": "Nothing to purge - evaluation updated to purged state",
        "stats": {"student_db_queries": 0, "files": 0, "code_history": 0, "student_answers": 0},
    }
    assert evaluation.archival_phase == ArchivalPhase.PURGED
    assert evaluation.purged_by_user_email == ARCHIVIST

def test_nothing_to_purge_without_questions(db, make_evaluation):
    evaluation = make_evaluation(students=[STUDENT])
    result = purge_evaluation_data(db, evaluation, ARCHIVIST, ArchivalPhase.PURGED_WITHOUT_ARCHIVAL)
    assert result["stats"]["student_answers"] == 0
    assert evaluation.archival_phase == ArchivalPhase.PURGED_WITHOUT_ARCHIVAL

def test_purge_removes_student_data_only(db, questions, make_evaluation):
    code = questions.code_writing()
    database = questions.database()
    evaluation = make_evaluation([code, database], students=[STUDENT])

    db.add_all([_code_answer(code), _database_answer(database)])
    db.add_all([
        StudentAnswerCodeHistory(user_email=STUDENT, question_id=code.id, code="print(0)"),
        StudentAnswerCodeHistory(user_email=STUDENT, question_id=code.id, code="print(1)"),
    ])
    db.flush()
    student_file_ids = list(db.scalars(select(StudentAnswerCodeToFile.file_id)))
    student_query_ids = list(db.scalars(select(StudentAnswerDatabaseToQuery.query_id)))
    template_files = _count(db, File) - len(student_file_ids)

    result = purge_evaluation_data(db, evaluation, ARCHIVIST)

    assert result == {
        "message": "Evaluation data purged successfully",
        "stats": {"student_db_queries": 1, "files": 1, "code_history": 2, "student_answers": 2},
    }
    assert _count(db, StudentAnswer) == 0
    assert _count(db, StudentQuestionGrading) == 0
    assert _count(db, StudentAnswerCodeHistory) == 0
    assert _count(db, File, File.id.in_(student_file_ids)) == 0
    assert _count(db, DatabaseQuery, DatabaseQuery.id.in_(student_query_ids)) == 0
    assert _count(db, File) == template_files
    assert _count(db, DatabaseQuery, DatabaseQuery.question_id == database.id) == 1
    assert _count(db, Question) == 2
    assert evaluation.archival_phase == ArchivalPhase.PURGED

def test_purge_leaves_other_evaluations_untouched(db, questions, make_evaluation):
    purged_question = questions.essay()
    kept_question = questions.essay(title="Other essay")
    evaluation = make_evaluation([purged_question], students=[STUDENT])
    make_evaluation([kept_question], students=[STUDENT], label="Final")

    for question in (purged_question, kept_question):
        db.add(StudentAnswer(
            user_email=STUDENT, question_id=question.id, status=StudentAnswerStatus.SUBMITTED,
            essay=StudentAnswerEssay(content="Dijkstra with a binary heap"),
        ))
    db.flush()

    result = purge_evaluation_data(db, evaluation, ARCHIVIST)

    assert result["stats"]["student_answers"] == 1
    assert _count(db, StudentAnswer, StudentAnswer.question_id == kept_question.id) == 1
    assert _count(db, StudentAnswerEssay) == 1
