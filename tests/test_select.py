import uuid

import pytest

from evalbank.core.errors import SelectionError
from evalbank.models import (
    DatabaseQuery, DatabaseToSolutionQuery, Question, QuestionType, StudentAnswer, StudentAnswerStatus,
    StudentAnswerTrueFalse, StudentPermission, User,
)
from evalbank.services.select import (
    WHERE, find_one, merge_selects, select_base, select_for_professor_export, select_for_question_copy,
    select_for_question_listing, select_for_student_consultation, select_for_student_export, select_type_specific,
)

TYPE_RELATIONS = {"multiple_choice", "true_false", "essay", "web", "exact_match", "code", "database"}

def test_base_without_professor_info_hides_title_and_scratchpad():
    tree = merge_selects(select_base(include_professor_only_info=False), select_type_specific())
    assert "title" not in tree
    assert "scratchpad" not in tree

def test_base_with_professor_info_has_title_and_scratchpad():
    tree = merge_selects(select_base(include_professor_only_info=True), select_type_specific())
    assert tree["title"] is True
    assert tree["scratchpad"] is True

def test_type_specific_requests_every_type():
    assert TYPE_RELATIONS <= set(select_type_specific())

def test_builders_return_fresh_trees():
    first = select_type_specific()
    first["multiple_choice"]["options"]["is_correct"] = True
    assert "is_correct" not in select_type_specific()["multiple_choice"]["options"]

def test_copy_selection_holds_official_answers():
    tree = select_for_question_copy()
    assert tree["multiple_choice"]["options"]["is_correct"] is True
    assert tree["exact_match"]["fields"]["match_regex"] is True
    assert tree["code"]["code_writing"]["template_files"][WHERE] is False
    assert "solution_files" in tree["code"]["code_writing"]
    assert tree["question_to_tag"]["label"] is True

def test_listing_selection_has_no_official_answers():
    tree = select_for_question_listing()
    assert "is_correct" not in tree["multiple_choice"]["options"]
    assert "solution" not in tree["essay"]
    assert "question_to_tag" in tree

def test_student_export_filters_on_student():
    tree = select_for_student_export("ada@heig.ch")
    assert tree["student_answer"][WHERE] == {"user_email": "ada@heig.ch"}
    assert "student_grading" in tree["student_answer"]
    assert "title" not in tree

def test_professor_export_submissions_are_optional():
    assert "student_answer" not in select_for_professor_export(include_submissions=False)
    with_submissions = select_for_professor_export(include_submissions=True)
    assert WHERE not in with_submissions["student_answer"]
    assert "student_grading" in with_submissions["student_answer"]

def test_only_matching_type_relation_is_populated(db, questions):
    question = questions.multiple_choice()
    payload = find_one(db, Question, select_for_question_listing(), Question.id == question.id)
    assert payload["type"] == QuestionType.MULTIPLE_CHOICE
    assert [o["text"] for o in payload["multiple_choice"]["options"]] == ["Dijkstra", "Bellman-Ford", "Bubble sort"]
    for relation in TYPE_RELATIONS - {"multiple_choice"}:
        assert payload[relation] is None

def test_hidden_template_files_only_reach_owners(db, questions):
    question = questions.code_writing()
    student_view = find_one(
        db, Question, merge_selects(select_base(), select_type_specific()), Question.id == question.id
    )
    owner_view = find_one(db, Question, select_for_question_copy(), Question.id == question.id)

    assert [f["file"]["path"] for f in student_view["code"]["code_writing"]["template_files"]] == ["main.py"]
    assert [f["file"]["path"] for f in owner_view["code"]["code_writing"]["template_files"]] == ["main.py", "checks.py"]

def test_student_answer_filter(db, questions):
    question = questions.true_false()
    db.add_all([User(email="ada@heig.ch"), User(email="alan@heig.ch")])
    for email, value in (("ada@heig.ch", True), ("alan@heig.ch", False)):
        db.add(StudentAnswer(
            user_email=email, question_id=question.id, status=StudentAnswerStatus.SUBMITTED,
            true_false=StudentAnswerTrueFalse(is_true=value),
        ))
    db.flush()
    db.expire(question)

    payload = find_one(db, Question, select_for_student_export("ada@heig.ch"), Question.id == question.id)
    assert len(payload["student_answer"]) == 1
    assert payload["student_answer"][0]["user"]["email"] == "ada@heig.ch"
    assert payload["student_answer"][0]["true_false"] == {"is_true": True}
    assert payload["student_answer"][0]["student_grading"] is None

def test_unknown_field_fails_at_execution(db, questions):
    question = questions.essay()
    with pytest.raises(SelectionError):
        find_one(db, Question, {"id": True, "essay": {"no_such_column": True}}, Question.id == question.id)

def test_missing_question_gives_none(db, group):
    assert find_one(db, Question, select_base(), Question.id == uuid.uuid4()) is None

def test_consultation_hides_official_answers_by_default():
    tree = select_for_student_consultation("ada@heig.ch")
    assert tree["student_answer"][WHERE] == {"user_email": "ada@heig.ch"}
    assert "is_correct" not in tree["multiple_choice"]["options"]
    assert "solution_files" not in tree["code"]["code_writing"]
    assert tree["code"]["code_writing"]["template_files"][WHERE] is not False

def test_consultation_with_official_answers():
    tree = select_for_student_consultation("ada@heig.ch", include_official_answers=True)
    assert tree["multiple_choice"]["options"]["is_correct"] is True
    assert "solution_files" in tree["code"]["code_writing"]
    assert tree["code"]["code_writing"]["template_files"][WHERE] is False

def test_consulted_code_question_keeps_hidden_files_unless_solutions_shown(db, questions):
    question = questions.code_writing()

    def template_paths(include_official_answers):
        payload = find_one(
            db, Question, select_for_student_consultation("ada@heig.ch", include_official_answers),
            Question.id == question.id,
        )
        return [f["file"]["path"] for f in payload["code"]["code_writing"]["template_files"]]

    assert template_paths(False) == ["main.py"]
    assert template_paths(True) == ["main.py", "checks.py"]

def test_solution_queries_follow_query_order(db, questions):
    question = questions.database()
    for order, title in ((2, "Drop users"), (1, "List users")):
        query = DatabaseQuery(
            question_id=question.id, order=order, title=title, student_permission=StudentPermission.HIDDEN,
        )
        question.database.solution_queries.append(DatabaseToSolutionQuery(query=query))
    db.flush()
    db.expire_all()

    payload = find_one(db, Question, select_for_question_copy(), Question.id == question.id)

    assert [s["query"]["title"] for s in payload["database"]["solution_queries"]] == [
        "Count users", "List users", "Drop users",
    ]
