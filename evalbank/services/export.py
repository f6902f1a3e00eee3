"""
Evaluation payloads for export, consultation and results.

Questions are returned in evaluation order, each with the points it is worth
in that evaluation and the projection produced by the requested selection.
"""
from collections import defaultdict
from typing import Any, Dict, List
from sqlalchemy.orm import Session
from evalbank.models import Evaluation, Question
from evalbank.services.grading import compute_coefficient
from evalbank.services.select import (
    SelectTree, find_many, select_for_professor_export, select_for_professor_results, select_for_student_consultation,
    select_for_student_export,
)

def _evaluation_questions(db: Session, evaluation: Evaluation, tree: SelectTree) -> List[Dict[str, Any]]:
    links = list(evaluation.evaluation_to_questions)
    if not links:
        return []
    payloads = {
        q["id"]: q for q in find_many(db, Question, tree, Question.id.in_([link.question_id for link in links]))
    }
    return [
        {"order": link.order, "points": link.points, "question": payloads[link.question_id]}
        for link in links
        if link.question_id in payloads
    ]

def _header(evaluation: Evaluation) -> Dict[str, Any]:
    return {"id": evaluation.id, "label": evaluation.label, "phase": evaluation.phase}

def export_for_professor(db: Session, evaluation: Evaluation, include_submissions: bool = False) -> Dict[str, Any]:
    return {
        "evaluation": _header(evaluation),
        "questions": _evaluation_questions(db, evaluation, select_for_professor_export(include_submissions)),
    }

def export_for_student(db: Session, evaluation: Evaluation, email: str) -> Dict[str, Any]:
    return {
        "evaluation": _header(evaluation),
        "questions": _evaluation_questions(db, evaluation, select_for_student_export(email)),
    }

def consult_for_student(db: Session, evaluation: Evaluation, email: str) -> Dict[str, Any]:
    return {
        "evaluation": _header(evaluation),
        "questions": _evaluation_questions(
            db, evaluation, select_for_student_consultation(email, evaluation.show_solutions_when_finished)
        ),
    }

def results_for_professor(db: Session, evaluation: Evaluation) -> Dict[str, Any]:
    questions = _evaluation_questions(db, evaluation, select_for_professor_results())
    total_points = sum(q["points"] for q in questions)

    obtained: Dict[str, float] = defaultdict(float)
    for entry in questions:
        for answer in entry["question"]["student_answer"]:
            grading = answer.get("student_grading")
            if grading is not None:
                obtained[answer["user_email"]] += grading["points_obtained"] or 0

    students = [
        {
            "email": student.user_email,
            "obtained_points": obtained.get(student.user_email, 0),
            "total_points": total_points,
            "success_rate": compute_coefficient(total_points, obtained.get(student.user_email, 0)),
        }
        for student in sorted(evaluation.students, key=lambda s: s.user_email)
    ]
    return {"evaluation": _header(evaluation), "questions": questions, "students": students}
