from typing import Optional
from evalbank.services.select.merge import WHERE

def _student_answer_fields() -> dict:
    return {
        "user_email": True,
        "question_id": True,
        "status": True,
        "user": {"id": True, "email": True, "name": True},
        "multiple_choice": {
            "comment": True,
            "options": {"id": True, "order": True, "text": True},
        },
        "true_false": {"is_true": True},
        "essay": {"content": True},
        "web": {"html": True, "css": True, "js": True},
        "exact_match": {
            "fields": {
                "value": True,
                "field": {"id": True, "order": True, "statement": True},
            }
        },
        "code": {
            "code_type": True,
            "all_test_cases_passed": True,
            "files": {
                "order": True,
                "student_permission": True,
                "file": {"id": True, "path": True, "content": True, "updated_at": True},
            },
        },
        "database": {
            "queries": {
                "order": True,
                "query": {"id": True, "order": True, "title": True, "content": True, "student_permission": True},
            }
        },
    }

def select_student_answers(email: Optional[str] = None) -> dict:
    """Answers of a single student when ``email`` is given, otherwise of every student."""
    fields = _student_answer_fields()
    if email is not None:
        fields[WHERE] = {"user_email": email}
    return {"student_answer": fields}
