"""
Student-visible configuration of each question type.

All seven relations are requested at once; after the fetch only the one
matching the question's type is populated, the others come back as ``None``.
"""
from evalbank.models.enums import StudentPermission
from evalbank.services.select.merge import WHERE

def select_multiple_choice() -> dict:
    return {
        "multiple_choice": {
            "grading_policy": True,
            "activate_student_comment": True,
            "student_comment_label": True,
            "activate_selection_limit": True,
            "selection_limit": True,
            "options": {"id": True, "order": True, "text": True},
        }
    }

def select_true_false() -> dict:
    return {"true_false": {"question_id": True}}

def select_essay() -> dict:
    return {"essay": {"question_id": True, "template": True}}

def select_web() -> dict:
    return {
        "web": {
            "question_id": True,
            "template_html": True,
            "template_css": True,
            "template_js": True,
        }
    }

def select_exact_match() -> dict:
    return {
        "exact_match": {
            "question_id": True,
            "fields": {"id": True, "order": True, "statement": True},
        }
    }

def select_code() -> dict:
    return {
        "code": {
            "language": True,
            "code_type": True,
            "sandbox": {"image": True, "before_all": True},
            "code_writing": {
                "code_check_enabled": True,
                "test_cases": {"index": True, "exec": True, "input": True, "expected_output": True},
                "template_files": {
                    WHERE: {"student_permission": {"not": StudentPermission.HIDDEN}},
                    "order": True,
                    "student_permission": True,
                    "file": {"path": True, "content": True, "created_at": True},
                },
            },
            "code_reading": {
                "snippets": {"id": True, "order": True, "snippet": True},
            },
        }
    }

def select_database() -> dict:
    return {"database": {"image": True}}

def select_type_specific() -> dict:
    return {
        **select_multiple_choice(),
        **select_true_false(),
        **select_essay(),
        **select_web(),
        **select_exact_match(),
        **select_code(),
        **select_database(),
    }
