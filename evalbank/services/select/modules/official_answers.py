"""
Instructor-authored answers and solutions, per question type.

Each fragment only adds the owner-facing fields; it is meant to be merged over
``select_type_specific()``. The code fragment also lifts the HIDDEN filter on
template files so owners see every file.
"""
from evalbank.services.select.merge import WHERE

def select_official_multiple_choice() -> dict:
    return {"multiple_choice": {"options": {"is_correct": True}}}

def select_official_true_false() -> dict:
    return {"true_false": {"is_true": True}}

def select_official_essay() -> dict:
    return {"essay": {"solution": True}}

def select_official_web() -> dict:
    return {
        "web": {
            "solution_html": True,
            "solution_css": True,
            "solution_js": True,
        }
    }

def select_official_exact_match() -> dict:
    return {"exact_match": {"fields": {"match_regex": True}}}

def select_official_code() -> dict:
    return {
        "code": {
            "code_writing": {
                "template_files": {WHERE: False},
                "solution_files": {
                    "order": True,
                    "file": {"path": True, "content": True, "created_at": True},
                },
            },
            "code_reading": {
                "context_exec": True,
                "context_path": True,
                "context": True,
                "student_output_test": True,
                "snippets": {"output": True},
            },
        }
    }

def select_official_database() -> dict:
    return {
        "database": {
            "solution_queries": {
                "query": {
                    "order": True,
                    "title": True,
                    "description": True,
                    "content": True,
                    "template": True,
                    "lint_active": True,
                    "lint_rules": True,
                    "student_permission": True,
                    "test_query": True,
                    "query_output_tests": {"test": True},
                },
                "output": {"output": True, "status": True, "type": True, "dbms": True},
            }
        }
    }

def select_official_answers() -> dict:
    return {
        **select_official_multiple_choice(),
        **select_official_true_false(),
        **select_official_essay(),
        **select_official_web(),
        **select_official_exact_match(),
        **select_official_code(),
        **select_official_database(),
    }
