"""
Per-use-case question selections, composed from the fragments in ``modules``.
"""
from evalbank.services.select.loader import find_many, find_one, load_options, project
from evalbank.services.select.merge import WHERE, SelectTree, merge_selects
from evalbank.services.select.modules import (
    select_base,
    select_official_answers,
    select_question_tags,
    select_student_answers,
    select_student_gradings,
    select_type_specific,
)

def select_for_question_listing() -> SelectTree:
    return merge_selects(
        select_base(include_professor_only_info=True),
        select_type_specific(),
        select_question_tags(),
    )

def select_for_question_copy() -> SelectTree:
    """Everything a replicator needs to rebuild the question."""
    return merge_selects(
        select_base(include_professor_only_info=True),
        select_type_specific(),
        select_official_answers(),
        select_question_tags(),
    )

def select_for_student_export(email: str) -> SelectTree:
    return merge_selects(
        select_base(),
        select_type_specific(),
        select_student_answers(email),
        select_student_gradings(),
        select_question_tags(),
    )

def select_for_professor_export(include_submissions: bool = False) -> SelectTree:
    parts = [
        select_base(include_professor_only_info=True),
        select_type_specific(),
        select_official_answers(),
        select_question_tags(),
    ]
    if include_submissions:
        parts += [select_student_answers(), select_student_gradings()]
    return merge_selects(*parts)

def select_for_student_consultation(email: str, include_official_answers: bool = False) -> SelectTree:
    """A student's own answers, with the official answers only when the evaluation shows solutions."""
    parts = [
        select_base(),
        select_type_specific(),
        select_student_answers(email),
        select_student_gradings(),
        select_question_tags(),
    ]
    if include_official_answers:
        parts.append(select_official_answers())
    return merge_selects(*parts)

def select_for_professor_results() -> SelectTree:
    return merge_selects(
        select_base(include_professor_only_info=True),
        select_type_specific(),
        select_official_answers(),
        select_student_answers(),
        select_student_gradings(),
        select_question_tags(),
    )
