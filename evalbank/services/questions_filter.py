"""
Where-clause builder for the question bank listing.
"""
from typing import List, Optional
from sqlalchemy import and_, func, or_
from evalbank.models import Code, Group, Question, QuestionSource, QuestionStatus, QuestionToTag, QuestionType, QuestionUsageStatus

def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]

def build_question_filters(
    group_scope: str,
    search: Optional[str] = None,
    tags: Optional[str] = None,
    question_types: Optional[str] = None,
    code_languages: Optional[str] = None,
    question_status: Optional[str] = None,
    unused: bool = False,
) -> list:
    """Criteria for ``select(Question).where(*criteria)``.

    ``tags``, ``question_types`` and ``code_languages`` are comma separated. Tags
    combine with AND. Code questions are narrowed to ``code_languages`` when both
    are given. Unknown question types or statuses raise ``ValueError``.
    """
    criteria = [
        Question.group.has(Group.scope == group_scope),
        Question.source.in_([QuestionSource.BANK, QuestionSource.COPY]),
        Question.status == (QuestionStatus(question_status) if question_status else QuestionStatus.ACTIVE),
    ]

    if search:
        pattern = f"%{search.lower()}%"
        criteria.append(or_(func.lower(Question.title).like(pattern), func.lower(Question.content).like(pattern)))

    for tag in _split(tags):
        criteria.append(Question.question_to_tag.any(func.lower(QuestionToTag.label) == tag.lower()))

    types = [QuestionType(t) for t in _split(question_types)]
    languages = _split(code_languages)
    if types:
        if QuestionType.CODE in types and languages:
            others = [t for t in types if t != QuestionType.CODE]
            criteria.append(or_(
                Question.type.in_(others),
                and_(Question.type == QuestionType.CODE, Question.code.has(Code.language.in_(languages))),
            ))
        else:
            criteria.append(Question.type.in_(types))

    if unused:
        criteria.append(Question.usage_status == QuestionUsageStatus.UNUSED)

    return criteria
