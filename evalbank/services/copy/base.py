from typing import Any, Dict
from evalbank.models import QuestionSource, QuestionStatus, QuestionToTag, QuestionType, QuestionUsageStatus

BaseFields = Dict[str, Any]

def build_base_data(question: Dict[str, Any], source: QuestionSource, prefix: str = "") -> BaseFields:
    """Type-independent column values and tag links for a copy of ``question``.

    ``question`` is a payload produced with ``select_for_question_copy()``.
    Tags are re-linked to the same ``(group_id, label)`` rows of the group.
    """
    return {
        "title": f"{prefix}{question['title']}" if prefix else question["title"],
        "content": question["content"],
        "type": QuestionType(question["type"]),
        "scratchpad": question["scratchpad"],
        "status": QuestionStatus.ACTIVE,
        "usage_status": QuestionUsageStatus.NOT_APPLICABLE if source == QuestionSource.EVAL else QuestionUsageStatus.UNUSED,
        "source": source,
        "source_question_id": question["id"],
        "group_id": question["group_id"],
        "question_to_tag": [
            QuestionToTag(group_id=question["group_id"], label=link["label"])
            for link in question["question_to_tag"]
        ],
    }
