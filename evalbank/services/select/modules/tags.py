def select_question_tags() -> dict:
    return {
        "question_to_tag": {
            "question_id": True,
            "group_id": True,
            "label": True,
            "tag": {"label": True, "group_id": True},
        }
    }
