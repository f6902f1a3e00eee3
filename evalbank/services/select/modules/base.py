def select_base(include_professor_only_info: bool = False) -> dict:
    """Fields shared by every question. Title and scratchpad are owner-only."""
    tree = {
        "id": True,
        "type": True,
        "status": True,
        "content": True,
        "created_at": True,
        "updated_at": True,
        "group_id": True,
    }
    if include_professor_only_info:
        tree["title"] = True
        tree["scratchpad"] = True
    return tree
