"""
Deep merge of selection trees.

A selection tree maps a column or relationship name to ``True``/``False`` or to
a nested tree (a relationship with its own sub-selection). Fragments built by
``evalbank.services.select.modules`` are combined here into one tree per use
case.
"""
from typing import Any, Dict, Mapping, Union

SelectTree = Dict[str, Union[bool, "SelectTree"]]

# Reserved key on a relationship node: row filter applied to that relationship.
WHERE = "_where"

def _copy_tree(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _copy_tree(child) for key, child in value.items()}
    return value

def _merge_into(target: SelectTree, source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge_into(current, value)
        else:
            target[key] = _copy_tree(value)

def merge_selects(*trees: Mapping[str, Any]) -> SelectTree:
    """Merge selection trees left to right into a fresh tree.

    Keys whose values are trees on both sides are merged recursively. Any other
    collision is resolved in favour of the rightmost tree. The inputs are never
    mutated and the result shares no nested dict with them.
    """
    result: SelectTree = {}
    for tree in trees:
        _merge_into(result, tree)
    return result
