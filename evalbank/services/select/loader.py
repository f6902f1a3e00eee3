"""
Execution of selection trees against the ORM.

``load_options`` turns a tree into ``selectinload`` chains so every requested
relationship is fetched up front, and ``project`` walks a loaded instance
following the tree to build plain nested dictionaries.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy import inspect as sa_inspect, select
from sqlalchemy.orm import Session, selectinload
from evalbank.core.errors import SelectionError
from evalbank.services.select.merge import WHERE, SelectTree

logger = logging.getLogger(__name__)

def _all_columns(mapper) -> SelectTree:
    return {attr.key: True for attr in mapper.column_attrs}

def load_options(model, tree: Mapping[str, Any]) -> list:
    mapper = sa_inspect(model)
    options = []
    for key, value in tree.items():
        if key == WHERE or not value or key not in mapper.relationships:
            continue
        relation = mapper.relationships[key]
        loader = selectinload(getattr(model, key))
        if isinstance(value, Mapping):
            children = load_options(relation.mapper.class_, value)
            if children:
                loader = loader.options(*children)
        options.append(loader)
    return options

def _matches(instance, where: Optional[Mapping[str, Any]]) -> bool:
    if not where:
        return True
    for column, expected in where.items():
        actual = getattr(instance, column)
        if isinstance(expected, Mapping):
            if "not" in expected and actual == expected["not"]:
                return False
            if "in" in expected and actual not in expected["in"]:
                return False
        elif actual != expected:
            return False
    return True

def project(instance, tree: Mapping[str, Any]) -> Dict[str, Any]:
    mapper = sa_inspect(type(instance))
    result: Dict[str, Any] = {}
    for key, value in tree.items():
        if key == WHERE or value is False:
            continue
        if key in mapper.relationships:
            relation = mapper.relationships[key]
            sub_tree = value if isinstance(value, Mapping) else _all_columns(relation.mapper)
            related = getattr(instance, key)
            if relation.uselist:
                where = sub_tree.get(WHERE)
                result[key] = [project(item, sub_tree) for item in related if _matches(item, where)]
            else:
                result[key] = project(related, sub_tree) if related is not None else None
        elif key in mapper.column_attrs:
            result[key] = getattr(instance, key)
        else:
            raise SelectionError(f"{mapper.class_.__name__} has no field or relation named {key!r}")
    return result

def find_one(db: Session, model, tree: Mapping[str, Any], *criteria) -> Optional[Dict[str, Any]]:
    stmt = select(model).options(*load_options(model, tree))
    if criteria:
        stmt = stmt.where(*criteria)
    instance = db.scalars(stmt).first()
    return project(instance, tree) if instance is not None else None

def find_many(db: Session, model, tree: Mapping[str, Any], *criteria, order_by=()) -> List[Dict[str, Any]]:
    stmt = select(model).options(*load_options(model, tree))
    if criteria:
        stmt = stmt.where(*criteria)
    if order_by:
        stmt = stmt.order_by(*order_by)
    instances = db.scalars(stmt).all()
    logger.debug(f"Projected {len(instances)} {model.__name__} rows")
    return [project(instance, tree) for instance in instances]
