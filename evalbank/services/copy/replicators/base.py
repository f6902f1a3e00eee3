from abc import ABC, abstractmethod
from typing import Any, Dict
from sqlalchemy.orm import Session
from evalbank.core.errors import MissingRelationError
from evalbank.models import Question, QuestionType
from evalbank.services.copy.base import BaseFields

class QuestionReplicator(ABC):
    """Deep-copies one question type.

    Replicators are stateless and run inside the caller's transaction: they add
    and flush new rows but never commit. The returned question has fresh
    identifiers for every child row.
    """

    question_type: QuestionType
    relation: str

    def source_relation(self, question: Dict[str, Any]) -> Dict[str, Any]:
        data = question.get(self.relation)
        if data is None:
            raise MissingRelationError(type(self).__name__, self.relation)
        return data

    def create_question(self, db: Session, base_fields: BaseFields, **type_specific) -> Question:
        new_question = Question(**base_fields, **type_specific)
        db.add(new_question)
        db.flush()
        return new_question

    @abstractmethod
    def replicate(self, db: Session, question: Dict[str, Any], base_fields: BaseFields) -> Question:
        ...
