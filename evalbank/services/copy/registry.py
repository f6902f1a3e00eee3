from typing import Dict, Mapping
from evalbank.core.errors import UnregisteredTypeError
from evalbank.models import QuestionType
from evalbank.services.copy.replicators import (
    CodeReplicator, DatabaseReplicator, EssayReplicator, ExactMatchReplicator,
    MultipleChoiceReplicator, QuestionReplicator, TrueFalseReplicator, WebReplicator,
)

REPLICATORS: Dict[QuestionType, QuestionReplicator] = {
    QuestionType.MULTIPLE_CHOICE: MultipleChoiceReplicator(),
    QuestionType.TRUE_FALSE: TrueFalseReplicator(),
    QuestionType.ESSAY: EssayReplicator(),
    QuestionType.WEB: WebReplicator(),
    QuestionType.EXACT_MATCH: ExactMatchReplicator(),
    QuestionType.CODE: CodeReplicator(),
    QuestionType.DATABASE: DatabaseReplicator(),
}

def check_registry(registry: Mapping[QuestionType, QuestionReplicator]) -> None:
    """Every question type has exactly one replicator, registered under its own type."""
    for question_type in QuestionType:
        replicator = registry.get(question_type)
        if replicator is None or replicator.question_type != question_type:
            raise UnregisteredTypeError(question_type)
    extra = set(registry) - set(QuestionType)
    if extra:
        raise UnregisteredTypeError(list(extra))

def get_replicator(question_type) -> QuestionReplicator:
    try:
        return REPLICATORS[QuestionType(question_type)]
    except (KeyError, ValueError):
        raise UnregisteredTypeError(question_type)

check_registry(REPLICATORS)
