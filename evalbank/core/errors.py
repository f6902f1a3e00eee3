"""
Domain exceptions raised by the services layer.

The HTTP layer maps them to responses in ``evalbank.main``: not-found errors
become 404, invalid transitions become 400, purged evaluations become 410 and
everything else is a 500.
"""

class EvalBankError(Exception):
    """Base class for all evalbank errors."""

class NotFoundError(EvalBankError):
    """The requested entity does not exist or is not visible in the caller's scope."""

class QuestionNotFoundError(NotFoundError):
    def __init__(self, question_id):
        super().__init__(f"Question {question_id} not found")
        self.question_id = question_id

class EvaluationNotFoundError(NotFoundError):
    def __init__(self, evaluation_id):
        super().__init__(f"Evaluation {evaluation_id} not found")
        self.evaluation_id = evaluation_id

class ReplicationError(EvalBankError):
    """Programming error in the copy pipeline. Aborts the enclosing transaction."""

class MissingRelationError(ReplicationError):
    def __init__(self, replicator: str, relation: str):
        super().__init__(f"{replicator} called with question that has no {relation} relation")
        self.replicator = replicator
        self.relation = relation

class UnregisteredTypeError(ReplicationError):
    def __init__(self, question_type):
        super().__init__(f"No replicator registered for question type {question_type!r}")
        self.question_type = question_type

class SelectionError(EvalBankError):
    """A selection tree names a field or relation the model does not have."""

class InvalidTransitionError(EvalBankError):
    """A lifecycle action was requested from a state that does not allow it."""

class EvaluationPurgedError(EvalBankError):
    def __init__(self, evaluation_id):
        super().__init__(f"Evaluation {evaluation_id} data has been purged")
        self.evaluation_id = evaluation_id
