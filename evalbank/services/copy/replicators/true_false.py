from evalbank.models import QuestionType, TrueFalse
from evalbank.services.copy.replicators.base import QuestionReplicator

class TrueFalseReplicator(QuestionReplicator):
    question_type = QuestionType.TRUE_FALSE
    relation = "true_false"

    def replicate(self, db, question, base_fields):
        tf = self.source_relation(question)
        return self.create_question(db, base_fields, true_false=TrueFalse(is_true=tf["is_true"]))
