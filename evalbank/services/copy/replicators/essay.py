from evalbank.models import Essay, QuestionType
from evalbank.services.copy.replicators.base import QuestionReplicator

class EssayReplicator(QuestionReplicator):
    question_type = QuestionType.ESSAY
    relation = "essay"

    def replicate(self, db, question, base_fields):
        essay = self.source_relation(question)
        return self.create_question(
            db, base_fields, essay=Essay(solution=essay["solution"], template=essay["template"])
        )
