from evalbank.models import ExactMatch, ExactMatchField, QuestionType
from evalbank.services.copy.replicators.base import QuestionReplicator

class ExactMatchReplicator(QuestionReplicator):
    question_type = QuestionType.EXACT_MATCH
    relation = "exact_match"

    def replicate(self, db, question, base_fields):
        em = self.source_relation(question)
        return self.create_question(
            db,
            base_fields,
            exact_match=ExactMatch(
                fields=[
                    ExactMatchField(order=f["order"], statement=f["statement"], match_regex=f["match_regex"])
                    for f in em["fields"]
                ]
            ),
        )
