from evalbank.models import MultipleChoice, Option, QuestionType
from evalbank.services.copy.replicators.base import QuestionReplicator

class MultipleChoiceReplicator(QuestionReplicator):
    question_type = QuestionType.MULTIPLE_CHOICE
    relation = "multiple_choice"

    def replicate(self, db, question, base_fields):
        mc = self.source_relation(question)
        return self.create_question(
            db,
            base_fields,
            multiple_choice=MultipleChoice(
                grading_policy=mc["grading_policy"],
                activate_student_comment=mc["activate_student_comment"],
                student_comment_label=mc["student_comment_label"],
                activate_selection_limit=mc["activate_selection_limit"],
                selection_limit=mc["selection_limit"],
                options=[
                    Option(order=o["order"], text=o["text"], is_correct=o["is_correct"])
                    for o in mc["options"]
                ],
            ),
        )
