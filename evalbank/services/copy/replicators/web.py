from evalbank.models import QuestionType, Web
from evalbank.services.copy.replicators.base import QuestionReplicator

SOURCE_BLOBS = ("template_html", "template_css", "template_js", "solution_html", "solution_css", "solution_js")

class WebReplicator(QuestionReplicator):
    question_type = QuestionType.WEB
    relation = "web"

    def replicate(self, db, question, base_fields):
        web = self.source_relation(question)
        return self.create_question(db, base_fields, web=Web(**{blob: web.get(blob) for blob in SOURCE_BLOBS}))
