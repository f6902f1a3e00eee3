import copy
from evalbank.models import (
    Database, DatabaseQuery, DatabaseQueryOutput, DatabaseQueryToOutputTest, DatabaseToSolutionQuery, QuestionType,
)
from evalbank.services.copy.replicators.base import QuestionReplicator

class DatabaseReplicator(QuestionReplicator):
    question_type = QuestionType.DATABASE
    relation = "database"

    def replicate(self, db, question, base_fields):
        database = self.source_relation(question)
        image = database.get("image")
        new_question = self.create_question(db, base_fields, database=Database(image="" if image is None else image))

        # solution queries reference the new question id, so they come after the first flush
        for solution in database.get("solution_queries") or []:
            query = solution["query"]
            new_query = DatabaseQuery(
                question_id=new_question.id,
                order=query["order"],
                title=query.get("title"),
                description=query.get("description"),
                content=query.get("content"),
                template=query.get("template"),
                lint_active=query.get("lint_active") or False,
                lint_rules=query.get("lint_rules"),
                student_permission=query["student_permission"],
                test_query=query.get("test_query") or False,
                query_output_tests=[
                    DatabaseQueryToOutputTest(test=t["test"]) for t in query.get("query_output_tests") or []
                ],
            )
            output = solution.get("output")
            new_output = None
            if output:
                new_output = DatabaseQueryOutput(
                    query=new_query,
                    output=copy.deepcopy(output["output"]),
                    status=output["status"],
                    type=output["type"],
                    dbms=output["dbms"],
                )
            new_question.database.solution_queries.append(
                DatabaseToSolutionQuery(query=new_query, output=new_output)
            )
        db.flush()
        return new_question
