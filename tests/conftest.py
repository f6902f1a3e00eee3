import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("PROMETHEUS_ENABLED", "false")
os.environ.setdefault("DATABASE_CREATE_ALL", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from evalbank.core.auth import create_token
from evalbank.models import (
    Base, Code, CodeQuestionType, CodeReading, CodeReadingSnippet, CodeToSolutionFile, CodeToTemplateFile, CodeWriting,
    Database, DatabaseQuery, DatabaseQueryOutput, DatabaseQueryOutputStatus, DatabaseQueryOutputTest,
    DatabaseQueryOutputType, DatabaseQueryToOutputTest, DatabaseToSolutionQuery, Essay, Evaluation, EvaluationPhase,
    EvaluationToQuestion, ExactMatch, ExactMatchField, File, Group, MultipleChoice, MultipleChoiceGradingPolicy, Option,
    Question, QuestionToTag, QuestionType, Role, Sandbox, StudentPermission, Tag, TestCase, TrueFalse, User,
    UserOnEvaluation, UserOnGroup, Web,
)

PROFESSOR_EMAIL = "prof@heig.ch"

@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()

@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()

@pytest.fixture
def client(session_factory):
    from evalbank.core.database import get_db
    from evalbank.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()

def auth_header(email: str, *roles: Role) -> dict:
    return {"Authorization": f"Bearer {create_token(email, [r.value for r in roles])}"}

@pytest.fixture
def group(db):
    group = Group(label="Algorithms", scope="algo")
    db.add_all([group, User(email=PROFESSOR_EMAIL, name="Prof", roles=[Role.PROFESSOR.value])])
    db.flush()
    db.add_all([
        UserOnGroup(user_email=PROFESSOR_EMAIL, group_id=group.id),
        Tag(group_id=group.id, label="graphs"),
        Tag(group_id=group.id, label="sorting"),
    ])
    db.flush()
    return group

class QuestionFactory:
    """Builds fully populated questions of every type in one group."""

    def __init__(self, db, group):
        self.db = db
        self.group = group

    def _question(self, question_type, tags=("graphs",), **kwargs):
        kwargs.setdefault("title", f"{question_type.value} question")
        kwargs.setdefault("content", f"Content of the {question_type.value} question")
        kwargs.setdefault("scratchpad", "private notes")
        question = Question(
            type=question_type,
            group_id=self.group.id,
            question_to_tag=[QuestionToTag(group_id=self.group.id, label=label) for label in tags],
            **kwargs,
        )
        self.db.add(question)
        self.db.flush()
        return question

    def multiple_choice(self, **kwargs):
        return self._question(
            QuestionType.MULTIPLE_CHOICE,
            multiple_choice=MultipleChoice(
                grading_policy=MultipleChoiceGradingPolicy.GRADUAL_CREDIT,
                activate_student_comment=True,
                student_comment_label="Explain your choice",
                activate_selection_limit=True,
                selection_limit=2,
                options=[
                    Option(order=0, text="Dijkstra", is_correct=True),
                    Option(order=1, text="Bellman-Ford", is_correct=True),
                    Option(order=2, text="Bubble sort", is_correct=False),
                ],
            ),
            **kwargs,
        )

    def true_false(self, **kwargs):
        return self._question(QuestionType.TRUE_FALSE, true_false=TrueFalse(is_true=False), **kwargs)

    def essay(self, **kwargs):
        return self._question(QuestionType.ESSAY, essay=Essay(solution="Use a heap", template="Your answer"), **kwargs)

    def web(self, **kwargs):
        return self._question(
            QuestionType.WEB,
            web=Web(template_html="<div></div>", template_css="div {}", template_js=None,
                    solution_html="<div>ok</div>", solution_css=None, solution_js="run()"),
            **kwargs,
        )

    def exact_match(self, **kwargs):
        return self._question(
            QuestionType.EXACT_MATCH,
            exact_match=ExactMatch(fields=[
                ExactMatchField(order=0, statement="S1", match_regex="^a$"),
                ExactMatchField(order=1, statement="S2", match_regex="^b$"),
            ]),
            **kwargs,
        )

    def code_writing(self, **kwargs):
        return self._question(
            QuestionType.CODE,
            code=Code(
                language="python",
                code_type=CodeQuestionType.CODE_WRITING,
                sandbox=Sandbox(image="python:3.12", before_all="pip install pytest"),
                code_writing=CodeWriting(
                    code_check_enabled=False,
                    test_cases=[TestCase(index=0, exec="python main.py", input="3", expected_output="6")],
                    template_files=[
                        CodeToTemplateFile(order=0, student_permission=StudentPermission.UPDATE,
                                           file=File(path="main.py", content="def double(x): ...")),
                        CodeToTemplateFile(order=1, student_permission=StudentPermission.HIDDEN,
                                           file=File(path="checks.py", content="assert double(3) == 6")),
                    ],
                    solution_files=[
                        CodeToSolutionFile(order=0, file=File(path="main.py", content="def double(x): return 2 * x")),
                    ],
                ),
            ),
            **kwargs,
        )

    def code_reading(self, **kwargs):
        return self._question(
            QuestionType.CODE,
            code=Code(
                language="java",
                code_type=CodeQuestionType.CODE_READING,
                sandbox=Sandbox(image="openjdk:21", before_all=None),
                code_reading=CodeReading(
                    context_exec="javac Main.java && java Main",
                    context_path="Main.java",
                    context="class Main {}",
                    student_output_test=True,
                    snippets=[
                        CodeReadingSnippet(order=0, snippet="System.out.println(1);", output="1"),
                        CodeReadingSnippet(order=1, snippet="System.out.println(2);", output="2"),
                    ],
                ),
            ),
            **kwargs,
        )

    def database(self, **kwargs):
        question = self._question(QuestionType.DATABASE, database=Database(image="postgres:16"), **kwargs)
        query = DatabaseQuery(
            question_id=question.id, order=0, title="Count users", content="SELECT count(*) FROM users",
            student_permission=StudentPermission.VIEW, test_query=True,
            query_output_tests=[DatabaseQueryToOutputTest(test=DatabaseQueryOutputTest.IGNORE_ROW_ORDER)],
        )
        output = DatabaseQueryOutput(
            query=query, output={"rows": [[42]]}, status=DatabaseQueryOutputStatus.SUCCESS,
            type=DatabaseQueryOutputType.SCALAR,
        )
        question.database.solution_queries.append(DatabaseToSolutionQuery(query=query, output=output))
        self.db.flush()
        return question

    def of_type(self, question_type: QuestionType):
        return {
            QuestionType.MULTIPLE_CHOICE: self.multiple_choice,
            QuestionType.TRUE_FALSE: self.true_false,
            QuestionType.ESSAY: self.essay,
            QuestionType.WEB: self.web,
            QuestionType.EXACT_MATCH: self.exact_match,
            QuestionType.CODE: self.code_writing,
            QuestionType.DATABASE: self.database,
        }[question_type]()

@pytest.fixture
def questions(db, group):
    return QuestionFactory(db, group)

@pytest.fixture
def make_evaluation(db, group):
    def _make(question_list=(), students=(), phase=EvaluationPhase.FINISHED, label="Midterm", points=4):
        evaluation = Evaluation(label=label, group_id=group.id, phase=phase)
        db.add(evaluation)
        db.flush()
        for order, question in enumerate(question_list):
            db.add(EvaluationToQuestion(evaluation_id=evaluation.id, question_id=question.id, order=order, points=points))
        for email in students:
            if db.scalar(select(User).where(User.email == email)) is None:
                db.add(User(email=email, name=email.split("@")[0], roles=[Role.STUDENT.value]))
            db.add(UserOnEvaluation(user_email=email, evaluation_id=evaluation.id))
        db.flush()
        db.refresh(evaluation)
        return evaluation
    return _make
