import uuid
from typing import List, Optional
from sqlalchemy import Boolean, Enum as SQLEnum, ForeignKey, ForeignKeyConstraint, Index, Integer, JSON, String, Text, Uuid, select
from sqlalchemy.orm import Mapped, mapped_column, relationship
from evalbank.models.base import Base, TimestampMixin
from evalbank.models.enums import (
    CodeQuestionType, DatabaseDBMS, DatabaseQueryOutputStatus, DatabaseQueryOutputTest,
    DatabaseQueryOutputType, MultipleChoiceGradingPolicy, QuestionSource, QuestionStatus,
    QuestionType, QuestionUsageStatus, StudentPermission,
)

class Question(TimestampMixin, Base):
    __tablename__ = "questions"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    type: Mapped[QuestionType] = mapped_column(SQLEnum(QuestionType, name="question_type"))
    status: Mapped[QuestionStatus] = mapped_column(SQLEnum(QuestionStatus, name="question_status"), default=QuestionStatus.ACTIVE)
    source: Mapped[QuestionSource] = mapped_column(SQLEnum(QuestionSource, name="question_source"), default=QuestionSource.BANK)
    usage_status: Mapped[QuestionUsageStatus] = mapped_column(SQLEnum(QuestionUsageStatus, name="question_usage_status"), default=QuestionUsageStatus.UNUSED)
    source_question_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("questions.id", ondelete="SET NULL"), nullable=True)
    title: Mapped[str] = mapped_column(String, default="")
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    scratchpad: Mapped[str | None] = mapped_column(Text, nullable=True)
    group_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("groups.id", ondelete="CASCADE"))

    group: Mapped["Group"] = relationship()
    question_to_tag: Mapped[List["QuestionToTag"]] = relationship(back_populates="question", cascade="all, delete-orphan", order_by="QuestionToTag.label")

    multiple_choice: Mapped[Optional["MultipleChoice"]] = relationship(cascade="all, delete-orphan")
    true_false: Mapped[Optional["TrueFalse"]] = relationship(cascade="all, delete-orphan")
    essay: Mapped[Optional["Essay"]] = relationship(cascade="all, delete-orphan")
    web: Mapped[Optional["Web"]] = relationship(cascade="all, delete-orphan")
    exact_match: Mapped[Optional["ExactMatch"]] = relationship(cascade="all, delete-orphan")
    code: Mapped[Optional["Code"]] = relationship(cascade="all, delete-orphan")
    database: Mapped[Optional["Database"]] = relationship(cascade="all, delete-orphan")

    student_answer: Mapped[List["StudentAnswer"]] = relationship(back_populates="question", cascade="all, delete-orphan", order_by="StudentAnswer.user_email")
    evaluation_to_questions: Mapped[List["EvaluationToQuestion"]] = relationship(back_populates="question", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_questions_group_status", "group_id", "status"),
    )

class Tag(TimestampMixin, Base):
    __tablename__ = "tags"
    group_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True)
    label: Mapped[str] = mapped_column(String, primary_key=True)

class QuestionToTag(Base):
    __tablename__ = "question_to_tag"
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True)
    label: Mapped[str] = mapped_column(String, primary_key=True)
    group_id: Mapped[uuid.UUID] = mapped_column(Uuid)

    question: Mapped["Question"] = relationship(back_populates="question_to_tag")
    tag: Mapped["Tag"] = relationship()

    __table_args__ = (
        ForeignKeyConstraint(["group_id", "label"], ["tags.group_id", "tags.label"], ondelete="CASCADE"),
    )

# ---------------------------------------------------------------- multiple choice

class MultipleChoice(Base):
    __tablename__ = "multiple_choice"
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True)
    grading_policy: Mapped[MultipleChoiceGradingPolicy] = mapped_column(SQLEnum(MultipleChoiceGradingPolicy, name="mc_grading_policy"), default=MultipleChoiceGradingPolicy.ALL_OR_NOTHING)
    activate_student_comment: Mapped[bool] = mapped_column(Boolean, default=False)
    student_comment_label: Mapped[str | None] = mapped_column(String, nullable=True)
    activate_selection_limit: Mapped[bool] = mapped_column(Boolean, default=False)
    selection_limit: Mapped[int] = mapped_column(Integer, default=0)

    options: Mapped[List["Option"]] = relationship(cascade="all, delete-orphan", order_by="Option.order")

class Option(Base):
    __tablename__ = "options"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("multiple_choice.question_id", ondelete="CASCADE"))
    order: Mapped[int] = mapped_column(Integer, default=0)
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_correct: Mapped[bool] = mapped_column(Boolean, default=False)

# ---------------------------------------------------------------- simple types

class TrueFalse(Base):
    __tablename__ = "true_false"
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True)
    is_true: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

class Essay(Base):
    __tablename__ = "essay"
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True)
    solution: Mapped[str | None] = mapped_column(Text, nullable=True)
    template: Mapped[str | None] = mapped_column(Text, nullable=True)

class Web(Base):
    __tablename__ = "web"
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True)
    template_html: Mapped[str | None] = mapped_column(Text, nullable=True)
    template_css: Mapped[str | None] = mapped_column(Text, nullable=True)
    template_js: Mapped[str | None] = mapped_column(Text, nullable=True)
    solution_html: Mapped[str | None] = mapped_column(Text, nullable=True)
    solution_css: Mapped[str | None] = mapped_column(Text, nullable=True)
    solution_js: Mapped[str | None] = mapped_column(Text, nullable=True)

class ExactMatch(Base):
    __tablename__ = "exact_match"
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True)

    fields: Mapped[List["ExactMatchField"]] = relationship(cascade="all, delete-orphan", order_by="ExactMatchField.order")

class ExactMatchField(Base):
    __tablename__ = "exact_match_fields"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("exact_match.question_id", ondelete="CASCADE"))
    order: Mapped[int] = mapped_column(Integer, default=0)
    statement: Mapped[str | None] = mapped_column(Text, nullable=True)
    match_regex: Mapped[str | None] = mapped_column(String, nullable=True)

# ---------------------------------------------------------------- code

class File(TimestampMixin, Base):
    __tablename__ = "files"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    path: Mapped[str] = mapped_column(String)
    content: Mapped[str] = mapped_column(Text, default="")

class Code(Base):
    __tablename__ = "code"
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True)
    language: Mapped[str | None] = mapped_column(String, nullable=True)
    code_type: Mapped[CodeQuestionType] = mapped_column(SQLEnum(CodeQuestionType, name="code_question_type"), default=CodeQuestionType.CODE_WRITING)

    sandbox: Mapped[Optional["Sandbox"]] = relationship(cascade="all, delete-orphan")
    code_writing: Mapped[Optional["CodeWriting"]] = relationship(cascade="all, delete-orphan")
    code_reading: Mapped[Optional["CodeReading"]] = relationship(cascade="all, delete-orphan")

class Sandbox(Base):
    __tablename__ = "sandbox"
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("code.question_id", ondelete="CASCADE"), primary_key=True)
    image: Mapped[str] = mapped_column(String)
    before_all: Mapped[str | None] = mapped_column(Text, nullable=True)

class CodeWriting(Base):
    __tablename__ = "code_writing"
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("code.question_id", ondelete="CASCADE"), primary_key=True)
    code_check_enabled: Mapped[bool] = mapped_column(Boolean, default=True)

    test_cases: Mapped[List["TestCase"]] = relationship(cascade="all, delete-orphan", order_by="TestCase.index")
    template_files: Mapped[List["CodeToTemplateFile"]] = relationship(cascade="all, delete-orphan", order_by="CodeToTemplateFile.order")
    solution_files: Mapped[List["CodeToSolutionFile"]] = relationship(cascade="all, delete-orphan", order_by="CodeToSolutionFile.order")

class TestCase(Base):
    __tablename__ = "test_cases"
    __test__ = False
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("code_writing.question_id", ondelete="CASCADE"))
    index: Mapped[int] = mapped_column(Integer)
    exec: Mapped[str] = mapped_column(String)
    input: Mapped[str] = mapped_column(Text, default="")
    expected_output: Mapped[str] = mapped_column(Text, default="")

class CodeToTemplateFile(Base):
    __tablename__ = "code_to_template_file"
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("code_writing.question_id", ondelete="CASCADE"), primary_key=True)
    file_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("files.id", ondelete="CASCADE"), primary_key=True)
    order: Mapped[int] = mapped_column(Integer, default=0)
    student_permission: Mapped[StudentPermission] = mapped_column(SQLEnum(StudentPermission, name="student_permission"), default=StudentPermission.UPDATE)

    file: Mapped["File"] = relationship()

class CodeToSolutionFile(Base):
    __tablename__ = "code_to_solution_file"
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("code_writing.question_id", ondelete="CASCADE"), primary_key=True)
    file_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("files.id", ondelete="CASCADE"), primary_key=True)
    order: Mapped[int] = mapped_column(Integer, default=0)

    file: Mapped["File"] = relationship()

class CodeReading(Base):
    __tablename__ = "code_reading"
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("code.question_id", ondelete="CASCADE"), primary_key=True)
    context_exec: Mapped[str | None] = mapped_column(String, nullable=True)
    context_path: Mapped[str | None] = mapped_column(String, nullable=True)
    context: Mapped[str | None] = mapped_column(Text, nullable=True)
    student_output_test: Mapped[bool] = mapped_column(Boolean, default=False)

    snippets: Mapped[List["CodeReadingSnippet"]] = relationship(cascade="all, delete-orphan", order_by="CodeReadingSnippet.order")

class CodeReadingSnippet(Base):
    __tablename__ = "code_reading_snippets"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("code_reading.question_id", ondelete="CASCADE"))
    order: Mapped[int] = mapped_column(Integer, default=0)
    snippet: Mapped[str | None] = mapped_column(Text, nullable=True)
    output: Mapped[str | None] = mapped_column(Text, nullable=True)

# ---------------------------------------------------------------- database

class Database(Base):
    __tablename__ = "database"
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True)
    image: Mapped[str] = mapped_column(String, default="")

    solution_queries: Mapped[List["DatabaseToSolutionQuery"]] = relationship(
        cascade="all, delete-orphan",
        order_by=lambda: select(DatabaseQuery.order)
        .where(DatabaseQuery.id == DatabaseToSolutionQuery.query_id)
        .scalar_subquery(),
    )

class DatabaseQuery(Base):
    __tablename__ = "database_queries"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    question_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("questions.id", ondelete="CASCADE"), nullable=True)
    order: Mapped[int] = mapped_column(Integer, default=0)
    title: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    template: Mapped[str | None] = mapped_column(Text, nullable=True)
    lint_active: Mapped[bool] = mapped_column(Boolean, default=False)
    lint_rules: Mapped[str | None] = mapped_column(Text, nullable=True)
    student_permission: Mapped[StudentPermission] = mapped_column(SQLEnum(StudentPermission, name="student_permission"), default=StudentPermission.UPDATE)
    test_query: Mapped[bool] = mapped_column(Boolean, default=False)

    query_output_tests: Mapped[List["DatabaseQueryToOutputTest"]] = relationship(cascade="all, delete-orphan")

class DatabaseQueryToOutputTest(Base):
    __tablename__ = "database_query_to_output_test"
    query_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("database_queries.id", ondelete="CASCADE"), primary_key=True)
    test: Mapped[DatabaseQueryOutputTest] = mapped_column(SQLEnum(DatabaseQueryOutputTest, name="database_query_output_test"), primary_key=True)

class DatabaseQueryOutput(Base):
    __tablename__ = "database_query_outputs"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    query_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("database_queries.id", ondelete="CASCADE"), unique=True)
    output: Mapped[dict] = mapped_column(JSON, default=dict)
    status: Mapped[DatabaseQueryOutputStatus] = mapped_column(SQLEnum(DatabaseQueryOutputStatus, name="database_query_output_status"), default=DatabaseQueryOutputStatus.NEUTRAL)
    type: Mapped[DatabaseQueryOutputType] = mapped_column(SQLEnum(DatabaseQueryOutputType, name="database_query_output_type"), default=DatabaseQueryOutputType.TEXT)
    dbms: Mapped[DatabaseDBMS] = mapped_column(SQLEnum(DatabaseDBMS, name="database_dbms"), default=DatabaseDBMS.POSTGRES)

    query: Mapped["DatabaseQuery"] = relationship()

class DatabaseToSolutionQuery(Base):
    __tablename__ = "database_to_solution_query"
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("database.question_id", ondelete="CASCADE"))
    query_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("database_queries.id", ondelete="CASCADE"), primary_key=True)
    output_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("database_query_outputs.id", ondelete="SET NULL"), nullable=True)

    query: Mapped["DatabaseQuery"] = relationship()
    output: Mapped[Optional["DatabaseQueryOutput"]] = relationship()
