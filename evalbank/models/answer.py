import uuid
from datetime import datetime
from typing import List, Optional
from sqlalchemy import Boolean, Column, DateTime, Enum as SQLEnum, Float, ForeignKey, ForeignKeyConstraint, Integer, String, Table, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from evalbank.models.base import Base, TimestampMixin, utcnow
from evalbank.models.enums import CodeQuestionType, StudentAnswerStatus, StudentPermission, StudentQuestionGradingStatus

def _answer_fk(table: str = "student_answers") -> ForeignKeyConstraint:
    return ForeignKeyConstraint(
        ["user_email", "question_id"], [f"{table}.user_email", f"{table}.question_id"], ondelete="CASCADE"
    )

class StudentAnswer(TimestampMixin, Base):
    __tablename__ = "student_answers"
    user_email: Mapped[str] = mapped_column(String, ForeignKey("users.email", ondelete="CASCADE"), primary_key=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True)
    status: Mapped[StudentAnswerStatus] = mapped_column(SQLEnum(StudentAnswerStatus, name="student_answer_status"), default=StudentAnswerStatus.MISSING)

    user: Mapped["User"] = relationship()
    question: Mapped["Question"] = relationship(back_populates="student_answer")

    multiple_choice: Mapped[Optional["StudentAnswerMultipleChoice"]] = relationship(cascade="all, delete-orphan")
    true_false: Mapped[Optional["StudentAnswerTrueFalse"]] = relationship(cascade="all, delete-orphan")
    essay: Mapped[Optional["StudentAnswerEssay"]] = relationship(cascade="all, delete-orphan")
    web: Mapped[Optional["StudentAnswerWeb"]] = relationship(cascade="all, delete-orphan")
    exact_match: Mapped[Optional["StudentAnswerExactMatch"]] = relationship(cascade="all, delete-orphan")
    code: Mapped[Optional["StudentAnswerCode"]] = relationship(cascade="all, delete-orphan")
    database: Mapped[Optional["StudentAnswerDatabase"]] = relationship(cascade="all, delete-orphan")

    student_grading: Mapped[Optional["StudentQuestionGrading"]] = relationship(cascade="all, delete-orphan")

student_answer_multiple_choice_options = Table(
    "student_answer_multiple_choice_options",
    Base.metadata,
    Column("user_email", String, primary_key=True),
    Column("question_id", Uuid, primary_key=True),
    Column("option_id", Uuid, ForeignKey("options.id", ondelete="CASCADE"), primary_key=True),
    _answer_fk("student_answer_multiple_choice"),
)

class StudentAnswerMultipleChoice(Base):
    __tablename__ = "student_answer_multiple_choice"
    user_email: Mapped[str] = mapped_column(String, primary_key=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    options: Mapped[List["Option"]] = relationship(secondary=student_answer_multiple_choice_options, order_by="Option.order")

    __table_args__ = (_answer_fk(),)

class StudentAnswerTrueFalse(Base):
    __tablename__ = "student_answer_true_false"
    user_email: Mapped[str] = mapped_column(String, primary_key=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    is_true: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    __table_args__ = (_answer_fk(),)

class StudentAnswerEssay(Base):
    __tablename__ = "student_answer_essay"
    user_email: Mapped[str] = mapped_column(String, primary_key=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (_answer_fk(),)

class StudentAnswerWeb(Base):
    __tablename__ = "student_answer_web"
    user_email: Mapped[str] = mapped_column(String, primary_key=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    html: Mapped[str | None] = mapped_column(Text, nullable=True)
    css: Mapped[str | None] = mapped_column(Text, nullable=True)
    js: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (_answer_fk(),)

class StudentAnswerExactMatch(Base):
    __tablename__ = "student_answer_exact_match"
    user_email: Mapped[str] = mapped_column(String, primary_key=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)

    fields: Mapped[List["StudentAnswerExactMatchField"]] = relationship(cascade="all, delete-orphan")

    __table_args__ = (_answer_fk(),)

class StudentAnswerExactMatchField(Base):
    __tablename__ = "student_answer_exact_match_fields"
    user_email: Mapped[str] = mapped_column(String, primary_key=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    field_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("exact_match_fields.id", ondelete="CASCADE"), primary_key=True)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)

    field: Mapped["ExactMatchField"] = relationship()

    __table_args__ = (_answer_fk("student_answer_exact_match"),)

class StudentAnswerCode(Base):
    __tablename__ = "student_answer_code"
    user_email: Mapped[str] = mapped_column(String, primary_key=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    code_type: Mapped[CodeQuestionType] = mapped_column(SQLEnum(CodeQuestionType, name="code_question_type"), default=CodeQuestionType.CODE_WRITING)
    all_test_cases_passed: Mapped[bool] = mapped_column(Boolean, default=False)

    files: Mapped[List["StudentAnswerCodeToFile"]] = relationship(cascade="all, delete-orphan", order_by="StudentAnswerCodeToFile.order")

    __table_args__ = (_answer_fk(),)

class StudentAnswerCodeToFile(Base):
    __tablename__ = "student_answer_code_to_file"
    user_email: Mapped[str] = mapped_column(String, primary_key=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    file_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("files.id", ondelete="CASCADE"), primary_key=True)
    order: Mapped[int] = mapped_column(Integer, default=0)
    student_permission: Mapped[StudentPermission] = mapped_column(SQLEnum(StudentPermission, name="student_permission"), default=StudentPermission.UPDATE)

    file: Mapped["File"] = relationship()

    __table_args__ = (_answer_fk("student_answer_code"),)

class StudentAnswerCodeHistory(Base):
    __tablename__ = "student_answer_code_history"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_email: Mapped[str] = mapped_column(String, index=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True)
    code: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

class StudentAnswerDatabase(Base):
    __tablename__ = "student_answer_database"
    user_email: Mapped[str] = mapped_column(String, primary_key=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)

    queries: Mapped[List["StudentAnswerDatabaseToQuery"]] = relationship(cascade="all, delete-orphan", order_by="StudentAnswerDatabaseToQuery.order")

    __table_args__ = (_answer_fk(),)

class StudentAnswerDatabaseToQuery(Base):
    __tablename__ = "student_answer_database_to_query"
    user_email: Mapped[str] = mapped_column(String, primary_key=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    query_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("database_queries.id", ondelete="CASCADE"), primary_key=True)
    order: Mapped[int] = mapped_column(Integer, default=0)

    query: Mapped["DatabaseQuery"] = relationship()

    __table_args__ = (_answer_fk("student_answer_database"),)

class StudentQuestionGrading(TimestampMixin, Base):
    __tablename__ = "student_question_gradings"
    user_email: Mapped[str] = mapped_column(String, primary_key=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    status: Mapped[StudentQuestionGradingStatus] = mapped_column(SQLEnum(StudentQuestionGradingStatus, name="grading_status"), default=StudentQuestionGradingStatus.UNGRADED)
    points_obtained: Mapped[float] = mapped_column(Float, default=0)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    signed_by_user_email: Mapped[str | None] = mapped_column(String, ForeignKey("users.email", ondelete="SET NULL"), nullable=True)

    signed_by: Mapped[Optional["User"]] = relationship(foreign_keys=[signed_by_user_email])

    __table_args__ = (_answer_fk(),)
