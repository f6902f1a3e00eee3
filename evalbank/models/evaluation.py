import uuid
from datetime import datetime
from typing import List
from sqlalchemy import Boolean, DateTime, Enum as SQLEnum, Float, ForeignKey, Integer, JSON, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from evalbank.models.base import Base, TimestampMixin
from evalbank.models.enums import ArchivalPhase, EvaluationPhase

class User(TimestampMixin, Base):
    __tablename__ = "users"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String, unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    image: Mapped[str | None] = mapped_column(String, nullable=True)
    roles: Mapped[list] = mapped_column(JSON, default=list)

class Group(TimestampMixin, Base):
    __tablename__ = "groups"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    label: Mapped[str] = mapped_column(String)
    scope: Mapped[str] = mapped_column(String, unique=True, index=True)

    members: Mapped[List["UserOnGroup"]] = relationship(cascade="all, delete-orphan")

class UserOnGroup(Base):
    __tablename__ = "user_on_group"
    user_email: Mapped[str] = mapped_column(String, ForeignKey("users.email", ondelete="CASCADE"), primary_key=True)
    group_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True)

class Evaluation(TimestampMixin, Base):
    __tablename__ = "evaluations"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    label: Mapped[str] = mapped_column(String, default="")
    group_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("groups.id", ondelete="CASCADE"))
    phase: Mapped[EvaluationPhase] = mapped_column(SQLEnum(EvaluationPhase, name="evaluation_phase"), default=EvaluationPhase.NEW)
    consultation_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    show_solutions_when_finished: Mapped[bool] = mapped_column(Boolean, default=False)

    archival_phase: Mapped[ArchivalPhase] = mapped_column(SQLEnum(ArchivalPhase, name="archival_phase"), default=ArchivalPhase.ACTIVE, index=True)
    archival_deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    archived_by_user_email: Mapped[str | None] = mapped_column(String, ForeignKey("users.email", ondelete="SET NULL"), nullable=True)
    purged_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    purged_by_user_email: Mapped[str | None] = mapped_column(String, ForeignKey("users.email", ondelete="SET NULL"), nullable=True)
    excluded_from_archival_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    excluded_from_archival_by_user_email: Mapped[str | None] = mapped_column(String, ForeignKey("users.email", ondelete="SET NULL"), nullable=True)
    excluded_from_archival_comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    group: Mapped["Group"] = relationship()
    evaluation_to_questions: Mapped[List["EvaluationToQuestion"]] = relationship(back_populates="evaluation", cascade="all, delete-orphan", order_by="EvaluationToQuestion.order")
    students: Mapped[List["UserOnEvaluation"]] = relationship(cascade="all, delete-orphan")

class EvaluationToQuestion(Base):
    __tablename__ = "evaluation_to_question"
    evaluation_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("evaluations.id", ondelete="CASCADE"), primary_key=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True)
    order: Mapped[int] = mapped_column(Integer, default=0)
    points: Mapped[float] = mapped_column(Float, default=0)

    evaluation: Mapped["Evaluation"] = relationship(back_populates="evaluation_to_questions")
    question: Mapped["Question"] = relationship(back_populates="evaluation_to_questions")

class UserOnEvaluation(Base):
    __tablename__ = "user_on_evaluation"
    user_email: Mapped[str] = mapped_column(String, ForeignKey("users.email", ondelete="CASCADE"), primary_key=True)
    evaluation_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("evaluations.id", ondelete="CASCADE"), primary_key=True)
