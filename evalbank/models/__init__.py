from evalbank.models.base import Base, TimestampMixin, to_dict
from evalbank.models.enums import (
    ArchivalPhase, CodeQuestionType, DatabaseDBMS, DatabaseQueryOutputStatus, DatabaseQueryOutputTest,
    DatabaseQueryOutputType, EvaluationPhase, MultipleChoiceGradingPolicy, QuestionSource, QuestionStatus,
    QuestionType, QuestionUsageStatus, Role, StudentAnswerStatus, StudentPermission, StudentQuestionGradingStatus,
)
from evalbank.models.evaluation import Evaluation, EvaluationToQuestion, Group, User, UserOnEvaluation, UserOnGroup
from evalbank.models.question import (
    Code, CodeReading, CodeReadingSnippet, CodeToSolutionFile, CodeToTemplateFile, CodeWriting, Database,
    DatabaseQuery, DatabaseQueryOutput, DatabaseQueryToOutputTest, DatabaseToSolutionQuery, Essay, ExactMatch,
    ExactMatchField, File, MultipleChoice, Option, Question, QuestionToTag, Sandbox, Tag, TestCase, TrueFalse, Web,
)
from evalbank.models.answer import (
    StudentAnswer, StudentAnswerCode, StudentAnswerCodeHistory, StudentAnswerCodeToFile, StudentAnswerDatabase,
    StudentAnswerDatabaseToQuery, StudentAnswerEssay, StudentAnswerExactMatch, StudentAnswerExactMatchField,
    StudentAnswerMultipleChoice, StudentAnswerTrueFalse, StudentAnswerWeb, StudentQuestionGrading,
    student_answer_multiple_choice_options,
)
