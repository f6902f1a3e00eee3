import enum

class QuestionType(str, enum.Enum):
    MULTIPLE_CHOICE = "multipleChoice"
    TRUE_FALSE = "trueFalse"
    ESSAY = "essay"
    WEB = "web"
    EXACT_MATCH = "exactMatch"
    CODE = "code"
    DATABASE = "database"

class QuestionStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"

class QuestionSource(str, enum.Enum):
    BANK = "BANK"
    COPY = "COPY"
    EVAL = "EVAL"

class QuestionUsageStatus(str, enum.Enum):
    UNUSED = "UNUSED"
    USED = "USED"
    NOT_APPLICABLE = "NOT_APPLICABLE"

class Role(str, enum.Enum):
    PROFESSOR = "PROFESSOR"
    STUDENT = "STUDENT"
    SUPER_ADMIN = "SUPER_ADMIN"
    ARCHIVIST = "ARCHIVIST"

class EvaluationPhase(str, enum.Enum):
    NEW = "NEW"
    SETTINGS = "SETTINGS"
    COMPOSITION = "COMPOSITION"
    REGISTRATION = "REGISTRATION"
    IN_PROGRESS = "IN_PROGRESS"
    GRADING = "GRADING"
    FINISHED = "FINISHED"

class ArchivalPhase(str, enum.Enum):
    ACTIVE = "ACTIVE"
    MARKED_FOR_ARCHIVAL = "MARKED_FOR_ARCHIVAL"
    ARCHIVED = "ARCHIVED"
    PURGED = "PURGED"
    EXCLUDED_FROM_ARCHIVAL = "EXCLUDED_FROM_ARCHIVAL"
    PURGED_WITHOUT_ARCHIVAL = "PURGED_WITHOUT_ARCHIVAL"

class StudentPermission(str, enum.Enum):
    UPDATE = "UPDATE"
    VIEW = "VIEW"
    HIDDEN = "HIDDEN"

class StudentAnswerStatus(str, enum.Enum):
    MISSING = "MISSING"
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTED = "SUBMITTED"

class StudentQuestionGradingStatus(str, enum.Enum):
    UNGRADED = "UNGRADED"
    GRADED = "GRADED"
    AUTOGRADED = "AUTOGRADED"

class MultipleChoiceGradingPolicy(str, enum.Enum):
    ALL_OR_NOTHING = "ALL_OR_NOTHING"
    GRADUAL_CREDIT = "GRADUAL_CREDIT"

class CodeQuestionType(str, enum.Enum):
    CODE_WRITING = "codeWriting"
    CODE_READING = "codeReading"

class DatabaseQueryOutputTest(str, enum.Enum):
    IGNORE_COLUMN_ORDER = "IGNORE_COLUMN_ORDER"
    IGNORE_ROW_ORDER = "IGNORE_ROW_ORDER"
    IGNORE_EXTRA_COLUMNS = "IGNORE_EXTRA_COLUMNS"
    IGNORE_COLUMN_TYPES = "IGNORE_COLUMN_TYPES"

class DatabaseQueryOutputStatus(str, enum.Enum):
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"
    WARNING = "WARNING"
    RUNNING = "RUNNING"
    NEUTRAL = "NEUTRAL"

class DatabaseQueryOutputType(str, enum.Enum):
    TEXT = "TEXT"
    SCALAR = "SCALAR"
    TABULAR = "TABULAR"

class DatabaseDBMS(str, enum.Enum):
    POSTGRES = "POSTGRES"
