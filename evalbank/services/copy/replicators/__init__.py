from evalbank.services.copy.replicators.base import QuestionReplicator
from evalbank.services.copy.replicators.code import CodeReplicator
from evalbank.services.copy.replicators.database import DatabaseReplicator
from evalbank.services.copy.replicators.essay import EssayReplicator
from evalbank.services.copy.replicators.exact_match import ExactMatchReplicator
from evalbank.services.copy.replicators.multiple_choice import MultipleChoiceReplicator
from evalbank.services.copy.replicators.true_false import TrueFalseReplicator
from evalbank.services.copy.replicators.web import WebReplicator
