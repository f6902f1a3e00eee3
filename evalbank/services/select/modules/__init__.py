from evalbank.services.select.modules.base import select_base
from evalbank.services.select.modules.gradings import select_student_gradings
from evalbank.services.select.modules.official_answers import select_official_answers
from evalbank.services.select.modules.student_answers import select_student_answers
from evalbank.services.select.modules.tags import select_question_tags
from evalbank.services.select.modules.type_specific import select_type_specific
