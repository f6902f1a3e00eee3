"""
Code questions carry the deepest tree: an optional sandbox, then either a
code-writing part (test cases, template and solution files) or a code-reading
part (context and snippets). Files are duplicated so the copy never shares a
``File`` row with its source.
"""
from evalbank.models import (
    Code, CodeReading, CodeReadingSnippet, CodeToSolutionFile, CodeToTemplateFile, CodeWriting,
    File, QuestionType, Sandbox, TestCase,
)
from evalbank.services.copy.replicators.base import QuestionReplicator

def _default(value, fallback):
    return fallback if value is None else value

def _copy_file(file: dict) -> File:
    return File(path=file["path"], content=file["content"], created_at=file["created_at"])

class CodeReplicator(QuestionReplicator):
    question_type = QuestionType.CODE
    relation = "code"

    def replicate(self, db, question, base_fields):
        code = self.source_relation(question)
        new_code = Code(language=code["language"], code_type=code["code_type"])

        sandbox = code.get("sandbox")
        if sandbox:
            new_code.sandbox = Sandbox(image=sandbox["image"], before_all=sandbox["before_all"])

        writing = code.get("code_writing")
        if writing:
            new_code.code_writing = CodeWriting(
                code_check_enabled=_default(writing.get("code_check_enabled"), True),
                test_cases=[
                    TestCase(index=tc["index"], exec=tc["exec"], input=tc["input"], expected_output=tc["expected_output"])
                    for tc in writing.get("test_cases") or []
                ],
                template_files=[
                    CodeToTemplateFile(order=f["order"], student_permission=f["student_permission"], file=_copy_file(f["file"]))
                    for f in writing.get("template_files") or []
                ],
                solution_files=[
                    CodeToSolutionFile(order=f["order"], file=_copy_file(f["file"]))
                    for f in writing.get("solution_files") or []
                ],
            )

        reading = code.get("code_reading")
        if reading:
            new_code.code_reading = CodeReading(
                context_exec=reading.get("context_exec"),
                context_path=reading.get("context_path"),
                context=reading.get("context"),
                student_output_test=_default(reading.get("student_output_test"), False),
                snippets=[
                    CodeReadingSnippet(order=s["order"], snippet=s.get("snippet"), output=s.get("output"))
                    for s in reading.get("snippets") or []
                ],
            )

        return self.create_question(db, base_fields, code=new_code)
