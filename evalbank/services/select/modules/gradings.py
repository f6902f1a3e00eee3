def select_student_gradings() -> dict:
    return {
        "student_answer": {
            "student_grading": {
                "status": True,
                "points_obtained": True,
                "comment": True,
                "question_id": True,
                "user_email": True,
                "signed_by": {"email": True, "name": True, "image": True},
            }
        }
    }
