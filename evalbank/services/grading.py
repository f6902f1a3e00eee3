def compute_coefficient(grading_points: float, points: float) -> float:
    """Ratio of obtained to available points.

    With nothing to earn, a score of zero counts as full success and anything
    else as none.
    """
    if grading_points == 0:
        return 1 if points == 0 else 0
    return points / grading_points
