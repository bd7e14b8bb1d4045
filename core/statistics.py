# core/statistics.py

"""
Aggregate figures over a collection of `Student` records.
"""

from collections import Counter
from collections.abc import Iterable

from models.student import Student


def compute_statistics(students: Iterable[Student]) -> dict:
    """
    Computes roster-wide totals, per-course counts, and the average GPA.

    Args:
        students (Iterable[Student]): The records to aggregate, typically `Roster.snapshot()`.

    Returns:
        A dictionary with the following keys:
            - "total_students" (int): Number of records.
            - "course_counts" (Counter[str]): Records per course, keyed by the exact course string.
            - "graded_students" (int): Number of records with a GPA above the ungraded sentinel.
            - "average_gpa" (float | None): Mean GPA of graded records only, or None if there are none.

    Notes:
        - Ungraded students (GPA of 0.0) are left out of both the sum and the count for the average.
    """
    total_students = 0
    course_counts: Counter[str] = Counter()
    graded_gpas: list[float] = []

    for student in students:
        total_students += 1
        course_counts[student.course] += 1

        if student.is_graded:
            graded_gpas.append(student.gpa)

    average_gpa = sum(graded_gpas) / len(graded_gpas) if graded_gpas else None

    return {
        "total_students": total_students,
        "course_counts": course_counts,
        "graded_students": len(graded_gpas),
        "average_gpa": average_gpa,
    }
