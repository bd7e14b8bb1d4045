# core/queries.py

"""
Read-only search and sort views over a collection of `Student` records.

Every function takes an iterable of students and returns a new list; the input is
never mutated. Callers pass `Roster.snapshot()` so the view is independent of later
roster changes.
"""

from collections.abc import Iterable

from models.student import Student

# === search views ===


def search_by_name(students: Iterable[Student], text: str) -> list[Student]:
    """
    Returns students whose full, first, or last name contains `text`, ignoring case.
    """
    query = text.lower()

    return [
        student
        for student in students
        if query in student.full_name.lower()
        or query in student.first_name.lower()
        or query in student.last_name.lower()
    ]


def search_by_course(students: Iterable[Student], text: str) -> list[Student]:
    query = text.lower()

    return [student for student in students if query in student.course.lower()]


def search_by_semester(students: Iterable[Student], semester: int) -> list[Student]:
    return [student for student in students if student.semester == semester]


# === sort views ===

# ties on name or gpa fall back to ascending id so the order is deterministic


def sort_by_name(students: Iterable[Student]) -> list[Student]:
    return sorted(students, key=lambda x: (x.full_name.lower(), x.student_id))


def sort_by_gpa(students: Iterable[Student]) -> list[Student]:
    return sorted(students, key=lambda x: (-x.gpa, x.student_id))


def sort_by_id(students: Iterable[Student]) -> list[Student]:
    return sorted(students, key=lambda x: x.student_id)
