# tests/test_queries.py

import datetime

import pytest

from core import queries
from models.student import Student


def make_student(student_id, first_name, last_name, course="Theatre", semester=1, gpa=0.0):
    return Student(
        student_id=student_id,
        first_name=first_name,
        last_name=last_name,
        email=f"{first_name.lower()}@mmm.edu",
        phone_number="",
        date_of_birth=datetime.date(2000, 1, 1),
        address="",
        course=course,
        semester=semester,
        gpa=gpa,
    )


@pytest.fixture
def students():
    return [
        make_student(1003, "anna", "Smith", "Computer Science", 2, 3.5),
        make_student(1001, "Bob", "Anderson", "History", 1, 0.0),
        make_student(1004, "Cara", "Jones", "computer engineering", 2, 3.5),
        make_student(1002, "Dan", "Brown", "Theatre", 4, 2.0),
    ]


def ids(records):
    return [s.student_id for s in records]


def test_search_by_name_matches_first_last_or_full(students):
    assert ids(queries.search_by_name(students, "AN")) == [1003, 1001, 1002]
    assert ids(queries.search_by_name(students, "cara j")) == [1004]
    assert queries.search_by_name(students, "zed") == []


def test_search_by_course_ignores_case(students):
    assert ids(queries.search_by_course(students, "COMPUTER")) == [1003, 1004]


def test_search_by_semester_is_exact(students):
    assert ids(queries.search_by_semester(students, 2)) == [1003, 1004]
    assert queries.search_by_semester(students, 3) == []


def test_sort_by_name_ignores_case(students):
    assert ids(queries.sort_by_name(students)) == [1003, 1001, 1004, 1002]


def test_sort_by_gpa_descending_with_id_tie_break(students):
    result = queries.sort_by_gpa(students)

    assert ids(result) == [1003, 1004, 1002, 1001]
    assert all(a.gpa >= b.gpa for a, b in zip(result, result[1:]))


def test_sort_by_id_strictly_ascending(students):
    result = ids(queries.sort_by_id(students))

    assert result == [1001, 1002, 1003, 1004]
    assert all(a < b for a, b in zip(result, result[1:]))


def test_views_do_not_mutate_input(students):
    before = ids(students)

    queries.sort_by_name(students)
    queries.sort_by_gpa(students)
    queries.sort_by_id(students)
    queries.search_by_name(students, "a")

    assert ids(students) == before
