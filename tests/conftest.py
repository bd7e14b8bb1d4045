# tests/conftest.py

import datetime

import pytest

from models.roster import Roster
from models.student import Student


def make_fields(**overrides) -> dict:
    fields = {
        "first_name": "Sean",
        "last_name": "Cameron",
        "email": "scameron@mmm.edu",
        "phone_number": "555-0100",
        "date_of_birth": datetime.date(1987, 6, 21),
        "address": "1 Arrakis Way",
        "course": "Theatre",
        "semester": 3,
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def roster_path(tmp_path):
    return str(tmp_path / "students.json")


@pytest.fixture
def empty_roster(roster_path):
    return Roster.open(roster_path)


@pytest.fixture
def sample_roster(empty_roster):
    empty_roster.create_student(**make_fields())
    empty_roster.create_student(
        **make_fields(
            first_name="Paul",
            last_name="Atreides",
            email="patreides@mmm.edu",
            course="Computer Science",
            semester=1,
        )
    )
    empty_roster.create_student(
        **make_fields(
            first_name="Chani",
            last_name="Kynes",
            email="ckynes@mmm.edu",
            course="Computer Science",
            semester=3,
        )
    )
    return empty_roster


@pytest.fixture
def sample_student():
    return Student(
        student_id=1001,
        first_name="Sean",
        last_name="Cameron",
        email="scameron@mmm.edu",
        phone_number="555-0100",
        date_of_birth=datetime.date(1987, 6, 21),
        address="1 Arrakis Way",
        course="Theatre",
        semester=3,
        enrollment_date=datetime.date(2025, 8, 25),
    )
