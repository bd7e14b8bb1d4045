# models/student.py

"""
Represents a single student's record in the roster.

Stores identifying and contact information, the student's course and semester, a
GPA, and the set of subjects the student is taking.

Includes functionality for:
- Deriving the full name, age, and graded status
- Adding and removing subjects as set operations
- Serializing to and from JSON-compatible dictionaries
- Mutating individual fields via property access

`student_id`, `date_of_birth`, and `enrollment_date` are read-only once the object
exists. A GPA of 0.0 means the student has not been graded yet.
"""

from __future__ import annotations

import datetime
import math

UNGRADED_GPA = 0.0


class Student:

    def __init__(
        self,
        student_id: int,
        first_name: str,
        last_name: str,
        email: str,
        phone_number: str,
        date_of_birth: datetime.date,
        address: str,
        course: str,
        semester: int,
        gpa: float = UNGRADED_GPA,
        subjects: set[str] | None = None,
        enrollment_date: datetime.date | None = None,
    ):
        self._student_id: int = student_id
        self._first_name: str = first_name
        self._last_name: str = last_name
        self._email: str = email
        self._phone_number: str = phone_number
        self._date_of_birth: datetime.date = date_of_birth
        self._address: str = address
        self._course: str = course
        self._semester: int = semester
        self._gpa: float = gpa
        self._subjects: set[str] = set(subjects) if subjects else set()
        self._enrollment_date: datetime.date = (
            enrollment_date if enrollment_date is not None else datetime.date.today()
        )

    # === properties ===

    @property
    def student_id(self) -> int:
        return self._student_id

    @property
    def first_name(self) -> str:
        return self._first_name

    @first_name.setter
    def first_name(self, first_name: str) -> None:
        self._first_name = first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @last_name.setter
    def last_name(self, last_name: str) -> None:
        self._last_name = last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def email(self) -> str:
        return self._email

    @email.setter
    def email(self, email: str) -> None:
        self._email = email

    @property
    def phone_number(self) -> str:
        return self._phone_number

    @phone_number.setter
    def phone_number(self, phone_number: str) -> None:
        self._phone_number = phone_number

    @property
    def date_of_birth(self) -> datetime.date:
        return self._date_of_birth

    @property
    def address(self) -> str:
        return self._address

    @address.setter
    def address(self, address: str) -> None:
        self._address = address

    @property
    def course(self) -> str:
        return self._course

    @course.setter
    def course(self, course: str) -> None:
        self._course = course

    @property
    def semester(self) -> int:
        return self._semester

    @semester.setter
    def semester(self, semester: int) -> None:
        self._semester = semester

    @property
    def gpa(self) -> float:
        return self._gpa

    @gpa.setter
    def gpa(self, gpa: float) -> None:
        self._gpa = gpa

    @property
    def is_graded(self) -> bool:
        return self._gpa > UNGRADED_GPA

    @property
    def subjects(self) -> frozenset[str]:
        return frozenset(self._subjects)

    @property
    def enrollment_date(self) -> datetime.date:
        return self._enrollment_date

    def age(self, today: datetime.date | None = None) -> int:
        """
        Returns the student's age as the difference between the current year and the birth year.

        Args:
            today (datetime.date | None): Reference date, defaults to today.

        Notes:
            - Only the years are compared, so the result can be one year high before the birthday.
        """
        today = today or datetime.date.today()
        return today.year - self._date_of_birth.year

    # === subject methods ===

    def add_subject(self, subject: str) -> bool:
        """Adds a subject, returning False if it was already present."""
        if subject in self._subjects:
            return False
        self._subjects.add(subject)
        return True

    def remove_subject(self, subject: str) -> bool:
        """Removes a subject, returning False if it was not present."""
        if subject not in self._subjects:
            return False
        self._subjects.discard(subject)
        return True

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "student_id": self._student_id,
            "first_name": self._first_name,
            "last_name": self._last_name,
            "email": self._email,
            "phone_number": self._phone_number,
            "date_of_birth": self._date_of_birth.isoformat(),
            "address": self._address,
            "course": self._course,
            "semester": self._semester,
            "gpa": self._gpa,
            "subjects": sorted(self._subjects),
            "enrollment_date": self._enrollment_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        """
        Rebuilds a `Student` from a dictionary produced by `to_dict()`.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If a field has the wrong type or an unusable value.
        """
        gpa = float(data.get("gpa", UNGRADED_GPA))
        if not math.isfinite(gpa):
            raise ValueError(f"Field 'gpa' must be a finite number, got {gpa!r}.")

        subjects = data.get("subjects", [])
        if not isinstance(subjects, list) or not all(
            isinstance(s, str) for s in subjects
        ):
            raise ValueError(f"Field 'subjects' must be a list of strings, got {subjects!r}.")

        return cls(
            student_id=int(data["student_id"]),
            first_name=_require_str(data, "first_name"),
            last_name=_require_str(data, "last_name"),
            email=_require_str(data, "email"),
            phone_number=_require_str(data, "phone_number"),
            date_of_birth=datetime.date.fromisoformat(
                _require_str(data, "date_of_birth")
            ),
            address=_require_str(data, "address"),
            course=_require_str(data, "course"),
            semester=int(data["semester"]),
            gpa=gpa,
            subjects=set(subjects),
            enrollment_date=datetime.date.fromisoformat(
                _require_str(data, "enrollment_date")
            ),
        )

    def copy(self) -> Student:
        return Student.from_dict(self.to_dict())

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self._student_id == other._student_id

    def __hash__(self) -> int:
        return hash(self._student_id)

    def __repr__(self) -> str:
        return f"Student({self._student_id}, {self._first_name}, {self._last_name}, {self._email}, {self._course}, {self._semester})"

    def __str__(self) -> str:
        return f"STUDENT: {self.full_name} - (ID: {self._student_id})"


def _require_str(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"Field '{key}' must be a string, got {value!r}.")
    return value
