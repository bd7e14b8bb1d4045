# models/roster.py

"""
The Roster model is the central data object of the program and the "source of truth" for all student records.

Students are stored in a dictionary keyed by their integer id. Ids come from a counter that starts at 1001 and only
ever moves forward, so an id is never issued twice, even after the record that held it is deleted. Email addresses
are unique across the roster, compared without regard to case.

Every successful mutation is written to the snapshot file immediately. A failed write is logged and reported in the
response payload, but never undoes the in-memory change. The snapshot file is read exactly once, when the roster is
opened; an unreadable file is moved aside and the roster starts empty.

Read-only views (searching, sorting, statistics) work on `snapshot()`, a list of independent copies of the records.
"""

from __future__ import annotations

import datetime
import logging
import threading
import traceback
from collections.abc import Callable

from core import queries
from core.response import ErrorCode, Response
from core.statistics import compute_statistics
from core.storage import FIRST_STUDENT_ID, RosterFile
from models.student import Student

logger = logging.getLogger(__name__)


class Roster:

    def __init__(self, roster_file: RosterFile):
        self._students: dict[int, Student] = {}
        self._next_student_id: int = FIRST_STUDENT_ID
        self._file: RosterFile = roster_file
        self._lock = threading.RLock()
        self._load_response: Response | None = None

    # === properties ===

    @property
    def path(self) -> str:
        return self._file.path

    @property
    def count(self) -> int:
        return len(self._students)

    @property
    def next_student_id(self) -> int:
        return self._next_student_id

    @property
    def load_response(self) -> Response | None:
        return self._load_response

    # === public classmethods ===

    @classmethod
    def open(cls, path: str) -> Roster:
        """
        Creates a `Roster` backed by the snapshot file at `path` and loads its contents.

        Args:
            path (str): The snapshot file. It does not need to exist yet.

        Returns:
            Roster: The loaded roster. Never raises for a missing or unreadable file.

        Notes:
            - If the file does not exist, the roster starts empty and the first id issued is 1001.
            - If the file exists but cannot be read, the failure is logged, the file is renamed to
              `<path>.corrupt`, and the roster starts empty. The failed `Response` is kept in `load_response`
              so the caller can tell the user.
        """
        roster = cls(RosterFile(path))
        roster._load()
        return roster

    # === persistence and import ===

    def _load(self) -> None:
        load_response = self._file.load()

        with self._lock:
            if load_response.success:
                self._students = load_response.data["students"]
                self._next_student_id = load_response.data["next_student_id"]
                self._load_response = load_response
                return

            logger.error("%s Starting with an empty roster.", load_response.detail)

            backup_path = self._file.quarantine()
            if backup_path:
                logger.warning("Unreadable roster file moved to %s", backup_path)

            self._students = {}
            self._next_student_id = FIRST_STUDENT_ID
            self._load_response = Response.fail(
                detail=load_response.detail,
                error=load_response.error,
                status_code=load_response.status_code,
                data={"backup_path": backup_path},
            )

    def save(self) -> Response:
        """
        Writes every record and the id counter to the snapshot file.

        Returns:
            Response: The `RosterFile.save()` response. Failures are logged here as well.
        """
        with self._lock:
            save_response = self._file.save(
                list(self._students.values()), self._next_student_id
            )

        if not save_response.success:
            logger.error(save_response.detail)

        return save_response

    def close(self) -> Response:
        """
        Performs a final save. Calling it more than once is harmless.
        """
        return self.save()

    def _mutation_succeeded(self, detail: str, data: dict | None = None) -> Response:
        """
        Persists after a successful mutation and builds the caller's success response.

        Notes:
            - A failed write does not turn the mutation into a failure. The response stays successful, with
              `data["persisted"]` set to False and the write error appended to `detail`.
        """
        save_response = self.save()
        data = dict(data or {})
        data["persisted"] = save_response.success

        if not save_response.success:
            detail = f"{detail} Warning: changes could not be saved to disk ({save_response.detail})"

        return Response.succeed(detail=detail, data=data)

    # === data accessors ===

    def snapshot(self) -> list[Student]:
        """
        Returns independent copies of every live record, in no particular order.
        """
        with self._lock:
            return [student.copy() for student in self._students.values()]

    def find_student_by_id(self, student_id: int) -> Response:
        """
        Finds a `Student` by id.

        Args:
            student_id (int): The unique id of the `Student`.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the `Student` was found.
                    - False if no match is found.
                - detail (str | None):
                    - On failure, a human-readable explanation of the problem.
                    - On success, None.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if no match is found.
                - status_code (int | None):
                    - 200 on success
                    - 404 if no match is found
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (Student): A copy of the matched `Student`.
                    - On failure:
                        - None

        Notes:
            - This method is read-only and does not raise.
            - The returned record is a copy; changing it does not change the roster. Use `update_student()`.
        """
        with self._lock:
            student = self._students.get(student_id)

            if student is None:
                return self._not_found(student_id)

            return Response.succeed(data={"record": student.copy()})

    def get_all_students(self) -> Response:
        return Response.succeed(data={"records": self.snapshot()})

    # --- search and sort views ---

    def _view(self, view_fn: Callable[[list[Student]], list[Student]]) -> Response:
        return Response.succeed(data={"records": view_fn(self.snapshot())})

    def search_by_name(self, text: str) -> Response:
        return self._view(lambda students: queries.search_by_name(students, text))

    def search_by_course(self, text: str) -> Response:
        return self._view(lambda students: queries.search_by_course(students, text))

    def search_by_semester(self, semester: int) -> Response:
        return self._view(
            lambda students: queries.search_by_semester(students, semester)
        )

    def sort_by_name(self) -> Response:
        return self._view(queries.sort_by_name)

    def sort_by_gpa(self) -> Response:
        return self._view(queries.sort_by_gpa)

    def sort_by_id(self) -> Response:
        return self._view(queries.sort_by_id)

    # --- statistics ---

    def get_statistics(self) -> Response:
        """
        Computes totals, per-course counts, and the average GPA over a snapshot.

        Returns:
            Response: Always successful. `data` holds the keys produced by `compute_statistics()` plus
            "next_student_id" (int).
        """
        with self._lock:
            students = self.snapshot()
            next_student_id = self._next_student_id

        statistics = compute_statistics(students)
        statistics["next_student_id"] = next_student_id

        return Response.succeed(data=statistics)

    # === data manipulators ===

    def create_student(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone_number: str,
        date_of_birth: datetime.date,
        address: str,
        course: str,
        semester: int,
    ) -> Response:
        """
        Creates a new `Student`, assigns it the next id, and adds it to the roster.

        Args:
            first_name (str): Already-trimmed first name.
            last_name (str): Already-trimmed last name.
            email (str): Email address, unique across the roster regardless of case.
            phone_number (str): Phone number as entered.
            date_of_birth (datetime.date): Parsed date of birth.
            address (str): Postal address.
            course (str): Free-text course name.
            semester (int): Current semester, already validated as positive.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the `Student` was created, even if the snapshot file could not be written.
                    - False if the email is already in use or if unexpected errors occur.
                - detail (str | None):
                    - A human-readable description of the result.
                - error (ErrorCode | str | None):
                    - `ErrorCode.DUPLICATE_EMAIL` if another student has the same email.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): A copy of the new `Student`.
                        - "persisted" (bool): Whether the snapshot file was written.
                    - On failure:
                        - None

        Notes:
            - The new record starts ungraded (GPA 0.0), with no subjects, enrolled today.
            - A failed create leaves the roster and the id counter untouched.
        """
        with self._lock:
            try:
                self.require_unique_student_email(email)

                student = Student(
                    student_id=self._next_student_id,
                    first_name=first_name,
                    last_name=last_name,
                    email=email,
                    phone_number=phone_number,
                    date_of_birth=date_of_birth,
                    address=address,
                    course=course,
                    semester=semester,
                )

                self._students[student.student_id] = student
                self._next_student_id += 1

            except ValueError as e:
                return Response.fail(
                    detail=f"Unique record validation failed: {e}",
                    error=ErrorCode.DUPLICATE_EMAIL,
                )

            except Exception as e:
                logger.exception("Unexpected error while creating a student")
                return Response.fail(
                    detail=f"Unexpected error: {e}",
                    error=ErrorCode.INTERNAL_ERROR,
                    trace=traceback.format_exc(),
                )

            logger.info("Created student %d (%s)", student.student_id, student.email)

            return self._mutation_succeeded(
                detail=f"Student successfully added with ID: {student.student_id}.",
                data={"record": student.copy()},
            )

    def update_student(
        self,
        student_id: int,
        first_name: str,
        last_name: str,
        email: str,
        phone_number: str,
        address: str,
        course: str,
        semester: int,
        gpa: float,
    ) -> Response:
        """
        Overwrites every mutable field of an existing `Student`.

        Args:
            student_id (int): The id of the `Student` to update.
            first_name, last_name, email, phone_number, address, course (str): New values.
            semester (int): New semester.
            gpa (float): New GPA; 0.0 marks the student as ungraded.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record was updated, even if the snapshot file could not be written.
                    - False if the id is unknown, the email belongs to another student, or unexpected errors occur.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if no student has this id.
                    - `ErrorCode.DUPLICATE_EMAIL` if a *different* student already uses the email.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 404 if the student cannot be found
                    - 400 for other failures
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): A copy of the updated `Student`.
                        - "persisted" (bool): Whether the snapshot file was written.

        Notes:
            - `student_id`, `date_of_birth`, and `enrollment_date` never change.
            - Keeping the student's own email, in any casing, is not a conflict.
            - On failure no field is changed.
        """
        with self._lock:
            student = self._students.get(student_id)

            if student is None:
                return self._not_found(student_id)

            try:
                self.require_unique_student_email(email, exclude_id=student_id)

            except ValueError as e:
                return Response.fail(
                    detail=f"Unique record validation failed: {e}",
                    error=ErrorCode.DUPLICATE_EMAIL,
                )

            try:
                student.first_name = first_name
                student.last_name = last_name
                student.email = email
                student.phone_number = phone_number
                student.address = address
                student.course = course
                student.semester = semester
                student.gpa = gpa

            except Exception as e:
                logger.exception("Unexpected error while updating student %d", student_id)
                return Response.fail(
                    detail=f"Unexpected error: {e}",
                    error=ErrorCode.INTERNAL_ERROR,
                    trace=traceback.format_exc(),
                )

            logger.info("Updated student %d", student_id)

            return self._mutation_succeeded(
                detail="Student successfully updated.",
                data={"record": student.copy()},
            )

    def delete_student(self, student_id: int) -> Response:
        """
        Permanently removes a `Student` from the roster.

        Args:
            student_id (int): The id of the `Student` to remove.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the `Student` was removed, even if the snapshot file could not be written.
                    - False if the id is unknown.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if no student has this id.
                - status_code (int | None):
                    - 200 on success
                    - 404 if the student cannot be found
                - data (dict | None):
                    - On success:
                        - "persisted" (bool): Whether the snapshot file was written.

        Notes:
            - The id is retired; it is never issued again.
        """
        with self._lock:
            try:
                del self._students[student_id]

            except KeyError:
                return self._not_found(student_id)

            logger.info("Deleted student %d", student_id)

            return self._mutation_succeeded(
                detail="Student successfully removed from the roster."
            )

    # --- subject methods ---

    def add_subject(self, student_id: int, subject: str) -> Response:
        """
        Adds a subject to a student's subject set.

        Returns:
            Response: `ErrorCode.NOT_FOUND` if the id is unknown. Adding a subject the student already has is a
            successful no-op and does not write the snapshot file. `data["record"]` holds a copy of the student.
        """
        return self._change_subjects(student_id, subject, add=True)

    def remove_subject(self, student_id: int, subject: str) -> Response:
        """
        Removes a subject from a student's subject set.

        Returns:
            Response: `ErrorCode.NOT_FOUND` if the id is unknown. Removing a subject the student does not have
            is a successful no-op and does not write the snapshot file. `data["record"]` holds a copy of the student.
        """
        return self._change_subjects(student_id, subject, add=False)

    def _change_subjects(self, student_id: int, subject: str, add: bool) -> Response:
        with self._lock:
            student = self._students.get(student_id)

            if student is None:
                return self._not_found(student_id)

            if add:
                changed = student.add_subject(subject)
                verb = "added to" if changed else "already listed for"
            else:
                changed = student.remove_subject(subject)
                verb = "removed from" if changed else "not listed for"

            detail = f"Subject '{subject}' {verb} {student.full_name}."

            if not changed:
                return Response.succeed(
                    detail=f"{detail} No changes made.",
                    data={"record": student.copy()},
                )

            logger.info("Subject %r %s student %d", subject, verb, student_id)

            return self._mutation_succeeded(
                detail=detail,
                data={"record": student.copy()},
            )

    # === data validators ===

    def require_unique_student_email(
        self, email: str, exclude_id: int | None = None
    ) -> None:
        """
        Validates that no other student shares the given email address.

        Args:
            email (str): The email address to validate for uniqueness.
            exclude_id (int | None): A student whose own email is exempt, used when updating.

        Raises:
            ValueError: If a different student with the same email, ignoring case, already exists.

        Notes:
            - This is a linear scan over every live record.
        """
        normalized = self._normalize(email)
        if any(
            self._normalize(s.email) == normalized and s.student_id != exclude_id
            for s in self._students.values()
        ):
            raise ValueError(f"A student with the email '{email}' already exists.")

    # === helper methods ===

    def _normalize(self, input: str) -> str:
        return input.strip().lower()

    def _not_found(self, student_id: int) -> Response:
        return Response.fail(
            detail=f"No student found with ID: {student_id}.",
            error=ErrorCode.NOT_FOUND,
            status_code=404,
        )

    # === dunder methods ===

    def __len__(self) -> int:
        return len(self._students)

    def __contains__(self, student_id: object) -> bool:
        return student_id in self._students

    def __enter__(self) -> Roster:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Roster({self._file.path!r}, {len(self._students)} students, next id {self._next_student_id})"
