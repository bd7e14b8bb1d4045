# core/storage.py

"""
Reads and writes the roster snapshot file.

The whole roster lives in one JSON document:

    {
      "next_student_id": 1004,
      "students": [ {...}, {...} ]
    }

Saving always rewrites the complete document. Loading either returns every record and
the id counter, or fails as a whole; there is no partial load.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from typing import Any

from core.response import ErrorCode, Response
from models.student import Student

logger = logging.getLogger(__name__)

FIRST_STUDENT_ID = 1001


class RosterFile:

    def __init__(self, path: str):
        self._path: str = path

    # === properties ===

    @property
    def path(self) -> str:
        return self._path

    @property
    def exists(self) -> bool:
        return os.path.isfile(self._path)

    # === persistence and import ===

    def save(self, students: list[Student], next_student_id: int) -> Response:
        """
        Serializes the full roster and overwrites the snapshot file.

        Args:
            students (list[Student]): Every live record.
            next_student_id (int): The id the next created record will receive.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the file was written.
                    - False if serialization or the write failed.
                - detail (str | None):
                    - On success, a simple confirmation message.
                    - On failure, a description of the error.
                - error (ErrorCode | str | None):
                    - `ErrorCode.PERSISTENCE_WRITE_FAILED` on any failure.
                - status_code (int | None):
                    - 200 on success
                    - 500 on failure
                - data (dict | None):
                    - Always None, this method does not return any payload.

        Notes:
            - The document is written to a temporary file in the same directory and moved into place,
              so a failed write leaves the previous snapshot intact.
            - An existing file keeps its permission bits. A new file gets the default mode for the current umask.
        """
        payload = {
            "next_student_id": next_student_id,
            "students": [
                s.to_dict() for s in sorted(students, key=lambda x: x.student_id)
            ],
        }

        dir_path = os.path.dirname(os.path.abspath(self._path))
        temp_path = None

        try:
            fd, temp_path = tempfile.mkstemp(
                prefix=".students-", suffix=".tmp", dir=dir_path
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, sort_keys=True, allow_nan=False)

            os.chmod(temp_path, self._file_mode())
            os.replace(temp_path, self._path)
            temp_path = None

        except (OSError, TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Failed to write roster to {self._path}: {e}",
                error=ErrorCode.PERSISTENCE_WRITE_FAILED,
                status_code=500,
            )

        finally:
            if temp_path is not None and os.path.exists(temp_path):
                os.remove(temp_path)

        logger.debug("Saved %d students to %s", len(students), self._path)

        return Response.succeed(detail="Roster successfully saved to disk.")

    def load(self) -> Response:
        """
        Reads the snapshot file and rebuilds every `Student` record.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the file is missing (an empty roster) or was read completely.
                    - False if the file exists but cannot be read or deserialized.
                - detail (str | None):
                    - On failure, a description of the error.
                - error (ErrorCode | str | None):
                    - `ErrorCode.PERSISTENCE_LOAD_FAILED` on any failure.
                - status_code (int | None):
                    - 200 on success
                    - 500 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "students" (dict[int, Student]): Records keyed by id.
                        - "next_student_id" (int): The counter, never lower than the highest id plus one.
                        - "found" (bool): False if no snapshot file existed.
                    - On failure:
                        - None
        """
        if not self.exists:
            logger.info("No roster file at %s, starting empty", self._path)
            return Response.succeed(
                data={
                    "students": {},
                    "next_student_id": FIRST_STUDENT_ID,
                    "found": False,
                }
            )

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                payload = json.load(f)

            students, next_student_id = self._parse(payload)

        except json.JSONDecodeError as e:
            return Response.fail(
                detail=f"Failed to parse roster file {self._path}: {e}",
                error=ErrorCode.PERSISTENCE_LOAD_FAILED,
                status_code=500,
            )

        except (KeyError, TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Roster file {self._path} is incompatible: {e!r}",
                error=ErrorCode.PERSISTENCE_LOAD_FAILED,
                status_code=500,
            )

        except OSError as e:
            return Response.fail(
                detail=f"Failed to read roster file {self._path}: {e}",
                error=ErrorCode.PERSISTENCE_LOAD_FAILED,
                status_code=500,
            )

        logger.info("Loaded %d students from %s", len(students), self._path)

        return Response.succeed(
            data={
                "students": students,
                "next_student_id": next_student_id,
                "found": True,
            }
        )

    def quarantine(self) -> str | None:
        """
        Moves an unreadable snapshot file aside so the next save cannot overwrite it.

        The first backup is `<path>.corrupt`. Later ones get a numeric suffix (`<path>.corrupt.1`, ...), so an
        earlier backup is never replaced.

        Returns:
            The path the file was moved to, or None if there was nothing to move or the move failed.
        """
        if not self.exists:
            return None

        backup_path = f"{self._path}.corrupt"
        suffix = 1
        while os.path.exists(backup_path):
            backup_path = f"{self._path}.corrupt.{suffix}"
            suffix += 1

        try:
            os.replace(self._path, backup_path)

        except OSError:
            logger.exception("Could not move unreadable roster file %s", self._path)
            return None

        return backup_path

    # === helper methods ===

    def _file_mode(self) -> int:
        if self.exists:
            return stat.S_IMODE(os.stat(self._path).st_mode)

        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

    @staticmethod
    def _parse(payload: Any) -> tuple[dict[int, Student], int]:
        if not isinstance(payload, dict):
            raise ValueError("Expected the roster file to contain an object.")

        records = payload["students"]
        if not isinstance(records, list):
            raise ValueError("Expected 'students' to contain a list.")

        students: dict[int, Student] = {}
        emails: set[str] = set()
        for record_dict in records:
            student = Student.from_dict(record_dict)
            if student.student_id in students:
                raise ValueError(f"Duplicate student id {student.student_id}.")
            if student.email.lower() in emails:
                raise ValueError(f"Duplicate student email '{student.email}'.")
            students[student.student_id] = student
            emails.add(student.email.lower())

        next_student_id = int(payload["next_student_id"])
        if students:
            next_student_id = max(next_student_id, max(students) + 1)

        return students, max(next_student_id, FIRST_STUDENT_ID)
