# tests/test_roster.py

import json
import os

from conftest import make_fields

from core.response import ErrorCode
from models.roster import Roster

# === roster lifecycle ===


def test_open_without_file_starts_empty(empty_roster, roster_path):
    assert empty_roster.count == 0
    assert len(empty_roster) == 0
    assert empty_roster.next_student_id == 1001
    assert empty_roster.load_response.success
    assert not os.path.exists(roster_path)


def test_first_student_receives_id_1001(empty_roster):
    response = empty_roster.create_student(**make_fields())

    assert response.success
    assert response.data["record"].student_id == 1001
    assert response.data["persisted"]


def test_close_saves_roster(empty_roster, roster_path):
    response = empty_roster.close()

    assert response.success
    with open(roster_path) as f:
        data = json.load(f)
    assert data == {"next_student_id": 1001, "students": []}


def test_roster_as_context_manager(roster_path):
    with Roster.open(roster_path) as roster:
        roster.create_student(**make_fields())

    assert Roster.open(roster_path).count == 1


# --- create ---


def test_create_assigns_increasing_ids(empty_roster):
    ids = []
    for i in range(5):
        response = empty_roster.create_student(**make_fields(email=f"s{i}@mmm.edu"))
        assert response.success
        ids.append(response.data["record"].student_id)

    assert empty_roster.count == 5
    assert ids == [1001, 1002, 1003, 1004, 1005]


def test_create_new_student_defaults(empty_roster):
    student = empty_roster.create_student(**make_fields()).data["record"]

    assert student.gpa == 0.0
    assert student.subjects == frozenset()
    assert student.first_name == "Sean"
    assert student.course == "Theatre"


def test_create_duplicate_email_fails(sample_roster):
    next_id = sample_roster.next_student_id

    response = sample_roster.create_student(
        **make_fields(first_name="Other", email="SCameron@MMM.edu")
    )

    assert not response.success
    assert response.error is ErrorCode.DUPLICATE_EMAIL
    assert sample_roster.count == 3
    assert sample_roster.next_student_id == next_id


def test_failed_create_does_not_consume_an_id(empty_roster):
    empty_roster.create_student(**make_fields())
    empty_roster.create_student(**make_fields())

    response = empty_roster.create_student(**make_fields(email="new@mmm.edu"))

    assert response.data["record"].student_id == 1002


# --- find ---


def test_find_student_by_id(sample_roster):
    response = sample_roster.find_student_by_id(1002)

    assert response.success
    assert response.data["record"].full_name == "Paul Atreides"


def test_find_missing_student(sample_roster):
    response = sample_roster.find_student_by_id(9999)

    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND
    assert response.status_code == 404


def test_find_returns_copy(sample_roster):
    student = sample_roster.find_student_by_id(1001).data["record"]
    student.email = "patreides@mmm.edu"
    student.add_subject("Voice")

    stored = sample_roster.find_student_by_id(1001).data["record"]
    assert stored.email == "scameron@mmm.edu"
    assert stored.subjects == frozenset()


# --- update ---


def test_update_student(sample_roster):
    before = sample_roster.find_student_by_id(1001).data["record"]

    response = sample_roster.update_student(
        1001,
        first_name="Duncan",
        last_name="Idaho",
        email="didaho@mmm.edu",
        phone_number="555-0199",
        address="2 Caladan Road",
        course="Fencing",
        semester=4,
        gpa=3.7,
    )

    assert response.success
    after = sample_roster.find_student_by_id(1001).data["record"]
    assert after.student_id == 1001
    assert after.enrollment_date == before.enrollment_date
    assert after.date_of_birth == before.date_of_birth
    assert after.full_name == "Duncan Idaho"
    assert after.email == "didaho@mmm.edu"
    assert after.phone_number == "555-0199"
    assert after.address == "2 Caladan Road"
    assert after.course == "Fencing"
    assert after.semester == 4
    assert after.gpa == 3.7


def test_update_keeping_own_email_in_other_case(sample_roster):
    response = sample_roster.update_student(
        1001,
        first_name="Sean",
        last_name="Cameron",
        email="SCAMERON@mmm.edu",
        phone_number="555-0100",
        address="1 Arrakis Way",
        course="Theatre",
        semester=3,
        gpa=0.0,
    )

    assert response.success
    assert response.data["record"].email == "SCAMERON@mmm.edu"


def test_update_to_another_students_email_fails(sample_roster):
    response = sample_roster.update_student(
        1001,
        first_name="Changed",
        last_name="Cameron",
        email="PAtreides@mmm.edu",
        phone_number="555-0100",
        address="1 Arrakis Way",
        course="Theatre",
        semester=3,
        gpa=2.0,
    )

    assert not response.success
    assert response.error is ErrorCode.DUPLICATE_EMAIL

    student = sample_roster.find_student_by_id(1001).data["record"]
    assert student.first_name == "Sean"
    assert student.gpa == 0.0


def test_update_missing_student(sample_roster):
    response = sample_roster.update_student(
        4242, "A", "B", "ab@mmm.edu", "", "", "", 1, 0.0
    )

    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND


# --- delete ---


def test_delete_student(sample_roster):
    response = sample_roster.delete_student(1002)

    assert response.success
    assert sample_roster.count == 2
    assert 1002 not in sample_roster
    assert sample_roster.find_student_by_id(1002).error is ErrorCode.NOT_FOUND


def test_delete_missing_student(sample_roster):
    response = sample_roster.delete_student(1002)
    response = sample_roster.delete_student(1002)

    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND
    assert sample_roster.count == 2


def test_deleted_id_is_never_reused(sample_roster, roster_path):
    sample_roster.delete_student(1003)

    response = sample_roster.create_student(**make_fields(email="new@mmm.edu"))
    assert response.data["record"].student_id == 1004

    sample_roster.delete_student(1004)
    reopened = Roster.open(roster_path)
    response = reopened.create_student(**make_fields(email="newer@mmm.edu"))
    assert response.data["record"].student_id == 1005


def test_deleted_email_can_be_reused(sample_roster):
    sample_roster.delete_student(1001)

    response = sample_roster.create_student(**make_fields())

    assert response.success


# --- subjects ---


def test_add_and_remove_subjects(sample_roster):
    response = sample_roster.add_subject(1001, "Voice")
    assert response.success
    assert response.data["persisted"]

    response = sample_roster.add_subject(1001, "Voice")
    assert response.success
    assert "No changes made" in response.detail

    assert sample_roster.find_student_by_id(1001).data["record"].subjects == {"Voice"}

    response = sample_roster.remove_subject(1001, "Voice")
    assert response.success

    response = sample_roster.remove_subject(1001, "Voice")
    assert response.success
    assert "No changes made" in response.detail

    assert sample_roster.find_student_by_id(1001).data["record"].subjects == frozenset()


def test_subject_operations_on_missing_student(sample_roster):
    assert sample_roster.add_subject(9999, "Voice").error is ErrorCode.NOT_FOUND
    assert sample_roster.remove_subject(9999, "Voice").error is ErrorCode.NOT_FOUND


# === persistence ===


def test_every_mutation_is_saved(sample_roster, roster_path):
    sample_roster.add_subject(1002, "Physics")
    sample_roster.update_student(
        1003, "Chani", "Kynes", "ckynes@mmm.edu", "555", "Sietch", "CS", 2, 3.9
    )
    sample_roster.delete_student(1001)

    reopened = Roster.open(roster_path)

    assert reopened.count == 2
    assert 1001 not in reopened
    assert reopened.find_student_by_id(1002).data["record"].subjects == {"Physics"}
    assert reopened.find_student_by_id(1003).data["record"].gpa == 3.9
    assert reopened.next_student_id == 1004


def test_round_trip_is_lossless(sample_roster, roster_path):
    sample_roster.add_subject(1001, "Voice")
    sample_roster.add_subject(1001, "Movement")
    sample_roster.update_student(
        1002, "Paul", "Atreides", "patreides@mmm.edu", "555", "Arrakeen", "CS", 1, 3.25
    )

    reopened = Roster.open(roster_path)

    original = {s.student_id: s.to_dict() for s in sample_roster.snapshot()}
    restored = {s.student_id: s.to_dict() for s in reopened.snapshot()}
    assert restored == original


def test_corrupt_file_resets_roster(roster_path):
    with open(roster_path, "w") as f:
        f.write("{ this is not json")

    roster = Roster.open(roster_path)

    assert roster.count == 0
    assert roster.next_student_id == 1001
    assert not roster.load_response.success
    assert roster.load_response.error is ErrorCode.PERSISTENCE_LOAD_FAILED

    backup_path = roster.load_response.data["backup_path"]
    assert backup_path == f"{roster_path}.corrupt"
    with open(backup_path) as f:
        assert f.read() == "{ this is not json"

    response = roster.create_student(**make_fields())
    assert response.data["record"].student_id == 1001


def test_incompatible_file_resets_roster(roster_path):
    with open(roster_path, "w") as f:
        json.dump({"students": [{"student_id": 1001}], "next_student_id": 1002}, f)

    roster = Roster.open(roster_path)

    assert roster.count == 0
    assert roster.load_response.error is ErrorCode.PERSISTENCE_LOAD_FAILED


def test_mistyped_field_resets_roster(sample_roster, roster_path):
    with open(roster_path) as f:
        payload = json.load(f)
    payload["students"][0]["first_name"] = 42
    with open(roster_path, "w") as f:
        json.dump(payload, f)

    roster = Roster.open(roster_path)

    assert not roster.load_response.success
    assert roster.count == 0
    assert roster.search_by_name("sea").data["records"] == []


def test_write_failure_keeps_mutation(tmp_path):
    roster = Roster.open(str(tmp_path / "missing_dir" / "students.json"))

    response = roster.create_student(**make_fields())

    assert response.success
    assert not response.data["persisted"]
    assert "could not be saved" in response.detail
    assert roster.count == 1
    assert roster.next_student_id == 1002


# === views ===


def test_snapshot_is_independent(sample_roster):
    snapshot = sample_roster.snapshot()
    sample_roster.delete_student(1001)
    snapshot[0].first_name = "Changed"

    assert len(snapshot) == 3
    assert "Changed" not in [s.first_name for s in sample_roster.snapshot()]


def test_roster_search_views(sample_roster):
    names = sample_roster.search_by_name("atre").data["records"]
    assert [s.student_id for s in names] == [1002]

    courses = sample_roster.search_by_course("computer").data["records"]
    assert sorted(s.student_id for s in courses) == [1002, 1003]

    semesters = sample_roster.search_by_semester(3).data["records"]
    assert sorted(s.student_id for s in semesters) == [1001, 1003]

    assert sample_roster.search_by_name("nobody").data["records"] == []


def test_roster_sort_views(sample_roster):
    sample_roster.update_student(
        1001, "Sean", "Cameron", "scameron@mmm.edu", "", "", "Theatre", 3, 3.1
    )

    by_name = [s.full_name for s in sample_roster.sort_by_name().data["records"]]
    assert by_name == ["Chani Kynes", "Paul Atreides", "Sean Cameron"]

    by_gpa = [s.student_id for s in sample_roster.sort_by_gpa().data["records"]]
    assert by_gpa == [1001, 1002, 1003]

    by_id = [s.student_id for s in sample_roster.sort_by_id().data["records"]]
    assert by_id == [1001, 1002, 1003]


def test_roster_statistics(sample_roster):
    sample_roster.update_student(
        1002, "Paul", "Atreides", "patreides@mmm.edu", "", "", "Computer Science", 1, 3.5
    )
    sample_roster.update_student(
        1003, "Chani", "Kynes", "ckynes@mmm.edu", "", "", "Computer Science", 3, 2.5
    )

    statistics = sample_roster.get_statistics().data

    assert statistics["total_students"] == 3
    assert statistics["course_counts"] == {"Theatre": 1, "Computer Science": 2}
    assert statistics["average_gpa"] == 3.0
    assert statistics["graded_students"] == 2
    assert statistics["next_student_id"] == 1004
