# cli/menus/students_menu.py

"""
Student record actions for the Student Records CLI.

This module defines the interface for changing `Student` records, including:
- Adding new students
- Viewing a single student's full record
- Updating student information
- Permanently deleting students
- Adding and removing subjects

All operations are routed through the `Roster` API, which saves to disk after every successful change.
"""

from collections.abc import Callable
from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from models.roster import Roster
from models.student import Student

# === add student ===


def add_student(roster: Roster) -> None:
    """
    Prompts for every field of a new `Student`, previews it, and adds it to the roster on confirmation.

    Args:
        roster (Roster): The active `Roster`.

    Notes:
        - Any text prompt left blank cancels the whole addition.
        - The id, GPA, subjects, and enrollment date are assigned by the `Roster`.
    """
    print(f"\n{formatters.format_banner_text('Add New Student')}")

    fields = prompt_new_student_fields()

    if fields is None:
        helpers.returning_without_changes()
        return

    print("\nYou are about to create the following student:")
    print(
        f"... Name: {fields['first_name']} {fields['last_name']}\n"
        f"... Email: {fields['email']}\n"
        f"... Course: {fields['course']} (semester {fields['semester']})"
    )

    if not helpers.confirm_action("Would you like to create this student?"):
        print(f"\nDiscarding student: {fields['first_name']} {fields['last_name']}")
        return

    roster_response = roster.create_student(**fields)

    helpers.display_mutation_result(
        roster_response,
        f"{fields['first_name']} {fields['last_name']} was not added.",
    )


def prompt_new_student_fields() -> dict | None:
    """
    Collects and validates the fields needed by `Roster.create_student()`.

    Returns:
        A dictionary of keyword arguments for `create_student()`, or None if the user cancels.
    """
    text_prompts = [
        ("first_name", "Enter first name (leave blank to cancel):"),
        ("last_name", "Enter last name (leave blank to cancel):"),
    ]

    fields: dict = {}

    for key, prompt in text_prompts:
        value = helpers.prompt_user_input_or_cancel(prompt)
        if value is MenuSignal.CANCEL:
            return None
        fields[key] = value

    email = helpers.prompt_email_or_cancel(
        "Enter email address (leave blank to cancel):"
    )
    if email is MenuSignal.CANCEL:
        return None
    fields["email"] = email

    phone_number = helpers.prompt_user_input_or_cancel(
        "Enter phone number (leave blank to cancel):"
    )
    if phone_number is MenuSignal.CANCEL:
        return None
    fields["phone_number"] = phone_number

    date_of_birth = helpers.prompt_date_or_cancel(
        "Enter date of birth as dd/mm/yyyy (leave blank to cancel):"
    )
    if date_of_birth is MenuSignal.CANCEL:
        return None
    fields["date_of_birth"] = date_of_birth

    for key, prompt in [
        ("address", "Enter address (leave blank to cancel):"),
        ("course", "Enter course (leave blank to cancel):"),
    ]:
        value = helpers.prompt_user_input_or_cancel(prompt)
        if value is MenuSignal.CANCEL:
            return None
        fields[key] = value

    semester = helpers.prompt_positive_int_or_cancel(
        "Enter semester (leave blank to cancel):"
    )
    if semester is MenuSignal.CANCEL:
        return None
    fields["semester"] = semester

    return fields


# === view student ===


def view_student(roster: Roster) -> None:
    student = helpers.prompt_find_student(roster)

    if student is MenuSignal.CANCEL:
        return
    student = cast(Student, student)

    print(f"\n{model_formatters.format_student_multiline(student)}")


# === update student ===


def update_student(roster: Roster) -> None:
    """
    Prompts for new values of every editable field and submits them to `Roster.update_student()`.

    Args:
        roster (Roster): The active `Roster`.

    Notes:
        - Each prompt shows the current value, which is kept if the input is left blank.
        - The id, date of birth, and enrollment date cannot be edited.
    """
    student = helpers.prompt_find_student(roster)

    if student is MenuSignal.CANCEL:
        return
    student = cast(Student, student)

    print("\nYou are editing the following student:")
    print(model_formatters.format_student_multiline(student))
    print("\nEnter new information (leave blank to keep the current value).")

    first_name = helpers.prompt_text_or_default("First name", student.first_name)
    last_name = helpers.prompt_text_or_default("Last name", student.last_name)
    email = helpers.prompt_email_or_default("Email address", student.email)
    phone_number = helpers.prompt_text_or_default("Phone number", student.phone_number)
    address = helpers.prompt_text_or_default("Address", student.address)
    course = helpers.prompt_text_or_default("Course", student.course)
    semester = helpers.prompt_positive_int_or_default("Semester", student.semester)
    gpa = helpers.prompt_gpa_or_default("GPA (0 for ungraded)", student.gpa)

    if not helpers.confirm_make_change():
        helpers.returning_without_changes()
        return

    roster_response = roster.update_student(
        student.student_id,
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone_number=phone_number,
        address=address,
        course=course,
        semester=semester,
        gpa=gpa,
    )

    helpers.display_mutation_result(roster_response, "Student was not updated.")


# === delete student ===


def delete_student(roster: Roster) -> None:
    """
    Deletes a `Student` after preview and user confirmation.

    Args:
        roster (Roster): The active `Roster`.
    """
    student = helpers.prompt_find_student(roster)

    if student is MenuSignal.CANCEL:
        return
    student = cast(Student, student)

    helpers.caution_banner()
    print("You are about to permanently delete the following student record:")
    print(model_formatters.format_student_multiline(student))

    confirm_deletion = helpers.confirm_action(
        "Are you sure you want to permanently delete this student? This action cannot be undone."
    )

    if not confirm_deletion:
        helpers.returning_without_changes()
        return

    roster_response = roster.delete_student(student.student_id)

    helpers.display_mutation_result(roster_response, "Student was not removed.")


# === manage subjects ===


def manage_subjects(roster: Roster) -> None:
    """
    Loops a menu for adding and removing subjects for one `Student`.

    Args:
        roster (Roster): The active `Roster`.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    student = helpers.prompt_find_student(roster)

    if student is MenuSignal.CANCEL:
        return
    student = cast(Student, student)

    student_id = student.student_id
    options: list[tuple[str, Callable[[Roster, int], None]]] = [
        ("Add Subject", add_subject),
        ("Remove Subject", remove_subject),
    ]

    while True:
        roster_response = roster.find_student_by_id(student_id)

        if not roster_response.success:
            helpers.display_response_failure(roster_response)
            break

        student = roster_response.data["record"]
        subjects = formatters.format_list_with_and(sorted(student.subjects))
        title = f"Subjects for {student.full_name}: {subjects or '[NONE]'}"

        menu_response = helpers.display_menu(title, options, "Return to Main Menu")

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response(roster, student_id)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    helpers.returning_to("Main Menu")


def add_subject(roster: Roster, student_id: int) -> None:
    subject = helpers.prompt_user_input_or_cancel(
        "Enter subject to add (leave blank to cancel):"
    )

    if subject is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    roster_response = roster.add_subject(student_id, cast(str, subject))

    helpers.display_mutation_result(roster_response, "Subject was not added.")


def remove_subject(roster: Roster, student_id: int) -> None:
    subject = helpers.prompt_user_input_or_cancel(
        "Enter subject to remove (leave blank to cancel):"
    )

    if subject is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    roster_response = roster.remove_subject(student_id, cast(str, subject))

    helpers.display_mutation_result(roster_response, "Subject was not removed.")
