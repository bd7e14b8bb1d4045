# cli/menus/browse_menu.py

"""
Read-only views of the roster for the Student Records CLI: searching, listing, and sorting.

Every view reads a snapshot through the `Roster` API and never changes any record.
"""

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from core.response import Response
from models.roster import Roster


def display_records(roster_response: Response, heading: str) -> None:
    """
    Prints the "records" payload of a roster view, one line per student.

    Args:
        roster_response (Response): The response from a `Roster` search or sort view.
        heading (str): Printed above the results when there are any.
    """
    if not roster_response.success:
        helpers.display_response_failure(roster_response)
        return

    records = roster_response.data["records"]

    if not records:
        print("\nNo students found.")
        return

    print(f"\n{heading} ({len(records)} found):")
    print("=" * 80)
    helpers.display_results(records, formatter=model_formatters.format_student_oneline)


# === search ===


def search_students(roster: Roster) -> None:
    title = formatters.format_banner_text("Search Students")
    options = [
        ("Search by Name", search_by_name),
        ("Search by Course", search_by_course),
        ("Search by Semester", search_by_semester),
    ]

    menu_response = helpers.display_menu(title, options, "Return to Main Menu")

    if menu_response is MenuSignal.EXIT:
        return

    elif callable(menu_response):
        menu_response(roster)

    else:
        raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def search_by_name(roster: Roster) -> None:
    text = helpers.prompt_user_input("Enter name to search:")
    display_records(roster.search_by_name(text), "Search Results")


def search_by_course(roster: Roster) -> None:
    text = helpers.prompt_user_input("Enter course to search:")
    display_records(roster.search_by_course(text), "Search Results")


def search_by_semester(roster: Roster) -> None:
    semester = helpers.prompt_positive_int_or_cancel(
        "Enter semester to search (leave blank to cancel):"
    )

    if semester is MenuSignal.CANCEL:
        return

    display_records(roster.search_by_semester(int(semester)), "Search Results")


# === list and sort ===


def display_all_students(roster: Roster) -> None:
    display_records(roster.get_all_students(), "All Students")


def display_sorted_students(roster: Roster) -> None:
    title = formatters.format_banner_text("Display Sorted Students")
    options = [
        (
            "Sort by Name",
            lambda: display_records(roster.sort_by_name(), "Students sorted by Name"),
        ),
        (
            "Sort by GPA (Highest to Lowest)",
            lambda: display_records(
                roster.sort_by_gpa(), "Students sorted by GPA (Highest to Lowest)"
            ),
        ),
        (
            "Sort by Student ID",
            lambda: display_records(roster.sort_by_id(), "Students sorted by ID"),
        ),
    ]

    menu_response = helpers.display_menu(title, options, "Return to Main Menu")

    if menu_response is MenuSignal.EXIT:
        return

    elif callable(menu_response):
        menu_response()

    else:
        raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


# === statistics ===


def display_statistics(roster: Roster) -> None:
    roster_response = roster.get_statistics()

    if not roster_response.success:
        helpers.display_response_failure(roster_response)
        return

    if roster_response.data["total_students"] == 0:
        print("\nNo students in the roster.")
        return

    print(f"\n{formatters.format_banner_text('Roster Statistics')}")
    print(model_formatters.format_statistics(roster_response.data))
