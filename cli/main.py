# cli/main.py

"""
Main Menu for the Student Records CLI.

Opens the roster from the configured data file, dispatches to the student, search, and
statistics actions, and performs a final save on exit.
"""

from textwrap import dedent

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import browse_menu, students_menu
from cli.path_utils import resolve_data_file
from core.config import get_settings
from core.logging_setup import setup_logging
from models.roster import Roster


def run_cli() -> None:
    """
    Configures logging, opens the roster, and runs the Main Menu until the user exits.

    Notes:
        - The roster is closed (saved) even if the menu loop exits with an exception.
    """
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)

    data_file = resolve_data_file(settings.data_file)
    roster = Roster.open(data_file)

    print(f"\n{formatters.format_banner_text('STUDENT RECORD MANAGEMENT SYSTEM', 50)}")
    report_load_result(roster)

    try:
        main_menu(roster)

    finally:
        close_response = roster.close()
        if not close_response.success:
            helpers.display_response_failure(close_response)

    exit_program()


def report_load_result(roster: Roster) -> None:
    """
    Tells the user where the roster was loaded from, or warns that an unreadable data file was set aside.

    Args:
        roster (Roster): The freshly opened `Roster`.
    """
    load_response = roster.load_response

    if load_response is None or load_response.success:
        print(f"\nLoaded {roster.count} students from {roster.path}")
        return

    helpers.caution_banner()
    helpers.display_response_failure(load_response)

    backup_path = load_response.data.get("backup_path")
    print(
        dedent(
            """\
            The data file could not be read, so the roster starts empty.
            Any change you make will be saved to a new data file."""
        )
    )

    if backup_path:
        print(f"The unreadable file was moved to: {backup_path}")
    else:
        print("The unreadable file could not be moved and will be overwritten.")


def main_menu(roster: Roster) -> None:
    """
    Top-level loop with dispatch for the Main Menu.

    Args:
        roster (Roster): The active `Roster`.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("MAIN MENU")
    options = [
        ("Add New Student", students_menu.add_student),
        ("View Student Details", students_menu.view_student),
        ("Update Student Information", students_menu.update_student),
        ("Delete Student", students_menu.delete_student),
        ("Search Students", browse_menu.search_students),
        ("Display All Students", browse_menu.display_all_students),
        ("Display Sorted Students", browse_menu.display_sorted_students),
        ("View Statistics", browse_menu.display_statistics),
        ("Manage Student Subjects", students_menu.manage_subjects),
    ]
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response(roster)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.

    Notes:
        - Should only be called after the roster has been closed.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
