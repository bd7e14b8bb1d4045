# cli/menu_helpers.py

"""
Helper functions for CLI menus and user interaction in the Student Records application.

This module provides utilities for:
- Displaying interactive menus and result lists
- Prompting for, parsing, and validating user input (text, numbers, dates, emails)
- Looking up a student by id from a prompt
- Displaying standard system messages and error feedback

The `Roster` does no parsing or validation of its own beyond email uniqueness, so every value
handed to it from the CLI passes through one of these prompts first.
"""

import datetime
import math
import re
from enum import Enum
from typing import Any, Callable, Iterable

import core.formatters as formatters
from core.response import Response
from models.roster import Roster
from models.student import Student


class MenuSignal(Enum):
    CANCEL = "CANCEL"
    DEFAULT = "DEFAULT"
    EXIT = "EXIT"


# === display methods ===


def display_menu(
    title: str,
    options: list[tuple[str, Callable[..., Any]]],
    zero_option: str = "Return",
) -> MenuSignal | Callable[..., Any]:
    """
    Displays a numbered CLI menu and returns the selected action.

    Args:
        title (str): The heading displayed above the menu options.
        options (list[tuple[str, Callable[..., Any]]]): A list of (label, action) pairs to present.
        zero_option (str, optional): The label for the "cancel" or "exit" option. Defaults to "Return".

    Returns:
        MenuSignal.EXIT if the user selects the zero option.
        Callable[..., Any]: The function associated with the selected menu item.

    Notes:
        - Menu selection is repeated until a valid choice is made.
        - User input is matched by menu index, not by label.
    """
    while True:
        print(f"\n{title}")

        for i, (label, _) in enumerate(options, 1):
            print(f"{i}. {label}")

        print(f"0. {zero_option}")

        choice = prompt_user_input("Select an option:")

        if choice == "0":
            return MenuSignal.EXIT

        try:
            # adjusts for zero-index, retrieves action from tuple
            index = int(choice) - 1
            if index < 0:
                raise IndexError(index)
            return options[index][1]

        except (ValueError, IndexError):
            print("Invalid selection. Please try again.")


def display_results(
    results: Iterable[Any],
    show_index: bool = False,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> None:
    """
    Prints a list of results to the console, optionally numbered and formatted.

    Args:
        results (Iterable[Any]): A sequence of results to display.
        show_index (bool, optional): If True, prepends a numbered index to each result. Defaults to False.
        formatter (Callable[[Any], str], optional): A function to convert each result to a display string. Defaults to str().
    """
    for i, result in enumerate(results, 1):
        prefix = f"{i:>2}. " if show_index else ""
        print(f"{prefix}{formatter(result)}")


# === prompt user input methods ===


# Prompt Helpers
#
# These functions provide a consistent way to handle user input and confirmation prompts.
#
# Conventions:
# - `prompt_user_input()` is the base function, used by all others to standardize the UI format.
# - Empty string responses are overloaded for control signals:
#     - `prompt_user_input_or_cancel()` returns `MenuSignal.CANCEL` on blank input.
#     - `prompt_user_input_or_default()` returns `MenuSignal.DEFAULT`.
# - `confirm_action()` loops until the user enters a valid yes/no response.


def confirm_action(prompt: str) -> bool:
    while True:
        choice = prompt_user_input(f"{prompt} (y/n):").lower()

        if choice == "y" or choice == "yes":
            return True

        elif choice == "n" or choice == "no":
            return False

        else:
            print("Invalid selection. Please try again.")


def confirm_make_change() -> bool:
    return confirm_action("Do you want to make this change?")


def prompt_user_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ").strip()


def prompt_user_input_or_cancel(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.CANCEL if response == "" else response


def prompt_user_input_or_default(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.DEFAULT if response == "" else response


# --- typed input ---

# ---
# Typed prompts loop until the input parses, printing the reason for each rejection.
# Blank input cancels (or keeps the current value, for the `_or_default` variants).
# ---


def prompt_positive_int_or_cancel(prompt: str) -> int | MenuSignal:
    while True:
        response = prompt_user_input_or_cancel(prompt)

        if isinstance(response, MenuSignal):
            return response

        try:
            return validate_positive_int(response)

        except ValueError as e:
            print(f"\n[ERROR] {e}")
            print("Please try again.")


def prompt_positive_int_or_default(prompt: str, default: int) -> int:
    while True:
        response = prompt_user_input_or_default(f"{prompt} [{default}]:")

        if response is MenuSignal.DEFAULT:
            return default

        try:
            return validate_positive_int(str(response))

        except ValueError as e:
            print(f"\n[ERROR] {e}")
            print("Please try again.")


def prompt_gpa_or_default(prompt: str, default: float) -> float:
    while True:
        response = prompt_user_input_or_default(f"{prompt} [{default:.2f}]:")

        if response is MenuSignal.DEFAULT:
            return default

        try:
            return validate_gpa(str(response))

        except ValueError as e:
            print(f"\n[ERROR] {e}")
            print("Please try again.")


def prompt_text_or_default(prompt: str, default: str) -> str:
    response = prompt_user_input_or_default(f"{prompt} [{default}]:")
    return default if response is MenuSignal.DEFAULT else str(response)


def prompt_date_or_cancel(prompt: str) -> datetime.date | MenuSignal:
    while True:
        response = prompt_user_input_or_cancel(prompt)

        if isinstance(response, MenuSignal):
            return response

        try:
            return formatters.parse_date(response)

        except ValueError:
            print("\n[ERROR] Please enter a valid date in dd/mm/yyyy format.")
            print("Please try again, or leave blank to cancel.")


def prompt_email_or_cancel(prompt: str) -> str | MenuSignal:
    while True:
        response = prompt_user_input_or_cancel(prompt)

        if isinstance(response, MenuSignal):
            return response

        try:
            return validate_email_input(response)

        except ValueError as e:
            print(f"\n[ERROR] {e}")
            print("Please try again.")


def prompt_email_or_default(prompt: str, default: str) -> str:
    while True:
        response = prompt_user_input_or_default(f"{prompt} [{default}]:")

        if response is MenuSignal.DEFAULT:
            return default

        try:
            return validate_email_input(str(response))

        except ValueError as e:
            print(f"\n[ERROR] {e}")
            print("Please try again.")


# === input validators ===


def validate_email_input(email: str) -> str:
    """
    Validates a student email address.

    Ensures the email:
        - Contains exactly one '@' symbol
        - Has non-whitespace characters on both sides of the '@'
        - Contains at least one '.' after the '@' to separate the domain and TLD

    Args:
        email: The input email string to validate.

    Returns:
        The email with surrounding whitespace removed. Case is preserved; the `Roster` compares emails
        without regard to case.

    Raises:
        ValueError: If the email does not conform to the expected format.
    """
    email = email.strip()
    if not re.fullmatch(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", email):
        raise ValueError(
            "Invalid input. Email must be a valid address with one @ and a domain."
        )
    return email


def validate_positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise ValueError(f"Invalid input. '{value}' is not a whole number.")

    if number < 1:
        raise ValueError("Invalid input. The number must be 1 or greater.")

    return number


def validate_gpa(value: str) -> float:
    try:
        gpa = float(value)
    except ValueError:
        raise ValueError(f"Invalid input. '{value}' is not a number.")

    if not math.isfinite(gpa):
        raise ValueError(f"Invalid input. '{value}' is not a finite number.")

    if gpa < 0.0:
        raise ValueError("Invalid input. GPA cannot be negative.")

    return gpa


# === finder methods ===


def prompt_find_student(roster: Roster) -> Student | MenuSignal:
    """
    Prompts for a student id and looks the student up in the roster.

    Args:
        roster (Roster): The active `Roster`.

    Returns:
        - A copy of the matching `Student`.
        - `MenuSignal.CANCEL` if the user leaves the prompt blank or no student has the id.
    """
    student_id = prompt_positive_int_or_cancel(
        "Enter the student ID (leave blank to cancel):"
    )

    if isinstance(student_id, MenuSignal):
        return student_id

    roster_response = roster.find_student_by_id(student_id)

    if not roster_response.success:
        display_response_failure(roster_response)
        return MenuSignal.CANCEL

    return roster_response.data["record"]


# === often used messages ===


def returning_without_changes() -> None:
    print("\nReturning without changes.")


def returning_to(destination: str) -> None:
    print(f"\nReturning to {destination}.")


def caution_banner() -> None:
    caution_banner = formatters.format_banner_text("CAUTION!")
    print(f"\n{caution_banner}")


def display_response_failure(response: Response, debug: bool = False) -> None:
    """
    Displays a formatted error message based on a failed `Response`.

    Args:
        response (Response): The response object to inspect.
        debug (bool, optional): If True, prints the trace field when present. Defaults to False.

    Notes:
        - Does nothing if the response was successful.
        - Enum error codes are printed by name; string errors are printed as-is.
    """
    if response.success:
        return

    error_label = (
        response.error.name if isinstance(response.error, Enum) else str(response.error)
    )

    print(f"\n[ERROR: {error_label}] {response.detail}")

    if debug and response.trace:
        print(f"\nDebug Trace: {response.trace}")


def display_mutation_result(response: Response, failure_message: str) -> None:
    """
    Prints the outcome of a roster manipulator, including a warning if the change was not saved to disk.

    Args:
        response (Response): The response returned by the `Roster` manipulator.
        failure_message (str): Printed after the error when the manipulator failed.
    """
    if not response.success:
        display_response_failure(response)
        print(f"\n{failure_message}")
        return

    print(f"\n{response.detail}")

    if response.data.get("persisted") is False:
        caution_banner()
        print("The change is in memory but could not be written to disk.")
