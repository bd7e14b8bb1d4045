# tests/test_formatters.py

import datetime

import pytest

import cli.model_formatters as model_formatters
import core.formatters as formatters


def test_format_list_with_and():
    assert formatters.format_list_with_and([]) == ""
    assert formatters.format_list_with_and(["Voice"]) == "Voice"
    assert formatters.format_list_with_and(["Acting", "Voice"]) == "Acting and Voice"
    assert (
        formatters.format_list_with_and(["Acting", "Movement", "Voice"])
        == "Acting, Movement, and Voice"
    )


def test_format_gpa():
    assert formatters.format_gpa(3.456) == "3.46"
    assert formatters.format_gpa(0.0) == "[UNGRADED]"


def test_format_and_parse_date():
    date = datetime.date(1987, 6, 21)

    assert formatters.format_date(date) == "21/06/1987"
    assert formatters.parse_date(" 21/06/1987 ") == date

    with pytest.raises(ValueError):
        formatters.parse_date("31/02/1987")


def test_format_student_multiline(sample_student):
    sample_student.add_subject("Voice")
    text = model_formatters.format_student_multiline(sample_student)

    assert "Student 1001:" in text
    assert "... Date of Birth: 21/06/1987" in text
    assert "... Subjects: Voice" in text
    assert "... Enrolled: 25/08/2025" in text
