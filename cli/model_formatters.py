# cli/model_formatters.py

# anything that renders Student records or Roster read-only results
from textwrap import dedent

import core.formatters as formatters
from models.student import Student

# === student formatters ===


def format_student_oneline(student: Student) -> str:
    return (
        f"ID: {student.student_id:<6} | {student.full_name:<25} | "
        f"{student.course:<15} | Sem {student.semester:<2} | GPA: {formatters.format_gpa(student.gpa)}"
    )


def format_student_multiline(student: Student) -> str:
    subjects = formatters.format_list_with_and(sorted(student.subjects)) or "[NONE]"

    return dedent(
        f"""\
        Student {student.student_id}:
        ... Name: {student.full_name}
        ... Email: {student.email}
        ... Phone: {student.phone_number}
        ... Date of Birth: {formatters.format_date(student.date_of_birth)} (Age: {student.age()})
        ... Address: {student.address}
        ... Course: {student.course}
        ... Semester: {student.semester}
        ... GPA: {formatters.format_gpa(student.gpa)}
        ... Subjects: {subjects}
        ... Enrolled: {formatters.format_date(student.enrollment_date)}"""
    )


# === statistics formatters ===


def format_statistics(statistics: dict) -> str:
    lines = [f"Total Students: {statistics['total_students']}"]

    if statistics["course_counts"]:
        lines.append("\nCourse Distribution:")
        for course, count in sorted(statistics["course_counts"].items()):
            noun = "student" if count == 1 else "students"
            lines.append(f"... {course or '[NO COURSE]'}: {count} {noun}")

    average_gpa = statistics["average_gpa"]
    if average_gpa is not None:
        lines.append(
            f"\nAverage GPA: {average_gpa:.2f} (over {statistics['graded_students']} graded)"
        )
    else:
        lines.append("\nAverage GPA: [NO GRADED STUDENTS]")

    lines.append(f"Next Student ID: {statistics['next_student_id']}")

    return "\n".join(lines)
