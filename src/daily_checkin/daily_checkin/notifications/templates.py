from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.datetime_utils import format_iso_date
from ..core.constants import REMINDER_SUBJECT, SUMMARY_SUBJECT
from ..roster.model import Person

_FOOTER = "This message was sent automatically, please do not reply."


def reminder_message(person: Person, checkin_date: date) -> tuple[str, str]:
    body = (
        f"Dear {person.name},\n\n"
        f"You have not checked in for {format_iso_date(checkin_date)} yet. "
        "Please upload your check-in proof as soon as possible.\n\n"
        f"{_FOOTER}"
    )
    return REMINDER_SUBJECT, body


def summary_message(non_compliant: Sequence[Person], checkin_date: date) -> tuple[str, str]:
    lines = [f"The following people have not checked in for {format_iso_date(checkin_date)}:", ""]
    for person in non_compliant:
        lines.append(f"Name: {person.name}, Email: {person.email or '-'}")
    lines += ["", _FOOTER]
    return SUMMARY_SUBJECT, "\n".join(lines)
