"""iCalendar (RFC 5545) export of a weekly plan: one all-day event per planned day."""
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from mealplanner.domain.Plan import Plan
from mealplanner.utilities.constants import (
    ICS_DATE_FORMAT,
    ICS_PRODID,
    ICS_STAMP_FORMAT,
    ICS_UID_DOMAIN,
    WEEKDAYS,
)

CRLF = "\r\n"


def escape_ics_text(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def monday_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


def plan_to_ics(plan: Plan, monday: date, now: Optional[datetime] = None) -> str:
    stamp = (now or datetime.now(timezone.utc))
    if stamp.tzinfo is None:
        # naive times are taken to be UTC already
        stamp = stamp.replace(tzinfo=timezone.utc)
    else:
        stamp = stamp.astimezone(timezone.utc)
    dtstamp = stamp.strftime(ICS_STAMP_FORMAT)

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{ICS_PRODID}",
    ]
    for day, meal in plan.days():
        event_date = (monday + timedelta(days=WEEKDAYS.index(day))).strftime(ICS_DATE_FORMAT)
        lines += [
            "BEGIN:VEVENT",
            f"UID:{meal.id}-{event_date}@{ICS_UID_DOMAIN}",
            f"DTSTAMP:{dtstamp}",
            f"DTSTART;VALUE=DATE:{event_date}",
            f"SUMMARY:{escape_ics_text(meal.name)}",
        ]
        if meal.url:
            lines.append(f"URL:{meal.url}")
        lines.append("END:VEVENT")
    lines.append("END:VCALENDAR")
    return CRLF.join(lines) + CRLF
