from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from dateutil import parser as date_parser
from dateutil import tz

from email_chain_parser.services.patterns import (
    EMAIL_RE,
    FROM_LINE_RE,
    FROM_NAME_EMAIL_RE,
    NAME_EMAIL_RE,
    ON_DATE_RE,
    SENT_DATE_RE,
)

UNKNOWN_SENDER = "Unknown"

# Two defaults that differ in year, month and day. A date string that lacks
# any of those fields parses differently against each.
_FILL_DEFAULTS = (datetime(2001, 1, 1), datetime(2002, 2, 2))

ZONE_ABBREVIATIONS = {
    "UTC": tz.UTC,
    "GMT": tz.UTC,
    "EST": tz.tzoffset("EST", -5 * 3600),
    "EDT": tz.tzoffset("EDT", -4 * 3600),
    "CST": tz.tzoffset("CST", -6 * 3600),
    "CDT": tz.tzoffset("CDT", -5 * 3600),
    "MST": tz.tzoffset("MST", -7 * 3600),
    "MDT": tz.tzoffset("MDT", -6 * 3600),
    "PST": tz.tzoffset("PST", -8 * 3600),
    "PDT": tz.tzoffset("PDT", -7 * 3600),
}


class DateKind(str, Enum):
    PARSED = "parsed"
    RAW = "raw"
    NOW = "now"


@dataclass(frozen=True)
class ExtractedDate:
    """A message date as found in a segment.

    ``text`` is an ISO-8601 UTC timestamp for ``PARSED`` and ``NOW``, and the
    matched substring verbatim for ``RAW``.
    """

    kind: DateKind
    text: str

    def __str__(self) -> str:
        return self.text


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now() -> str:
    return format_timestamp(datetime.now(timezone.utc))


def extract_sender(segment: str) -> str:
    text = segment or ""

    named = NAME_EMAIL_RE.search(text)
    if named:
        name = named.group(1) or named.group(2)
        address = named.group(3).strip()
        # A From: header may carry an unquoted "Last, First" display name.
        header = FROM_NAME_EMAIL_RE.search(text)
        if header and header.start(2) == named.start(3):
            name = header.group(1)
        name = name.strip().strip("\"'").strip()
        return f"{name} <{address}>" if name else address

    from_line = FROM_LINE_RE.search(text)
    if from_line:
        return from_line.group(1).strip()

    bare = EMAIL_RE.search(text)
    if bare:
        return bare.group(0)

    return UNKNOWN_SENDER


def _parse_or_raw(candidate: str) -> ExtractedDate:
    try:
        first, second = (
            date_parser.parse(candidate, default=default, tzinfos=ZONE_ABBREVIATIONS) for default in _FILL_DEFAULTS
        )
        if first.date() != second.date():
            return ExtractedDate(DateKind.RAW, candidate)
        return ExtractedDate(DateKind.PARSED, format_timestamp(first))
    except (ValueError, OverflowError):
        return ExtractedDate(DateKind.RAW, candidate)


def detect_date(segment: str) -> ExtractedDate:
    text = segment or ""
    for pattern in (ON_DATE_RE, SENT_DATE_RE):
        match = pattern.search(text)
        if match:
            return _parse_or_raw(match.group(1).strip())
    return ExtractedDate(DateKind.NOW, utc_now())


def extract_date(segment: str) -> str:
    return detect_date(segment).text
