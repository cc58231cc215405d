# src/homework_reminder/tasks/date_detection.py

"""
Best-effort date detection in free text.

Used by the share-ingest surface to guess a due date from a forwarded message
("встреча 5 марта в 10:00", "deadline 2025-03-05", "сдать завтра").
A miss is not an error: detect() returns None and the caller picks a fallback.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, time, timedelta

logger = logging.getLogger(__name__)

_MONTHS_BY_PREFIX: dict[str, int] = {
    # ru
    "янв": 1,
    "фев": 2,
    "мар": 3,
    "апр": 4,
    "май": 5,
    "мая": 5,
    "июн": 6,
    "июл": 7,
    "авг": 8,
    "сен": 9,
    "окт": 10,
    "ноя": 11,
    "дек": 12,
    # en
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

_RU_MONTH = (
    r"январ[ья]|феврал[ья]|март[а]?|апрел[ья]|ма[йя]|июн[ья]|июл[ья]|август[а]?"
    r"|сентябр[ья]|октябр[ья]|ноябр[ья]|декабр[ья]"
)
_EN_MONTH = (
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)
_TIME = r"(?:\s*,?\s*(?:в|at|к)?\s*(?P<hour>\d{1,2}):(?P<minute>\d{2}))?"

_ISO_RE = re.compile(
    r"\b(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})"
    r"(?:[ T](?P<hour>\d{1,2}):(?P<minute>\d{2}))?\b"
)
_DOTTED_RE = re.compile(
    r"\b(?P<day>\d{1,2})[./](?P<month>\d{1,2})(?:[./](?P<year>\d{4}|\d{2}))?(?!\d)" + _TIME,
    re.IGNORECASE,
)
_DAY_MONTH_RE = re.compile(
    r"\b(?P<day>\d{1,2})\s+(?P<month_name>" + _RU_MONTH + "|" + _EN_MONTH + r")\.?\b"
    r"(?:\s+(?P<year>\d{4})(?:\s*(?:года|г\.?))?)?" + _TIME,
    re.IGNORECASE,
)
_MONTH_DAY_RE = re.compile(
    r"\b(?P<month_name>" + _EN_MONTH + r")\.?\s+(?P<day>\d{1,2})(?:st|nd|rd|th)?\b"
    r"(?:,?\s+(?P<year>\d{4}))?" + _TIME,
    re.IGNORECASE,
)
_RELATIVE_RE = re.compile(
    r"\b(?P<word>послезавтра|завтра|сегодня|tomorrow|today)\b" + _TIME,
    re.IGNORECASE,
)

_RELATIVE_DAYS = {
    "сегодня": 0,
    "today": 0,
    "завтра": 1,
    "tomorrow": 1,
    "послезавтра": 2,
}


@dataclass(slots=True)
class RegexDateDetector:
    """
    Pattern-based detector for Russian and English date mentions.

    Rules:
    - the earliest match in the text wins,
    - a missing year means the next occurrence (this year, or next year if already passed),
    - a missing time means `default_time`,
    - impossible dates (31.02) are skipped and the next match is tried.
    """

    default_time: time = time(9, 0)

    def detect(self, text: str, *, now: datetime) -> datetime | None:
        if not text:
            return None

        candidates: list[tuple[int, re.Match[str]]] = []
        for pattern in (_ISO_RE, _DOTTED_RE, _DAY_MONTH_RE, _MONTH_DAY_RE, _RELATIVE_RE):
            for m in pattern.finditer(text):
                candidates.append((m.start(), m))
        candidates.sort(key=lambda c: c[0])

        for _, m in candidates:
            found = self._build(m, now)
            if found is not None:
                logger.debug("Detected date %s from %r", found.isoformat(), m.group(0))
                return found
        return None

    def _build(self, m: re.Match[str], now: datetime) -> datetime | None:
        groups = m.groupdict()
        at = self._time_of(groups)
        if at is None:
            return None

        word = groups.get("word")
        if word:
            day = now.date() + timedelta(days=_RELATIVE_DAYS[word.lower()])
            return datetime.combine(day, at, tzinfo=now.tzinfo)

        month_name = groups.get("month_name")
        if month_name:
            month = _MONTHS_BY_PREFIX.get(month_name[:3].lower())
        else:
            month = int(groups["month"])
        if month is None:
            return None

        day_num = int(groups["day"])
        raw_year = groups.get("year")

        if raw_year:
            year = int(raw_year)
            if year < 100:
                year += 2000
            return self._safe(year, month, day_num, at, now)

        found = self._safe(now.year, month, day_num, at, now)
        if found is not None and found.date() < now.date():
            found = self._safe(now.year + 1, month, day_num, at, now)
        return found

    def _time_of(self, groups: dict[str, str | None]) -> time | None:
        hour = groups.get("hour")
        minute = groups.get("minute")
        if hour is None or minute is None:
            return self.default_time
        h, mi = int(hour), int(minute)
        if h > 23 or mi > 59:
            return None
        return time(h, mi)

    @staticmethod
    def _safe(year: int, month: int, day: int, at: time, now: datetime) -> datetime | None:
        try:
            return datetime(year, month, day, at.hour, at.minute, tzinfo=now.tzinfo)
        except ValueError:
            return None


class NullDateDetector:
    """Never finds anything (every input is a miss)."""

    def detect(self, text: str, *, now: datetime) -> datetime | None:
        return None
