# tests/test_date_detection.py

from __future__ import annotations

from datetime import UTC, datetime, time, timedelta, timezone

import pytest

from homework_reminder.tasks.date_detection import RegexDateDetector

NOW = datetime(2025, 1, 10, 12, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("встреча 5 марта в 10:00", datetime(2025, 3, 5, 10, 0, tzinfo=UTC)),
        ("сдать до 2025-03-05 18:30", datetime(2025, 3, 5, 18, 30, tzinfo=UTC)),
        ("сдать 05.03", datetime(2025, 3, 5, 9, 0, tzinfo=UTC)),
        ("тест 01.02.26 в 11:15", datetime(2026, 2, 1, 11, 15, tzinfo=UTC)),
        ("зачёт 20 мая 2025 г. в 14:00", datetime(2025, 5, 20, 14, 0, tzinfo=UTC)),
        ("essay due March 5, 2026 at 7:15", datetime(2026, 3, 5, 7, 15, tzinfo=UTC)),
        ("quiz on 3 Feb", datetime(2025, 2, 3, 9, 0, tzinfo=UTC)),
        ("tomorrow at 18:00", datetime(2025, 1, 11, 18, 0, tzinfo=UTC)),
        ("Послезавтра семинар", datetime(2025, 1, 12, 9, 0, tzinfo=UTC)),
        ("сегодня в 20:00", datetime(2025, 1, 10, 20, 0, tzinfo=UTC)),
    ],
)
def test_detects_dates(text: str, expected: datetime) -> None:
    assert RegexDateDetector().detect(text, now=NOW) == expected


def test_missing_year_rolls_to_next_occurrence() -> None:
    later = datetime(2025, 4, 1, tzinfo=UTC)
    assert RegexDateDetector().detect("5 марта", now=later) == datetime(2026, 3, 5, 9, 0, tzinfo=UTC)


def test_earliest_mention_wins() -> None:
    found = RegexDateDetector().detect("завтра или 5 марта", now=NOW)
    assert found == datetime(2025, 1, 11, 9, 0, tzinfo=UTC)


def test_impossible_dates_are_skipped() -> None:
    found = RegexDateDetector().detect("31.02 нет, 01.03", now=NOW)
    assert found == datetime(2025, 3, 1, 9, 0, tzinfo=UTC)


def test_default_time_is_configurable() -> None:
    found = RegexDateDetector(default_time=time(12, 0)).detect("05.03", now=NOW)
    assert found == datetime(2025, 3, 5, 12, 0, tzinfo=UTC)


@pytest.mark.parametrize("text", ["", "ссылка на файл", "version 10:00 build", "room 25"])
def test_misses_return_none(text: str) -> None:
    assert RegexDateDetector().detect(text, now=NOW) is None


MSK = timezone(timedelta(hours=3))
NOW_MSK = datetime(2025, 1, 10, 12, 0, tzinfo=MSK)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("встреча 5 марта в 10:00", datetime(2025, 3, 5, 10, 0, tzinfo=MSK)),
        ("завтра", datetime(2025, 1, 11, 9, 0, tzinfo=MSK)),
        ("завтра в 18:30", datetime(2025, 1, 11, 18, 30, tzinfo=MSK)),
    ],
)
def test_wall_clock_time_stays_in_the_clock_zone(text: str, expected: datetime) -> None:
    found = RegexDateDetector().detect(text, now=NOW_MSK)

    assert found == expected
    assert found is not None
    assert found.utcoffset() == timedelta(hours=3)
    assert (found.hour, found.minute) == (expected.hour, expected.minute)


def test_relative_word_uses_the_local_calendar_day() -> None:
    # 01:30 on the 11th in UTC+3 is still the 10th in UTC.
    early = datetime(2025, 1, 11, 1, 30, tzinfo=MSK)
    assert RegexDateDetector().detect("завтра", now=early) == datetime(2025, 1, 12, 9, 0, tzinfo=MSK)
