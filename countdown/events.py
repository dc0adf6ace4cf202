from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

import pytz
import yaml
from dateutil import parser as dateutil_parser

from .errors import DataMalformed, DataUnavailable

logger = logging.getLogger(__name__)

ISO_FORMAT_TIMESPEC = "seconds"
DISPLAY_FORMAT = "%A, %B %d, %Y at %H:%M UTC"


@dataclass(frozen=True)
class Event:
    name: str
    date: datetime


@dataclass(frozen=True)
class DisplayEvent:
    name: str
    iso_date: str
    display_date: str


@dataclass(frozen=True)
class PageModel:
    next_event: Optional[DisplayEvent] = None
    following: List[DisplayEvent] = field(default_factory=list)


def load_events(path: Union[str, Path]) -> List[Event]:
    """
    Reads and decodes the events file.

    Expected YAML format:
    events:
      - name: "Launch"
        date: 2026-11-01T18:00:00Z
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise DataUnavailable(f"could not read file {path}: {e}") from e
    except (yaml.YAMLError, ValueError) as e:
        raise DataMalformed(f"could not parse yaml from {path}: {e}") from e

    if raw is None:
        return []
    if not isinstance(raw, dict):
        raise DataMalformed(f"expected a mapping at the top of {path}")

    records = raw.get("events") or []
    if not isinstance(records, list):
        raise DataMalformed(f"'events' in {path} must be a list")

    events: List[Event] = []
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            raise DataMalformed(f"event #{i} in {path} is not a mapping")
        if record.get("name") is None or record.get("date") is None:
            raise DataMalformed(f"event #{i} in {path} needs both 'name' and 'date'")
        events.append(
            Event(name=str(record["name"]), date=_parse_date(record["date"], i, path))
        )
    return events


def _parse_date(value: Any, index: int, path: Union[str, Path]) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            parsed = dateutil_parser.isoparse(value.strip())
        except ValueError as e:
            raise DataMalformed(
                f"event #{index} in {path} has an unparsable date {value!r}: {e}"
            ) from e
    else:
        raise DataMalformed(f"event #{index} in {path} has an unparsable date {value!r}")

    # Naive timestamps are UTC
    if parsed.tzinfo is None:
        parsed = pytz.UTC.localize(parsed)
    return parsed


def select_upcoming(events: Iterable[Event], now: datetime) -> List[Event]:
    """
    Returns events strictly after `now`, earliest first.

    The sort is stable, so events sharing a timestamp keep file order.
    """
    upcoming = [e for e in events if e.date > now]
    return sorted(upcoming, key=lambda e: e.date)


def to_display(event: Event) -> DisplayEvent:
    utc = event.date.astimezone(pytz.UTC)
    return DisplayEvent(
        name=event.name,
        iso_date=utc.isoformat(timespec=ISO_FORMAT_TIMESPEC),
        display_date=utc.strftime(DISPLAY_FORMAT),
    )


def build_page(upcoming: List[Event]) -> PageModel:
    if not upcoming:
        return PageModel()
    return PageModel(
        next_event=to_display(upcoming[0]),
        following=[to_display(e) for e in upcoming[1:]],
    )


def now_utc() -> datetime:
    return datetime.now(pytz.UTC)
