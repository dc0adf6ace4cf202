"""
Pytest configuration and fixtures.
"""

from datetime import datetime, timedelta

import pytest
import pytz

from countdown import create_app


@pytest.fixture
def now():
    """Current UTC time, truncated to seconds."""
    return datetime.now(pytz.UTC).replace(microsecond=0)


@pytest.fixture
def events_file(tmp_path):
    """Writes (name, datetime) pairs to an events.yaml and returns its path."""
    path = tmp_path / "events.yaml"

    def write(pairs):
        lines = ["events:"]
        for name, when in pairs:
            lines.append(f"  - name: {name}")
            lines.append(f"    date: {when.isoformat(timespec='seconds')}")
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return write


@pytest.fixture
def sample_file(events_file, now):
    """A: now+1h, B: now+2h, C: now-1h, declared out of order."""
    return events_file(
        [
            ("B", now + timedelta(hours=2)),
            ("C", now - timedelta(hours=1)),
            ("A", now + timedelta(hours=1)),
        ]
    )


@pytest.fixture
def make_client():
    def make(**config):
        app = create_app({"TESTING": True, **config})
        return app.test_client()

    return make
