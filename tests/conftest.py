"""Shared fixtures for analyzer tests."""

from datetime import datetime

import pytest

from political_impact.data.political_events import PoliticalEvent, HISTORICAL_POLITICAL_EVENTS


@pytest.fixture
def make_event():
    """Factory for events with sensible defaults."""
    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        record = {
            'id': f"test-event-{counter['n']}",
            'date': '2024-01-01',
            'title': f"Test Event {counter['n']}",
            'description': '',
            'type': 'policy',
            'alignment': 'neutral',
            'severity': 'medium',
            'affected_sectors': ['energy'],
            'expected_impact': 'neutral',
            'actual_impact': None,
            'tags': [],
        }
        record.update(overrides)
        return PoliticalEvent.from_dict(record)

    return _make


@pytest.fixture
def historical_events():
    return list(HISTORICAL_POLITICAL_EVENTS)


@pytest.fixture
def mid_2024():
    """Reference time shortly after the last catalog event."""
    return datetime(2024, 6, 1)
