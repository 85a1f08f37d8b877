"""Tests for the event catalog and classification helpers."""

from datetime import date

import pytest

from political_impact.data.political_events import (
    EventCatalog,
    EventSeverity,
    MarketSector,
    PoliticalAlignment,
    HISTORICAL_POLITICAL_EVENTS,
    UPCOMING_POLITICAL_EVENTS,
    classify_event_alignment,
    get_upcoming_political_events,
)
from political_impact.exceptions import InvalidArgument


def test_historical_catalog_shape():
    assert len(HISTORICAL_POLITICAL_EVENTS) == 12

    ids = [e.id for e in HISTORICAL_POLITICAL_EVENTS]
    assert len(set(ids)) == len(ids)

    for event in HISTORICAL_POLITICAL_EVENTS:
        assert date(2020, 1, 1) <= event.date <= date(2024, 12, 31)
        assert event.is_realized
        assert -0.15 <= event.actual_impact <= 0.15
        assert event.affected_sectors


def test_defense_event_is_the_only_defense_record():
    defense = [e for e in HISTORICAL_POLITICAL_EVENTS if e.affects('defense')]
    assert [e.id for e in defense] == ['2024-defense-spending']
    assert defense[0].actual_impact == 0.05
    assert defense[0].alignment is PoliticalAlignment.RIGHT


def test_upcoming_events_are_unrealized():
    upcoming = get_upcoming_political_events()
    assert len(upcoming) == len(UPCOMING_POLITICAL_EVENTS)
    assert all(not e.is_realized for e in upcoming)


def test_from_dict_parses_enums_and_date(make_event):
    event = make_event(date='2022-08-16', severity='critical', affected_sectors=['healthcare', 'all'])
    assert event.date == date(2022, 8, 16)
    assert event.severity is EventSeverity.CRITICAL
    assert event.affected_sectors == (MarketSector.HEALTHCARE, MarketSector.ALL)


@pytest.mark.parametrize('field,value', [
    ('alignment', 'libertarian'),
    ('severity', 'extreme'),
    ('type', 'rally'),
    ('expected_impact', 'up'),
    ('affected_sectors', ['crypto']),
])
def test_from_dict_rejects_out_of_enum_values(make_event, field, value):
    with pytest.raises(InvalidArgument):
        make_event(**{field: value})


def test_from_dict_rejects_empty_sectors(make_event):
    with pytest.raises(InvalidArgument):
        make_event(affected_sectors=[])


def test_all_wildcard_matches_every_sector(make_event):
    event = make_event(affected_sectors=['all'])
    for sector in ('healthcare', 'tech', 'renewable'):
        assert event.affects(sector)

    direct = make_event(affected_sectors=['tech'])
    assert direct.affects('tech')
    assert direct.affects(MarketSector.TECH)
    assert not direct.affects('energy')


def test_severity_rank_is_ordered():
    ranks = [s.rank for s in (EventSeverity.LOW, EventSeverity.MEDIUM, EventSeverity.HIGH, EventSeverity.CRITICAL)]
    assert ranks == sorted(ranks)


def test_to_dict_round_trips_through_from_dict(make_event):
    event = make_event(actual_impact=0.02, tags=['Fed', 'rates'])
    assert event.tags == ('fed', 'rates')
    assert type(event).from_dict(event.to_dict()) == event


def test_classify_alignment_from_tags(make_event):
    left = make_event(alignment='neutral', tags=['climate-action', 'new-regulation'])
    assert classify_event_alignment(left) is PoliticalAlignment.LEFT

    right = make_event(alignment='neutral', tags=['tax-cut', 'oil-drilling-permits'])
    assert classify_event_alignment(right) is PoliticalAlignment.RIGHT

    tied = make_event(alignment='center', tags=['tax-cut', 'tax-increase'])
    assert classify_event_alignment(tied) is PoliticalAlignment.CENTER


def test_deregulation_tag_also_counts_as_regulation(make_event):
    # 'regulation' is a substring of 'deregulation', so both sides score
    event = make_event(alignment='neutral', tags=['deregulation'])
    assert classify_event_alignment(event) is PoliticalAlignment.NEUTRAL


def test_catalog_queries():
    catalog = EventCatalog()
    assert len(catalog) == 12
    assert catalog.get_event('2024-tech-antitrust').title == 'Major Tech Antitrust Investigation'
    assert catalog.get_event('missing') is None

    elections = catalog.get_events_by_type('election')
    assert [e.id for e in elections] == ['2020-presidential-election']

    left = catalog.get_events_by_alignment('left')
    assert all(e.alignment is PoliticalAlignment.LEFT for e in left)

    energy = catalog.get_events_affecting('energy')
    assert all(e.affects('energy') for e in energy)

    with pytest.raises(InvalidArgument):
        catalog.get_events_by_alignment('far-left')


def test_catalog_to_dataframe():
    catalog = EventCatalog()
    df = catalog.to_dataframe()
    assert len(df) == 12
    assert {'id', 'date', 'alignment', 'actual_impact'} <= set(df.columns)


def test_catalog_from_records(make_event):
    event = make_event()
    catalog = EventCatalog.from_records([event.to_dict()])
    assert list(catalog) == [event]
