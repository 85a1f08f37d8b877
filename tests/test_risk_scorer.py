"""Tests for sector risk scoring."""

import pytest

from political_impact.analysis.risk_scorer import RiskScorer
from political_impact.data.political_events import NAMED_SECTORS, UPCOMING_POLITICAL_EVENTS
from political_impact.exceptions import InvalidArgument


def test_two_aligned_events_score(make_event):
    events = [
        make_event(alignment='left', severity='high', affected_sectors=['energy']),
        make_event(alignment='left', severity='medium', affected_sectors=['energy']),
    ]
    risk = RiskScorer().score('energy', events)
    assert risk.score == pytest.approx(0.6 * 0.7 + 0.4 * 0.7)
    assert risk.score == pytest.approx(0.7)


def test_score_saturates_at_one(make_event):
    events = [make_event(alignment='right', severity='critical', affected_sectors=['defense']) for _ in range(5)]
    risk = RiskScorer().score('defense', events)
    assert risk.score == 1.0


def test_unrelated_events_do_not_contribute(make_event):
    events = [make_event(alignment='left', severity='critical', affected_sectors=['tech'])]
    risk = RiskScorer().score('healthcare', events)
    assert risk.score == 0.0
    assert risk.factors == []
    assert risk.risk_level == 'low'


def test_wildcard_events_contribute(make_event):
    events = [make_event(alignment='neutral', severity='critical', affected_sectors=['all'], title='Election')]
    risk = RiskScorer().score('financial', events)
    # critical neutral: 0.8 * min(0.5 + 0.2, 0.9)
    assert risk.score == pytest.approx(0.56)
    assert risk.factors == ['Election (neutral)']


def test_factors_truncated_in_iteration_order(make_event):
    events = [
        make_event(title='Minor', alignment='left', severity='low', affected_sectors=['tech']),
        make_event(title='Antitrust', alignment='left', severity='high', affected_sectors=['tech']),
        make_event(title='Speech', alignment='right', severity='medium', affected_sectors=['tech']),
        make_event(title='Breakup', alignment='left', severity='critical', affected_sectors=['tech']),
    ]
    risk = RiskScorer().score('tech', events)
    # Not sorted by risk: the critical event is fourth and is dropped
    assert risk.factors == ['Minor (left)', 'Antitrust (left)', 'Speech (right)']


def test_score_does_not_mutate_inputs(make_event):
    events = [make_event(severity='high', affected_sectors=['energy'])]
    snapshot = list(events)
    RiskScorer().score('energy', events)
    assert events == snapshot


def test_score_bounds_for_every_sector():
    scorer = RiskScorer()
    for risk in scorer.score_all(UPCOMING_POLITICAL_EVENTS):
        assert 0.0 <= risk.score <= 1.0
        assert len(risk.factors) <= 3
    assert [r.sector for r in scorer.score_all([])] == [s.value for s in NAMED_SECTORS]


def test_invalid_sector_rejected():
    with pytest.raises(InvalidArgument):
        RiskScorer().score('all', [])
    with pytest.raises(InvalidArgument):
        RiskScorer().score('crypto', [])


def test_to_dict(make_event):
    events = [make_event(title='Vote', alignment='left', severity='critical', affected_sectors=['healthcare'])]
    data = RiskScorer().score('healthcare', events).to_dict()
    assert data['sector'] == 'healthcare'
    assert data['score'] == pytest.approx(0.72)
    assert data['risk_level'] == 'medium'
    assert data['factors'] == ['Vote (left)']
