"""
Political Events Module

Classification types and the static catalog of political events used to
train and evaluate the sector impact model.
"""

from datetime import date
from typing import Dict, List, Optional, Any, Iterable, Sequence, Tuple, Type, TypeVar
from dataclasses import dataclass, field
from enum import Enum

import pandas as pd
from loguru import logger

from ..exceptions import InvalidArgument


class PoliticalAlignment(Enum):
    """Coarse political leaning of an event."""
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    NEUTRAL = "neutral"


class EventType(Enum):
    """Kind of political event."""
    ELECTION = "election"
    POLICY = "policy"
    SPEECH = "speech"
    LEGISLATION = "legislation"
    APPOINTMENT = "appointment"
    ECONOMIC = "economic"


class EventSeverity(Enum):
    """Event severity levels, ordered by rank."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    EventSeverity.LOW: 1,
    EventSeverity.MEDIUM: 2,
    EventSeverity.HIGH: 3,
    EventSeverity.CRITICAL: 4,
}


class MarketSector(Enum):
    """Sector tags an event can be attached to. ALL matches every sector."""
    HEALTHCARE = "healthcare"
    ENERGY = "energy"
    DEFENSE = "defense"
    FINANCIAL = "financial"
    TECH = "tech"
    INFRASTRUCTURE = "infrastructure"
    ALL = "all"


class ExpectedImpact(Enum):
    """Analyst-asserted prior direction of an event."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


# The six concrete sectors (the ALL wildcard excluded)
NAMED_SECTORS: Tuple[MarketSector, ...] = tuple(s for s in MarketSector if s is not MarketSector.ALL)

E = TypeVar('E', bound=Enum)


def coerce_enum(enum_cls: Type[E], value: Any, label: str) -> E:
    """Convert a raw string (or enum member) into ``enum_cls``.

    Raises:
        InvalidArgument: if the value is not a member of the enum
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ', '.join(m.value for m in enum_cls)
        raise InvalidArgument(f"Invalid {label} {value!r} (expected one of: {allowed})") from None


@dataclass(frozen=True)
class PoliticalEvent:
    """A political event and its (optional) realized market impact."""
    id: str
    date: date
    title: str
    description: str
    type: EventType
    alignment: PoliticalAlignment
    severity: EventSeverity
    affected_sectors: Tuple[MarketSector, ...]
    expected_impact: ExpectedImpact
    actual_impact: Optional[float] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> 'PoliticalEvent':
        """Build an event from a plain record, validating every enum field."""
        sectors = tuple(
            coerce_enum(MarketSector, s, 'sector') for s in record.get('affected_sectors', ())
        )
        if not sectors:
            raise InvalidArgument(f"Event {record.get('id')!r} has no affected sectors")

        raw_date = record['date']
        event_date = raw_date if isinstance(raw_date, date) else date.fromisoformat(raw_date)

        actual = record.get('actual_impact')

        return cls(
            id=record['id'],
            date=event_date,
            title=record['title'],
            description=record.get('description', ''),
            type=coerce_enum(EventType, record['type'], 'event type'),
            alignment=coerce_enum(PoliticalAlignment, record['alignment'], 'alignment'),
            severity=coerce_enum(EventSeverity, record['severity'], 'severity'),
            affected_sectors=sectors,
            expected_impact=coerce_enum(ExpectedImpact, record['expected_impact'], 'expected impact'),
            actual_impact=float(actual) if actual is not None else None,
            tags=tuple(t.lower() for t in record.get('tags', ())),
        )

    def affects(self, sector: str) -> bool:
        """Check if the event touches ``sector`` directly or through the ALL wildcard."""
        names = {s.value for s in self.affected_sectors}
        sector_name = sector.value if isinstance(sector, MarketSector) else sector
        return sector_name in names or MarketSector.ALL.value in names

    @property
    def is_realized(self) -> bool:
        """Check if the market impact has been measured."""
        return self.actual_impact is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'date': self.date.isoformat(),
            'title': self.title,
            'description': self.description,
            'type': self.type.value,
            'alignment': self.alignment.value,
            'severity': self.severity.value,
            'affected_sectors': [s.value for s in self.affected_sectors],
            'expected_impact': self.expected_impact.value,
            'actual_impact': self.actual_impact,
            'tags': list(self.tags),
        }


# Realized events, 2020-2024. actual_impact is the fractional sector move.
_HISTORICAL_RECORDS: List[Dict[str, Any]] = [
    {
        'id': '2020-cares-act',
        'date': '2020-03-27',
        'title': 'CARES Act Signed Into Law',
        'description': '$2.2T pandemic relief package with direct payments and hospital funding',
        'type': 'legislation',
        'alignment': 'neutral',
        'severity': 'critical',
        'affected_sectors': ['financial', 'healthcare'],
        'expected_impact': 'positive',
        'actual_impact': 0.062,
        'tags': ['stimulus', 'social-spending', 'pandemic'],
    },
    {
        'id': '2020-presidential-election',
        'date': '2020-11-03',
        'title': '2020 Presidential Election',
        'description': 'Biden wins the presidency, Senate control undecided until January runoffs',
        'type': 'election',
        'alignment': 'neutral',
        'severity': 'critical',
        'affected_sectors': ['energy', 'healthcare', 'tech'],
        'expected_impact': 'neutral',
        'actual_impact': 0.022,
        'tags': ['election', 'presidential', 'uncertainty'],
    },
    {
        'id': '2021-american-rescue-plan',
        'date': '2021-03-11',
        'title': 'American Rescue Plan Act',
        'description': '$1.9T relief bill passed on party lines',
        'type': 'legislation',
        'alignment': 'left',
        'severity': 'high',
        'affected_sectors': ['infrastructure', 'financial'],
        'expected_impact': 'positive',
        'actual_impact': 0.018,
        'tags': ['stimulus', 'social-spending'],
    },
    {
        'id': '2021-infrastructure-act',
        'date': '2021-11-15',
        'title': 'Infrastructure Investment and Jobs Act',
        'description': 'Bipartisan $1.2T infrastructure bill signed',
        'type': 'legislation',
        'alignment': 'left',
        'severity': 'high',
        'affected_sectors': ['infrastructure', 'energy'],
        'expected_impact': 'positive',
        'actual_impact': 0.024,
        'tags': ['infrastructure', 'spending', 'green-energy'],
    },
    {
        'id': '2022-russian-oil-ban',
        'date': '2022-03-08',
        'title': 'US Bans Russian Oil Imports',
        'description': 'Executive order bans imports of Russian crude and LNG',
        'type': 'policy',
        'alignment': 'center',
        'severity': 'high',
        'affected_sectors': ['energy'],
        'expected_impact': 'positive',
        'actual_impact': 0.041,
        'tags': ['sanctions', 'oil', 'foreign-policy'],
    },
    {
        'id': '2022-inflation-reduction-act',
        'date': '2022-08-16',
        'title': 'Inflation Reduction Act Signed',
        'description': 'Climate spending and Medicare drug price negotiation become law',
        'type': 'legislation',
        'alignment': 'left',
        'severity': 'critical',
        'affected_sectors': ['healthcare', 'energy'],
        'expected_impact': 'negative',
        'actual_impact': -0.028,
        'tags': ['climate-action', 'drug-pricing', 'tax-increase'],
    },
    {
        'id': '2023-svb-backstop',
        'date': '2023-03-12',
        'title': 'Regulators Backstop SVB Depositors',
        'description': 'Treasury, Fed and FDIC guarantee deposits after Silicon Valley Bank failure',
        'type': 'economic',
        'alignment': 'neutral',
        'severity': 'critical',
        'affected_sectors': ['financial'],
        'expected_impact': 'negative',
        'actual_impact': -0.047,
        'tags': ['banking', 'bailout', 'regulation'],
    },
    {
        'id': '2024-biden-infrastructure-extension',
        'date': '2024-01-15',
        'title': 'Biden Announces Infrastructure Bill Extension',
        'description': 'President Biden announces $500B extension to infrastructure spending',
        'type': 'policy',
        'alignment': 'left',
        'severity': 'high',
        'affected_sectors': ['infrastructure', 'energy'],
        'expected_impact': 'positive',
        'actual_impact': 0.015,
        'tags': ['infrastructure', 'spending', 'green-energy'],
    },
    {
        'id': '2024-healthcare-proposal',
        'date': '2024-02-10',
        'title': 'Medicare for All Proposal Introduced',
        'description': 'Progressive Democrats introduce comprehensive healthcare reform',
        'type': 'legislation',
        'alignment': 'left',
        'severity': 'critical',
        'affected_sectors': ['healthcare'],
        'expected_impact': 'negative',
        'actual_impact': -0.034,
        'tags': ['healthcare-expansion', 'medicare', 'reform'],
    },
    {
        'id': '2024-fed-rate-decision',
        'date': '2024-03-20',
        'title': 'Federal Reserve Rate Decision',
        'description': 'Fed holds rates and signals cuts later in the year',
        'type': 'economic',
        'alignment': 'neutral',
        'severity': 'high',
        'affected_sectors': ['financial'],
        'expected_impact': 'positive',
        'actual_impact': 0.012,
        'tags': ['interest-rates', 'monetary-policy', 'fed'],
    },
    {
        'id': '2024-defense-spending',
        'date': '2024-04-05',
        'title': 'Defense Budget Increase Approved',
        'description': 'Congress approves 8% increase in defense spending',
        'type': 'legislation',
        'alignment': 'right',
        'severity': 'medium',
        'affected_sectors': ['defense'],
        'expected_impact': 'positive',
        'actual_impact': 0.05,
        'tags': ['defense-spending', 'military'],
    },
    {
        'id': '2024-tech-antitrust',
        'date': '2024-05-15',
        'title': 'Major Tech Antitrust Investigation',
        'description': 'DOJ launches investigation into Big Tech monopolies',
        'type': 'policy',
        'alignment': 'left',
        'severity': 'high',
        'affected_sectors': ['tech'],
        'expected_impact': 'negative',
        'actual_impact': -0.021,
        'tags': ['antitrust', 'regulation', 'big-tech'],
    },
]

# Scheduled events without a measured impact yet
_UPCOMING_RECORDS: List[Dict[str, Any]] = [
    {
        'id': 'fed-meeting-sept',
        'date': '2024-09-18',
        'title': 'Federal Reserve Interest Rate Decision',
        'description': 'Fed expected to cut rates by 0.25%',
        'type': 'economic',
        'alignment': 'neutral',
        'severity': 'high',
        'affected_sectors': ['financial', 'infrastructure'],
        'expected_impact': 'positive',
        'tags': ['fed', 'interest-rates', 'monetary-policy'],
    },
    {
        'id': 'healthcare-vote',
        'date': '2024-10-15',
        'title': 'Medicare Drug Price Negotiation Vote',
        'description': 'Senate vote on expanding Medicare drug price negotiations',
        'type': 'legislation',
        'alignment': 'left',
        'severity': 'critical',
        'affected_sectors': ['healthcare'],
        'expected_impact': 'negative',
        'tags': ['healthcare', 'medicare', 'drug-pricing'],
    },
    {
        'id': 'election-2024',
        'date': '2024-11-05',
        'title': 'Presidential Election',
        'description': '2024 US Presidential Election - market uncertainty peak',
        'type': 'election',
        'alignment': 'neutral',
        'severity': 'critical',
        'affected_sectors': ['all'],
        'expected_impact': 'neutral',
        'tags': ['election', 'uncertainty', 'volatility'],
    },
    {
        'id': 'energy-policy',
        'date': '2024-12-01',
        'title': 'Renewable Energy Tax Credit Extension',
        'description': 'Congressional vote on extending clean energy tax credits',
        'type': 'legislation',
        'alignment': 'left',
        'severity': 'medium',
        'affected_sectors': ['energy', 'infrastructure'],
        'expected_impact': 'positive',
        'tags': ['renewable-energy', 'tax-credits', 'climate-action'],
    },
]

HISTORICAL_POLITICAL_EVENTS: Tuple[PoliticalEvent, ...] = tuple(
    PoliticalEvent.from_dict(r) for r in _HISTORICAL_RECORDS
)

UPCOMING_POLITICAL_EVENTS: Tuple[PoliticalEvent, ...] = tuple(
    PoliticalEvent.from_dict(r) for r in _UPCOMING_RECORDS
)


# Tag keywords hinting at an event's leaning
LEFT_INDICATORS = ('regulation', 'tax-increase', 'social-spending', 'climate-action', 'healthcare-expansion')
RIGHT_INDICATORS = ('deregulation', 'tax-cut', 'defense-spending', 'business-friendly', 'oil-drilling')


def classify_event_alignment(event: PoliticalEvent) -> PoliticalAlignment:
    """Classify an event's leaning from its tags.

    Each indicator keyword that appears inside any tag scores one point for
    its side. Ties fall back to the event's declared alignment.
    """
    left_score = sum(1 for ind in LEFT_INDICATORS if any(ind in tag for tag in event.tags))
    right_score = sum(1 for ind in RIGHT_INDICATORS if any(ind in tag for tag in event.tags))

    if left_score > right_score:
        return PoliticalAlignment.LEFT
    if right_score > left_score:
        return PoliticalAlignment.RIGHT
    return event.alignment


def get_upcoming_political_events() -> List[PoliticalEvent]:
    """Get upcoming political events (static until a news feed is wired in)."""
    return list(UPCOMING_POLITICAL_EVENTS)


class EventCatalog:
    """Read-only view over an ordered collection of political events."""

    def __init__(self, events: Optional[Iterable[PoliticalEvent]] = None):
        """Initialize the catalog.

        Args:
            events: Events in catalog order. Defaults to the historical catalog.
        """
        self._events: Tuple[PoliticalEvent, ...] = tuple(
            HISTORICAL_POLITICAL_EVENTS if events is None else events
        )
        logger.debug(f"Event catalog loaded with {len(self._events)} events")

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> 'EventCatalog':
        """Build a catalog from plain records."""
        return cls(PoliticalEvent.from_dict(r) for r in records)

    @property
    def events(self) -> Tuple[PoliticalEvent, ...]:
        return self._events

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self):
        return iter(self._events)

    def get_event(self, event_id: str) -> Optional[PoliticalEvent]:
        """Get an event by id."""
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def get_events_by_type(self, event_type: str) -> List[PoliticalEvent]:
        """Get all events of a specific type."""
        wanted = coerce_enum(EventType, event_type, 'event type')
        return [e for e in self._events if e.type is wanted]

    def get_events_by_alignment(self, alignment: str) -> List[PoliticalEvent]:
        """Get all events with a specific alignment."""
        wanted = coerce_enum(PoliticalAlignment, alignment, 'alignment')
        return [e for e in self._events if e.alignment is wanted]

    def get_events_affecting(self, sector: str) -> List[PoliticalEvent]:
        """Get events that touch a sector, including ALL-sector events."""
        return [e for e in self._events if e.affects(sector)]

    def to_dataframe(self, events: Optional[Sequence[PoliticalEvent]] = None) -> pd.DataFrame:
        """Convert events to DataFrame.

        Args:
            events: Events to convert. If None, uses the whole catalog.

        Returns:
            DataFrame of events, one row per event
        """
        if events is None:
            events = self._events

        data = [e.to_dict() for e in events]
        return pd.DataFrame(data)
