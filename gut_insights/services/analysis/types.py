"""
Value types flowing through the digestive analysis engine.

None of these are persisted. Input types (LogEntry, ExposureEvent, Experiment)
are built by the data service from ORM rows; everything else is derived per
request and discarded once the response is sent.
"""
import enum
import math
from dataclasses import dataclass, field
from datetime import date, time
from typing import Dict, List, Optional, Tuple


# Declared (low, high) range of every bounded LogEntry field
FIELD_BOUNDS: Dict[str, Tuple[float, float]] = {
    "severity": (0, 5),
    "bloating": (0, 5),
    "pain": (0, 5),
    "gas": (0, 5),
    "reflux": (0, 5),
    "urgency": (0, 5),
    "bristol": (1, 7),
    "stress": (0, 5),
    "energy": (0, 5),
    "sleep_hours": (0, 24),
}

SECONDARY_SYMPTOM_FIELDS = ("bloating", "pain", "gas", "reflux", "urgency")

# Fields counted towards the data-completeness weight
COMPLETENESS_FIELDS = (
    "severity",
    "pain",
    "bloating",
    "gas",
    "reflux",
    "urgency",
    "bristol",
    "stress",
    "sleep_hours",
    "energy",
)


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def _bounded(value: Optional[float], name: str) -> Optional[float]:
    """Clamp value to the declared range of name; None and NaN mean absent."""
    if value is None:
        return None
    value = float(value)
    if math.isnan(value):
        return None
    low, high = FIELD_BOUNDS[name]
    return clamp(value, low, high)


class ExposureKind(str, enum.Enum):
    """What sort of thing the user was exposed to."""

    FOOD = "food"
    SUPPLEMENT = "supplement"


@dataclass(frozen=True)
class LogEntry:
    """One self-reported digestive log. Use LogEntry.build() to get clamped fields."""

    log_date: date
    log_time: Optional[time] = None
    severity: Optional[float] = None
    bloating: Optional[float] = None
    pain: Optional[float] = None
    gas: Optional[float] = None
    reflux: Optional[float] = None
    urgency: Optional[float] = None
    bristol: Optional[float] = None
    sleep_hours: Optional[float] = None
    stress: Optional[float] = None
    energy: Optional[float] = None
    alcohol: Optional[bool] = None
    caffeine: Optional[bool] = None
    notes: Optional[str] = None

    @classmethod
    def build(cls, log_date: date, **fields) -> "LogEntry":
        """Create an entry with every bounded field clamped to its range."""
        for name in FIELD_BOUNDS:
            if name in fields:
                fields[name] = _bounded(fields[name], name)
        return cls(log_date=log_date, **fields)

    def secondary_symptoms(self) -> List[float]:
        """Secondary intensities that were actually reported."""
        values = (getattr(self, name) for name in SECONDARY_SYMPTOM_FIELDS)
        return [v for v in values if v is not None]

    def populated_field_count(self) -> int:
        return sum(1 for name in COMPLETENESS_FIELDS if getattr(self, name) is not None)


@dataclass(frozen=True)
class ExposureEvent:
    """
    A food eaten on a day, or a supplement regimen that started on a day.

    The identity string is the aggregation key; no synonym resolution happens
    here.
    """

    kind: ExposureKind
    identity: str
    occurred_on: date


@dataclass(frozen=True)
class Experiment:
    """User-declared elimination/reintroduction trial."""

    identity: str
    start_date: date
    end_date: Optional[date] = None


@dataclass
class ExposureAccumulator:
    """Running totals for one exposure identity across all log days."""

    kind: ExposureKind
    identity: str
    weighted_score: float = 0.0
    count: int = 0
    example_dates: List[date] = field(default_factory=list)

    def add(self, contribution: float, log_date: date, max_examples: int) -> None:
        self.weighted_score += contribution
        self.count += 1
        if len(self.example_dates) < max_examples:
            self.example_dates.append(log_date)


@dataclass
class CorrelationResult:
    """Output of the correlator: suspect accumulators plus the low-severity tally."""

    accumulators: Dict[Tuple[ExposureKind, str], ExposureAccumulator] = field(
        default_factory=dict
    )
    low_severity_tally: Dict[str, int] = field(default_factory=dict)

    def accumulator_for(self, event: ExposureEvent) -> ExposureAccumulator:
        key = (event.kind, event.identity)
        if key not in self.accumulators:
            self.accumulators[key] = ExposureAccumulator(
                kind=event.kind, identity=event.identity
            )
        return self.accumulators[key]

    def record_low_severity(self, identity: str) -> None:
        self.low_severity_tally[identity] = self.low_severity_tally.get(identity, 0) + 1


@dataclass(frozen=True)
class ScoredExposure:
    identity: str
    kind: ExposureKind
    avg_score: float
    occurrences: int
    example_dates: Tuple[date, ...] = ()

    def as_payload(self) -> dict:
        return {
            "name": self.identity,
            "type": self.kind.value,
            "avgScore": self.avg_score,
            "occurrences": self.occurrences,
            "exampleDates": [d.isoformat() for d in self.example_dates],
        }


@dataclass(frozen=True)
class SafeExposure:
    identity: str
    safe_days: int

    def as_payload(self) -> dict:
        return {"name": self.identity, "safeDays": self.safe_days}


@dataclass(frozen=True)
class RankedExposures:
    suspects: List[ScoredExposure]
    safe: List[SafeExposure]


@dataclass(frozen=True)
class ExperimentResult:
    identity: str
    start_date: date
    avg_before: float
    avg_after: float
    change: float  # Negative = improvement
    days_before: int
    days_after: int
    end_date: Optional[date] = None

    def as_payload(self) -> dict:
        return {
            "name": self.identity,
            "startDate": self.start_date.isoformat(),
            "avgBefore": self.avg_before,
            "avgAfter": self.avg_after,
            "change": self.change,
            "daysBefore": self.days_before,
            "daysAfter": self.days_after,
        }


@dataclass(frozen=True)
class Report:
    """The structured scoring report, the engine's sole product."""

    top_suspects: List[ScoredExposure]
    safe_foods: List[SafeExposure]
    experiments: List[ExperimentResult]
    total_logs: int
    period_start: date
    period_end: date

    @property
    def period(self) -> str:
        return f"{self.period_start.isoformat()} a {self.period_end.isoformat()}"

    def as_payload(self) -> dict:
        return {
            "topSuspects": [s.as_payload() for s in self.top_suspects],
            "safeFoods": [s.as_payload() for s in self.safe_foods],
            "experiments": [e.as_payload() for e in self.experiments],
            "totalLogs": self.total_logs,
            "period": self.period,
        }


@dataclass(frozen=True)
class AnalysisOutcome:
    """Scoring report (None when data is insufficient) plus optional narrative."""

    scoring: Optional[Report]
    analysis: Optional[str] = None

    def as_payload(self) -> dict:
        return {
            "scoring": self.scoring.as_payload() if self.scoring else None,
            "analysis": self.analysis,
        }
