"""Hunt star score: weighted coincidences between sun and moon windows.

The score is a fold over ``RULES``. Each rule either tests a clock time
against a clock window or, for the last entry, the moon illumination
percentage. A rule whose inputs are missing for the day is skipped and adds
nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Callable, Dict, List, Optional, Tuple

from .astro_provider import RawEventSet
from .moon_windows import ClockWindow, DerivedWindows, clock_window, format_clock


MAJOR_WEIGHT = 3.0
MINOR_WEIGHT = 2.0
LUNAR_WEIGHT = 0.5
ILLUMINATION_WEIGHT = 0.5


@dataclass(frozen=True)
class ScoringInputs:
    """Clock-rendered view of one day, the only thing the rules look at."""

    moonrise: Optional[str] = None
    moonset: Optional[str] = None
    moonrise_window: Optional[ClockWindow] = None
    moonset_window: Optional[ClockWindow] = None
    meridian_window: Optional[ClockWindow] = None
    opposite_meridian_window: Optional[ClockWindow] = None
    sunrise_window: Optional[ClockWindow] = None
    sunset_window: Optional[ClockWindow] = None
    illumination_percent: float = 0.0

    @classmethod
    def from_day(
        cls,
        events: RawEventSet,
        windows: DerivedWindows,
        tz: Optional[tzinfo] = None,
    ) -> "ScoringInputs":
        return cls(
            moonrise=format_clock(events.moonrise, tz),
            moonset=format_clock(events.moonset, tz),
            moonrise_window=clock_window(windows.moonrise, tz),
            moonset_window=clock_window(windows.moonset, tz),
            meridian_window=clock_window(windows.meridian, tz),
            opposite_meridian_window=clock_window(windows.opposite_meridian, tz),
            sunrise_window=clock_window(windows.sunrise, tz),
            sunset_window=clock_window(windows.sunset, tz),
            illumination_percent=events.illumination * 100.0,
        )


def _window_edge(name: str, edge: str) -> Callable[[ScoringInputs], Optional[str]]:
    def getter(inputs: ScoringInputs) -> Optional[str]:
        window = getattr(inputs, name)
        return getattr(window, edge) if window is not None else None

    return getter


CANDIDATES: Dict[str, Callable[[ScoringInputs], Optional[str]]] = {
    "one_hour_before_sunrise": _window_edge("sunrise_window", "start"),
    "one_hour_after_sunrise": _window_edge("sunrise_window", "end"),
    "one_hour_before_sunset": _window_edge("sunset_window", "start"),
    "one_hour_after_sunset": _window_edge("sunset_window", "end"),
    "moonrise": lambda inputs: inputs.moonrise,
    "moonset": lambda inputs: inputs.moonset,
}


@dataclass(frozen=True)
class WindowRule:
    candidate: str
    window: str
    weight: float

    @property
    def name(self) -> str:
        return f"{self.candidate}_in_{self.window}"

    def matches(self, inputs: ScoringInputs) -> bool:
        time_value = CANDIDATES[self.candidate](inputs)
        window = getattr(inputs, self.window)
        if time_value is None or window is None:
            return False
        return window.contains(time_value)


@dataclass(frozen=True)
class IlluminationRule:
    low: float
    high: float
    weight: float
    name: str = "illumination_near_new_moon"

    def matches(self, inputs: ScoringInputs) -> bool:
        return self.low < inputs.illumination_percent <= self.high


def _rules_for(candidates: Tuple[str, ...], windows: Tuple[Tuple[str, float], ...]) -> List[WindowRule]:
    return [
        WindowRule(candidate, window, weight)
        for window, weight in windows
        for candidate in candidates
    ]


_SOLAR_WINDOWS = (
    ("meridian_window", MAJOR_WEIGHT),
    ("opposite_meridian_window", MAJOR_WEIGHT),
    ("moonrise_window", MINOR_WEIGHT),
    ("moonset_window", MINOR_WEIGHT),
)
_LUNAR_WINDOWS = (
    ("meridian_window", LUNAR_WEIGHT),
    ("opposite_meridian_window", LUNAR_WEIGHT),
    ("moonrise_window", LUNAR_WEIGHT),
    ("moonset_window", LUNAR_WEIGHT),
)

RULES = tuple(
    _rules_for(("one_hour_before_sunrise", "one_hour_after_sunrise"), _SOLAR_WINDOWS)
    + _rules_for(("one_hour_before_sunset", "one_hour_after_sunset"), _SOLAR_WINDOWS)
    + _rules_for(("moonrise", "moonset"), _LUNAR_WINDOWS)
    + [IlluminationRule(0.0, 10.0, ILLUMINATION_WEIGHT)]
)


def matched_rules(inputs: ScoringInputs, rules=RULES) -> list:
    return [rule for rule in rules if rule.matches(inputs)]


def score_day(inputs: ScoringInputs, rules=RULES) -> float:
    return sum((rule.weight for rule in matched_rules(inputs, rules)), 0.0)
