"""
Surge Rule Engine
=================

Time-of-day, trip-length and advance-booking adjustments, expressed as an
ordered tuple of ``SurgeRule`` descriptors folded over a running
multiplier that starts at 1.0.

Combination operators differ per rule and are part of the pricing policy:

=====  ======================  ================================  ===========
Order  Rule                    Fires when                        Effect
=====  ======================  ================================  ===========
1      Peak hours              Mon-Fri, 07-09h or 17-19h         m = 1.5
2      Weekend start           Fri, >= 20h                       m = 1.3
2b     Weekend                 Sat, or Sun <= 22h (not 2)        m = 1.4
3      Airport peak            airport, 04-07h or 18-21h         max(m, 1.2)
4      Short trip              distance < 2 km                   m * 1.1
5      Long distance           distance > 50 km                  m * 1.2
6      Advance booking         scheduled > 24h ahead             m * 0.9
6b     Early booking           scheduled 4-24h ahead (not 6)     m * 0.95
=====  ======================  ================================  ===========

Assignment rules overwrite whatever an earlier assignment produced, but
every rule whose condition held still contributes its label.  The
multiplier is returned unrounded.

Complexity: O(number of rules) per evaluation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional, Sequence

from .entities import SurgeContext
from .enums import ServiceType

logger = logging.getLogger(__name__)

SUNDAY, MONDAY, FRIDAY, SATURDAY = 0, 1, 5, 6


class SurgeInputs(NamedTuple):
    service_type: ServiceType | str
    distance_km: float
    context: SurgeContext


@dataclass(frozen=True)
class SurgeRule:
    label: str
    applies: Callable[[SurgeInputs], bool]
    combine: Callable[[float], float]


class SurgeResult(NamedTuple):
    multiplier: float
    reasons: tuple[str, ...]

    @property
    def reason(self) -> Optional[str]:
        return " + ".join(self.reasons) or None


# ── Predicates ────────────────────────────────────────────────────────


def _in_hours(hour: int, *windows: tuple[int, int]) -> bool:
    return any(start <= hour <= end for start, end in windows)


def is_weekday_peak(inputs: SurgeInputs) -> bool:
    ctx = inputs.context
    return MONDAY <= ctx.day_of_week <= FRIDAY and _in_hours(
        ctx.hour_of_day, (7, 9), (17, 19)
    )


def is_weekend_start(inputs: SurgeInputs) -> bool:
    ctx = inputs.context
    return ctx.day_of_week == FRIDAY and ctx.hour_of_day >= 20


def is_weekend(inputs: SurgeInputs) -> bool:
    if is_weekend_start(inputs):
        return False
    ctx = inputs.context
    return ctx.day_of_week == SATURDAY or (
        ctx.day_of_week == SUNDAY and ctx.hour_of_day <= 22
    )


def is_airport_peak(inputs: SurgeInputs) -> bool:
    return inputs.service_type == ServiceType.AIRPORT and _in_hours(
        inputs.context.hour_of_day, (4, 7), (18, 21)
    )


def is_short_trip(inputs: SurgeInputs) -> bool:
    return inputs.distance_km < 2


def is_long_distance(inputs: SurgeInputs) -> bool:
    return inputs.distance_km > 50


def is_advance_booking(inputs: SurgeInputs) -> bool:
    hours = inputs.context.hours_until_scheduled
    return hours is not None and hours > 24


def is_early_booking(inputs: SurgeInputs) -> bool:
    hours = inputs.context.hours_until_scheduled
    return hours is not None and 4 < hours <= 24


# ── Rule set ──────────────────────────────────────────────────────────


def _assign(value: float) -> Callable[[float], float]:
    return lambda _current: value


def _scale(factor: float) -> Callable[[float], float]:
    return lambda current: current * factor


def _at_least(floor: float) -> Callable[[float], float]:
    return lambda current: max(current, floor)


DEFAULT_RULES: tuple[SurgeRule, ...] = (
    SurgeRule("Peak hours", is_weekday_peak, _assign(1.5)),
    SurgeRule("Weekend start", is_weekend_start, _assign(1.3)),
    SurgeRule("Weekend", is_weekend, _assign(1.4)),
    SurgeRule("Airport peak", is_airport_peak, _at_least(1.2)),
    SurgeRule("Short trip", is_short_trip, _scale(1.1)),
    SurgeRule("Long distance", is_long_distance, _scale(1.2)),
    SurgeRule("Advance booking discount", is_advance_booking, _scale(0.9)),
    SurgeRule("Early booking discount", is_early_booking, _scale(0.95)),
)


class SurgeRuleEngine:
    def __init__(self, rules: Sequence[SurgeRule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def evaluate(
        self,
        service_type: ServiceType | str,
        distance_km: float,
        context: SurgeContext,
    ) -> SurgeResult:
        inputs = SurgeInputs(service_type, distance_km, context)
        multiplier = 1.0
        reasons: list[str] = []
        for rule in self.rules:
            if not rule.applies(inputs):
                continue
            multiplier = rule.combine(multiplier)
            reasons.append(rule.label)
            logger.debug("Surge rule %r fired -> multiplier=%s", rule.label, multiplier)
        return SurgeResult(multiplier, tuple(reasons))
