"""Ordered (predicate, adjustment) decision tables for score accumulation."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

Ctx = TypeVar("Ctx")


@dataclass(frozen=True)
class ScoreRule(Generic[Ctx]):
    """A named rule adding ``points`` to a score when ``predicate`` holds."""

    name: str
    predicate: Callable[[Ctx], bool]
    points: int


@dataclass(frozen=True)
class RuleOutcome:
    score: int
    triggered: tuple[str, ...]


def apply_rules(base: int, rules: Sequence[ScoreRule[Ctx]], ctx: Ctx) -> RuleOutcome:
    """
    Accumulate points from every rule whose predicate holds for ``ctx``.

    Rules are evaluated in order and independently; tiered thresholds must be
    written as mutually exclusive predicates.

    Args:
        base: Starting score
        rules: Ordered decision table
        ctx: Inputs the predicates read

    Returns:
        Final unclamped score and the names of the rules that fired
    """
    score = base
    triggered: list[str] = []
    for rule in rules:
        if rule.predicate(ctx):
            score += rule.points
            triggered.append(rule.name)
    return RuleOutcome(score=score, triggered=tuple(triggered))


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))
