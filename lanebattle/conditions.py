# lanebattle/conditions.py
from __future__ import annotations

import operator
import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple, Union

from lanebattle.errors import DefinitionError


# ---- Condition keys ----
CONDITION_DEFAULT = "default"
STAT_SPEED = "speed"

_OPERATORS: Dict[str, Callable[[float, float], bool]] = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}

# "target_speed > 20", "target_speed<=7.5"
_COMPARISON_RE = re.compile(r"^\s*target_(\w+)\s*(>=|<=|>|<)\s*(-?\d+(?:\.\d+)?)\s*$")

_STATS = {"speed": STAT_SPEED}


@dataclass(frozen=True)
class Default:
    """Always matches."""


@dataclass(frozen=True)
class Comparison:
    stat: str
    op: str
    value: float


Condition = Union[Default, Comparison]


@dataclass(frozen=True)
class DamageRule:
    condition: Condition
    damage: int


def parse_condition(text: object) -> Condition:
    """
    Parse a rule condition string once, at load time.
    Raises DefinitionError for anything unrecognised.
    """
    if not isinstance(text, str):
        raise DefinitionError(f"Rule condition must be a string, got {text!r}")

    if text.strip().lower() == CONDITION_DEFAULT:
        return Default()

    m = _COMPARISON_RE.match(text)
    if not m:
        raise DefinitionError(f"Unsupported rule condition: {text!r}")

    stat_name, op, value = m.groups()
    stat = _STATS.get(stat_name)
    if stat is None:
        raise DefinitionError(f"Unsupported stat in rule condition: {text!r}")

    return Comparison(stat=stat, op=op, value=float(value))


def target_stat(target, stat: str) -> float:
    if stat == STAT_SPEED:
        return float(target.speed)
    raise ValueError(f"Unknown stat: {stat}")


def matches(condition: Condition, target) -> bool:
    if isinstance(condition, Default):
        return True
    return _OPERATORS[condition.op](target_stat(target, condition.stat), condition.value)


def select_damage(rules: Sequence[DamageRule], base_damage: int, target) -> int:
    """First matching rule wins; no match (or no rules) -> base damage."""
    for rule in rules:
        if matches(rule.condition, target):
            return rule.damage
    return base_damage


def parse_rules(raw: object, owner: str) -> Tuple[DamageRule, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise DefinitionError(f"{owner}.rules must be a list")

    rules = []
    for idx, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise DefinitionError(f"{owner}.rules[{idx}] must be an object")
        damage: Optional[object] = entry.get("damage")
        if isinstance(damage, bool) or not isinstance(damage, int):
            raise DefinitionError(f"{owner}.rules[{idx}].damage must be an integer")
        rules.append(DamageRule(condition=parse_condition(entry.get("condition")), damage=damage))
    return tuple(rules)
