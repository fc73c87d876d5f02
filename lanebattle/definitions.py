# lanebattle/definitions.py
"""Unit definitions: immutable stat/behaviour templates keyed by type id."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Literal, Optional, Tuple, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
    model_validator,
)

from lanebattle.conditions import DamageRule, parse_rules
from lanebattle.errors import DefinitionError

logger = logging.getLogger(__name__)

DATA_PATH = Path(__file__).resolve().parent / "data" / "units.json"

ATTACK_MELEE = "melee"
ATTACK_RANGED = "ranged"

DEFAULT_EMOJI = "🤺"


# ---------------------------------------------------------
# Definition shapes
# ---------------------------------------------------------

class _Definition(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Stats(_Definition):
    health: StrictInt = Field(ge=1)
    speed: Union[StrictInt, StrictFloat] = 0
    movement_ticks: StrictInt = Field(ge=1)


class AttackDef(_Definition):
    """
    How a unit hits. Melee always reaches 1 tile; ranged attacks must give
    their own range_manhattan and may carry a projectile_speed (ticks per tile).
    """

    type: Literal["melee", "ranged"]
    damage: StrictInt = Field(ge=0)
    frequency_ticks: StrictInt = Field(ge=1)
    range_manhattan: StrictInt = Field(default=1, ge=1)
    projectile_speed: Optional[StrictInt] = Field(default=None, ge=1)
    rules: Tuple[DamageRule, ...] = ()

    @field_validator("rules", mode="plain")
    @classmethod
    def _parse_rules(cls, value: Any) -> Tuple[DamageRule, ...]:
        if isinstance(value, tuple) and all(isinstance(rule, DamageRule) for rule in value):
            return value
        return parse_rules(value, "attack")

    @model_validator(mode="after")
    def _check_reach(self) -> "AttackDef":
        if self.is_ranged and "range_manhattan" not in self.model_fields_set:
            raise ValueError("ranged attacks need a range_manhattan")
        if self.is_melee and (self.range_manhattan != 1 or self.projectile_speed is not None):
            raise ValueError("melee attacks take no range_manhattan or projectile_speed")
        return self

    @property
    def is_melee(self) -> bool:
        return self.type == ATTACK_MELEE

    @property
    def is_ranged(self) -> bool:
        return self.type == ATTACK_RANGED


class HealBehavior(_Definition):
    frequency_ticks: StrictInt = Field(ge=1)
    # older unit files call it initial_heal
    initial_power: StrictInt = Field(ge=0, validation_alias=AliasChoices("initial_power", "initial_heal"))
    range_manhattan: StrictInt = Field(ge=1)


class SlowDownBehavior(_Definition):
    condition_range_manhattan: StrictInt = Field(ge=0)
    new_movement_ticks: StrictInt = Field(ge=1)
    new_speed: Union[StrictInt, StrictFloat]


class Behavior(_Definition):
    heal: Optional[HealBehavior] = None
    slow_down: Optional[SlowDownBehavior] = None
    stop_on_adjacent_enemy: StrictBool = False
    stop_on_enemy_in_lane: Optional[StrictInt] = Field(default=None, ge=0)
    stop_on_enemy_within: Optional[StrictInt] = Field(default=None, ge=0)


class UnitDefinition(_Definition):
    id: StrictStr
    name: StrictStr
    emoji: StrictStr = DEFAULT_EMOJI
    stats: Stats
    attack: Optional[AttackDef] = None
    behavior: Behavior = Field(default_factory=Behavior)

    @model_validator(mode="before")
    @classmethod
    def _name_defaults_to_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and "name" not in data:
            data = {**data, "name": data.get("id")}
        return data

    @field_validator("id")
    @classmethod
    def _id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("id must not be blank")
        return value


# ---------------------------------------------------------
# Parsing
# ---------------------------------------------------------

def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        where = ".".join(str(p) for p in err["loc"]) or "definition"
        parts.append(f"{where}: {err['msg']}")
    return "; ".join(parts)


def parse_definition(data: Any) -> UnitDefinition:
    if not isinstance(data, dict) or not data:
        raise DefinitionError(f"Unit definition must be a non-empty object, got {data!r}")

    try:
        return UnitDefinition.model_validate(data)
    except ValidationError as exc:
        raise DefinitionError(f"unit '{data.get('id')}': {_describe(exc)}") from exc


# ---------------------------------------------------------
# Registry
# ---------------------------------------------------------

class DefinitionRegistry:
    """Read-only mapping of type id -> UnitDefinition. Never empty."""

    def __init__(self, definitions: List[UnitDefinition]) -> None:
        if not definitions:
            raise DefinitionError("Unit registry is empty")

        self._defs: Dict[str, UnitDefinition] = {}
        for d in definitions:
            if d.id in self._defs:
                raise DefinitionError(f"Duplicate unit id '{d.id}'")
            self._defs[d.id] = d

    def get(self, type_id: str) -> Optional[UnitDefinition]:
        return self._defs.get(type_id)

    def __getitem__(self, type_id: str) -> UnitDefinition:
        return self._defs[type_id]

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._defs

    def __iter__(self) -> Iterator[UnitDefinition]:
        return iter(self._defs.values())

    def __len__(self) -> int:
        return len(self._defs)

    def ids(self) -> List[str]:
        return list(self._defs.keys())


def registry_from_data(data: Any) -> DefinitionRegistry:
    """Build a registry from a parsed document: {"units": [...]}."""
    if not isinstance(data, dict):
        raise DefinitionError("Definition document must be an object with a 'units' list")

    units = data.get("units")
    if not isinstance(units, list) or not units:
        raise DefinitionError("Definition document has no 'units'")

    return DefinitionRegistry([parse_definition(u) for u in units])


def load_definitions(path: Union[str, Path, None] = None) -> DefinitionRegistry:
    """
    Load unit definitions from a JSON file (bundled set by default).
    Any problem is fatal: the battle cannot start without definitions.
    """
    path = Path(path) if path is not None else DATA_PATH

    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except OSError as exc:
        raise DefinitionError(f"Cannot read unit definitions from {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DefinitionError(f"Invalid JSON in {path}: {exc}") from exc

    registry = registry_from_data(data)
    logger.info("Loaded %d unit definitions from %s", len(registry), path)
    return registry
