"""Entities repository."""
from __future__ import annotations

from typing import Dict, List, Tuple

from fmaze.data.errors import DataReferenceError, DataValidationError
from fmaze.data.repositories.base import RepositoryBase
from fmaze.domain.defs import EntityDef, OutcomeDef

_ENTITY_FIELDS = {"name", "kind", "min", "max", "outcomes"}
_OUTCOME_FIELDS = {"label", "action", "amount", "weight", "mob_type", "turns"}
_KINDS = ("creature", "item")


class EntitiesRepository(RepositoryBase[EntityDef]):
    """Loads and validates creature and item definitions from entities.json."""

    def __init__(self, base_path=None) -> None:
        super().__init__("entities.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EntityDef]:
        entities: Dict[str, EntityDef] = {}
        for raw_id, payload in raw.items():
            context = f"entity '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(data, {"name", "kind", "min", "max"}, context)
            self._assert_known(data, _ENTITY_FIELDS, context)

            kind = data["kind"]
            if kind not in _KINDS:
                raise DataValidationError(f"{context} kind must be one of {list(_KINDS)}.")
            minimum = self._require_int(data["min"], f"{context} min")
            maximum = self._require_int(data["max"], f"{context} max")
            if minimum < 0 or maximum < minimum:
                raise DataValidationError(f"{context} requires 0 <= min <= max (got {minimum}..{maximum}).")

            entities[raw_id] = EntityDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                kind=kind,  # type: ignore[arg-type]
                min=minimum,
                max=maximum,
                outcomes=self._build_outcomes(data.get("outcomes", []), context),
            )
        self._check_references(entities)
        return entities

    def creatures(self) -> List[EntityDef]:
        return [entity for entity in self.all() if entity.is_creature]

    def items(self) -> List[EntityDef]:
        return [entity for entity in self.all() if not entity.is_creature]

    def _build_outcomes(self, value: object, context: str) -> Tuple[OutcomeDef, ...]:
        if not isinstance(value, list):
            raise DataValidationError(f"{context} outcomes must be a list.")
        outcomes: List[OutcomeDef] = []
        for idx, entry in enumerate(value):
            outcome_context = f"{context} outcome #{idx}"
            data = self._require_mapping(entry, outcome_context)
            self._assert_required(data, {"label", "action"}, outcome_context)
            self._assert_known(data, _OUTCOME_FIELDS, outcome_context)
            weight = self._require_number(data.get("weight", 1), f"{outcome_context} weight")
            if weight <= 0:
                raise DataValidationError(f"{outcome_context} weight must be positive.")
            amount = data.get("amount")
            turns = data.get("turns")
            mob_type = data.get("mob_type")
            outcomes.append(
                OutcomeDef(
                    label=self._require_str(data["label"], f"{outcome_context} label"),
                    action=self._require_str(data["action"], f"{outcome_context} action"),
                    amount=None if amount is None else self._require_int(amount, f"{outcome_context} amount"),
                    weight=weight,
                    mob_type=None if mob_type is None else self._require_str(mob_type, f"{outcome_context} mob_type"),
                    turns=None if turns is None else self._require_int(turns, f"{outcome_context} turns"),
                )
            )
        return tuple(outcomes)

    @staticmethod
    def _check_references(entities: Dict[str, EntityDef]) -> None:
        for entity in entities.values():
            for outcome in entity.outcomes:
                if outcome.mob_type is None:
                    continue
                target = entities.get(outcome.mob_type)
                if target is None or not target.is_creature:
                    raise DataReferenceError(
                        f"entity '{entity.id}' outcome '{outcome.label}' spawns unknown creature '{outcome.mob_type}'."
                    )
