"""Per relation type weights applied before averaging typed scores."""

import math
from numbers import Real
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from genealogy.exceptions import InvalidWeight
from genealogy.relations import RelationType

TypeKey = Union[RelationType, str]


def _check_weight(weight, what: str) -> float:
    if isinstance(weight, bool) or not isinstance(weight, Real) or math.isnan(weight):
        raise InvalidWeight(f"Weight of {what} should be a number: {weight!r}")
    if not 0.0 <= weight <= 1.0:
        raise InvalidWeight(f"Weight of {what} should be in interval [0; 1]: {weight}")
    return float(weight)


class Weights:
    """Immutable table mapping relation types to weights in [0, 1].

    Types without an entry get the default weight. The table is shared
    read-only by every aggregation of a run.

    Example:
        >>> weights = Weights({"tag": 1.0, "link": 0.75}, default_weight=0.5)
        >>> weights.weight_of(RelationType("link"))
        0.75
        >>> weights.weight_of(RelationType("repo"))
        0.5
    """

    __slots__ = ("_weights", "_default_weight")

    def __init__(self, weights: Optional[Mapping[TypeKey, float]] = None, default_weight: float = 1.0):
        checked: Dict[RelationType, float] = {}
        for relation_type, weight in (weights or {}).items():
            if not isinstance(relation_type, RelationType):
                relation_type = RelationType(relation_type)
            checked[relation_type] = _check_weight(weight, f"relation type '{relation_type}'")

        object.__setattr__(self, "_weights", MappingProxyType(checked))
        object.__setattr__(self, "_default_weight", _check_weight(default_weight, "the default"))

    def __setattr__(self, name, value):
        raise AttributeError("Weights are immutable")

    @classmethod
    def all_equal(cls) -> "Weights":
        """Weights that treat every relation type the same (weight 1.0)."""
        return cls({}, 1.0)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Weights":
        """Create from ``{"weights": {type: weight}, "default": weight}``."""
        return cls(data.get("weights", {}), data.get("default", 1.0))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weights": {str(relation_type): weight for relation_type, weight in self._weights.items()},
            "default": self._default_weight,
        }

    @property
    def default_weight(self) -> float:
        return self._default_weight

    def weight_of(self, relation_type: TypeKey) -> float:
        """Weight of a relation type, or the default weight for unknown types."""
        if not isinstance(relation_type, RelationType):
            relation_type = RelationType(relation_type)
        return self._weights.get(relation_type, self._default_weight)

    def __contains__(self, relation_type) -> bool:
        if isinstance(relation_type, str):
            relation_type = RelationType(relation_type)
        return relation_type in self._weights

    def __len__(self) -> int:
        return len(self._weights)

    def __repr__(self):
        entries = ", ".join(f"{key}={value}" for key, value in self._weights.items())
        return f"Weights({entries}; default={self._default_weight})"
