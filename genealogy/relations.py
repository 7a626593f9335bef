"""Relation types, typed relations and their weighted aggregation."""

import math
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Iterable

from genealogy.exceptions import (
    EmptyAggregation,
    InvalidRelation,
    InvalidRelationType,
    InvalidScore,
)
from genealogy.post import Post
from genealogy.stats import Mean, round_half_away_from_zero

MIN_SCORE = 0
MAX_SCORE = 100


def _check_score(score, description: str) -> None:
    if isinstance(score, bool) or not isinstance(score, Real):
        raise InvalidScore(f"Score should be a number: {description}")
    if math.isnan(score) or not MIN_SCORE <= score <= MAX_SCORE:
        raise InvalidScore(f"Score should be in interval [{MIN_SCORE}; {MAX_SCORE}]: {description}")


@dataclass(frozen=True, order=True)
class RelationType:
    """Identifies the genealogist that produced a score, e.g. ``tag``."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidRelationType("Relation types can't have an empty value.")

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class TypedRelation:
    """One genealogist's score for one ordered pair of posts."""

    post1: Post
    post2: Post
    type: RelationType
    score: float

    def __post_init__(self):
        if isinstance(self.type, str):
            object.__setattr__(self, "type", RelationType(self.type))
        if self.post1 == self.post2:
            raise InvalidRelation(f"A post can't be related to itself: {self.post1.slug}")
        _check_score(self.score, repr(self))


@dataclass(frozen=True)
class Relation:
    """The aggregated score of an ordered pair of posts."""

    post1: Post
    post2: Post
    score: int

    def __post_init__(self):
        if self.post1 == self.post2:
            raise InvalidRelation(f"A post can't be related to itself: {self.post1.slug}")
        _check_score(self.score, repr(self))
        if not isinstance(self.score, Integral):
            raise InvalidScore(f"Relation score should be an integer: {self!r}")


def aggregate(typed_relations: Iterable[TypedRelation], weights) -> Relation:
    """Combine the typed relations of one post pair into a single relation.

    Each score is multiplied by the weight of its relation type; the result is
    the mean of those weighted scores over the number of typed relations (not
    over the sum of weights), rounded half away from zero.

    All typed relations must share the same (post1, post2) pair. This is not
    checked: the inference engine groups them that way.

    Args:
        typed_relations: Non-empty typed relations of one pair
        weights: Weights table providing ``weight_of(relation_type)``

    Returns:
        The aggregated relation

    Raises:
        EmptyAggregation: If no typed relation was given
    """
    mean = Mean()
    first = None
    for typed_relation in typed_relations:
        if first is None:
            first = typed_relation
        mean.add(typed_relation.score * weights.weight_of(typed_relation.type))

    if first is None:
        raise EmptyAggregation("Can't create relation from zero typed relations.")

    return Relation(first.post1, first.post2, round_half_away_from_zero(mean.value))
