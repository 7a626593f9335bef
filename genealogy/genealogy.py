"""Relation inference engine.

Every genealogist scores every ordered pair of distinct posts, and the typed
relations of each pair are aggregated into one weighted relation. For P posts
and S genealogists that is P * (P - 1) * S genealogist calls: the quadratic
cost in the number of posts is the scalability ceiling of this design.
"""

import logging
from typing import Dict, Iterator, List, Sequence, Tuple

import numpy as np

from genealogy.exceptions import GenealogyError, StrategyFailure
from genealogy.genealogists.base import Genealogist
from genealogy.post import Post
from genealogy.relations import Relation, TypedRelation, aggregate
from genealogy.weights import Weights

logger = logging.getLogger(__name__)


class Genealogy:
    """Infers weighted relations between posts.

    Example:
        >>> genealogy = Genealogy(posts, [TagGenealogist()], Weights.all_equal())
        >>> relations = genealogy.infer_relations()

    Attributes:
        posts: Posts to relate, unique by slug
        genealogists: Scoring strategies, each invoked on every ordered pair
        weights: Weight table shared by all aggregations
    """

    def __init__(self, posts: Sequence[Post], genealogists: Sequence[Genealogist], weights: Weights):
        self.posts = list(posts)
        self.genealogists = list(genealogists)
        self.weights = weights

    def infer_relations(self) -> List[Relation]:
        """Infer one aggregated relation per ordered pair of distinct posts.

        The order of the returned relations carries no meaning.

        Returns:
            P * (P - 1) relations, given at least one genealogist

        Raises:
            StrategyFailure: If any genealogist fails for any pair
        """
        grouped: Dict[Tuple[Post, Post], List[TypedRelation]] = {}
        count = 0
        for typed_relation in self.infer_typed_relations():
            key = (typed_relation.post1, typed_relation.post2)
            grouped.setdefault(key, []).append(typed_relation)
            count += 1

        logger.debug(f"Inferred {count} typed relations for {len(grouped)} post pairs")

        relations = [aggregate(typed_relations, self.weights) for typed_relations in grouped.values()]

        logger.info(
            f"Inferred {len(relations)} relations between {len(self.posts)} posts "
            f"with {len(self.genealogists)} genealogists"
        )
        return relations

    def infer_typed_relations(self) -> Iterator[TypedRelation]:
        """Yield every genealogist's typed relation for every ordered pair.

        Self-pairs are never formed, so genealogists are never asked to relate
        a post to itself.
        """
        for post1 in self.posts:
            for post2 in self.posts:
                if post1 == post2:
                    continue
                for genealogist in self.genealogists:
                    yield self._infer(genealogist, post1, post2)

    def _infer(self, genealogist: Genealogist, post1: Post, post2: Post) -> TypedRelation:
        name = _name_of(genealogist)
        try:
            typed_relation = genealogist.infer(post1, post2)
        except GenealogyError as e:
            raise StrategyFailure(name, post1.slug, post2.slug, str(e)) from e
        except Exception as e:
            raise StrategyFailure(name, post1.slug, post2.slug, f"{type(e).__name__}: {e}") from e

        if not isinstance(typed_relation, TypedRelation):
            raise StrategyFailure(
                name, post1.slug, post2.slug,
                f"expected a TypedRelation, got {type(typed_relation).__name__}",
            )
        if typed_relation.post1 != post1 or typed_relation.post2 != post2:
            raise StrategyFailure(
                name, post1.slug, post2.slug,
                f"relation is for ({typed_relation.post1.slug}, {typed_relation.post2.slug})",
            )
        return typed_relation

    def relation_matrix(self, relations: Sequence[Relation]) -> np.ndarray:
        """Arrange relation scores in a P x P matrix in post order.

        ``matrix[i][j]`` is the score of the relation from ``posts[i]`` to
        ``posts[j]``. The diagonal and pairs without a relation are 0.

        Args:
            relations: Relations between this genealogy's posts

        Returns:
            Integer numpy array of scores
        """
        index = {post: i for i, post in enumerate(self.posts)}
        matrix = np.zeros((len(self.posts), len(self.posts)), dtype=int)
        for relation in relations:
            matrix[index[relation.post1], index[relation.post2]] = relation.score
        return matrix


def _name_of(genealogist) -> str:
    return getattr(genealogist, "name", None) or type(genealogist).__name__


def infer_relations(posts: Sequence[Post], genealogists: Sequence[Genealogist], weights: Weights = None) -> List[Relation]:
    """Shortcut for ``Genealogy(posts, genealogists, weights).infer_relations()``."""
    return Genealogy(posts, genealogists, weights or Weights.all_equal()).infer_relations()
