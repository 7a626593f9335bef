"""Top-K recommendations from aggregated relations."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from genealogy.post import Post
from genealogy.relations import Relation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Recommendation:
    """The posts most related to ``post``, best first."""

    post: Post
    recommended_posts: Tuple[Post, ...]

    def __post_init__(self):
        object.__setattr__(self, "recommended_posts", tuple(self.recommended_posts))


def _ranking_key(relation: Relation):
    # Descending score, ties by ascending target slug
    return (-relation.score, relation.post2.slug)


class Recommender:
    """Ranks each post's outgoing relations and keeps the best ones."""

    def recommend(self, relations: Iterable[Relation], per_post: int) -> List[Recommendation]:
        """Build one recommendation per source post.

        Relations are grouped by their source post, ranked by descending score
        with equal scores ordered by ascending target slug, and cut to
        ``per_post`` targets. Posts without outgoing relations get no
        recommendation.

        Args:
            relations: Aggregated relations
            per_post: Maximum number of recommended posts per post (0 allowed)

        Returns:
            Recommendations ordered by source slug

        Raises:
            ValueError: If per_post is negative
        """
        if per_post < 0:
            raise ValueError(f"Number of recommendations per post can't be negative: {per_post}")

        by_post: Dict[Post, List[Relation]] = {}
        for relation in relations:
            by_post.setdefault(relation.post1, []).append(relation)

        recommendations = []
        for post in sorted(by_post, key=lambda p: p.slug):
            ranked = sorted(by_post[post], key=_ranking_key)
            recommendations.append(
                Recommendation(post, tuple(relation.post2 for relation in ranked[:per_post]))
            )

        logger.debug(f"Built {len(recommendations)} recommendations with up to {per_post} posts each")
        return recommendations


def recommend(relations: Iterable[Relation], per_post: int) -> List[Recommendation]:
    """Shortcut for ``Recommender().recommend(relations, per_post)``."""
    return Recommender().recommend(relations, per_post)
