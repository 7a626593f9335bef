"""Tag overlap genealogist."""

from genealogy.genealogists.base import Genealogist
from genealogy.post import Post
from genealogy.relations import RelationType
from genealogy.stats import round_half_away_from_zero


class TagGenealogist(Genealogist):
    """Relates posts by the share of tags they have in common.

    Computes 2 * |A ∩ B| / (|A| + |B|) as a percentage (the Dice coefficient),
    so two posts with identical tag sets score 100.
    """

    relation_type = RelationType("tag")

    def score(self, post1: Post, post2: Post) -> int:
        total = len(post1.tags) + len(post2.tags)
        if total == 0:
            return 0
        shared = len(post1.tags & post2.tags)
        return round_half_away_from_zero(100.0 * 2.0 * shared / total)
