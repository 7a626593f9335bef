"""Title letter genealogist."""

from genealogy.genealogists.base import Genealogist
from genealogy.post import Post
from genealogy.relations import RelationType
from genealogy.stats import round_half_away_from_zero


def title_letters(post: Post) -> frozenset:
    return frozenset(post.title.lower())


class SillyGenealogist(Genealogist):
    """Relates posts by how many of the first title's letters the second title uses."""

    relation_type = RelationType("silly")

    def score(self, post1: Post, post2: Post) -> int:
        letters1 = title_letters(post1)
        if not letters1:
            return 0
        shared = letters1 & title_letters(post2)
        return round_half_away_from_zero(100.0 * len(shared) / len(letters1))
