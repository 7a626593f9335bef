"""Post type genealogist."""

from genealogy.genealogists.base import Genealogist
from genealogy.post import Post
from genealogy.relations import RelationType

SCORE_BY_KIND = {
    "article": 50,
    "video": 90,
    "talk": 20,
}


class TypeGenealogist(Genealogist):
    """Prefers some kinds of target posts over others (videos over articles over talks)."""

    relation_type = RelationType("type")

    def score(self, post1: Post, post2: Post) -> int:
        return SCORE_BY_KIND.get(post2.kind, 0)
