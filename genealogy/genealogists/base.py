"""Base class for genealogists.

A genealogist is one scoring strategy: given an ordered pair of distinct
posts it returns a TypedRelation tagged with its own relation type and a score
in [0, 100]. Genealogists must be pure functions of the two posts, because the
engine calls each of them once for every ordered pair.
"""

from abc import ABC, abstractmethod

from genealogy.post import Post
from genealogy.relations import RelationType, TypedRelation


class Genealogist(ABC):
    """Infers one kind of relation between two posts.

    Subclasses set ``relation_type`` and implement ``score``; ``infer`` wraps
    the score into a TypedRelation. Strategies that need full control can
    override ``infer`` instead.

    Examples:
        - TagGenealogist: share of common tags
        - TypeGenealogist: preference by the target post's kind
        - RepoGenealogist: shared code repository
    """

    relation_type: RelationType = None

    @property
    def name(self) -> str:
        """Registry name, the relation type value by default."""
        return self.relation_type.value

    @property
    def description(self) -> str:
        doc = (self.__doc__ or "").strip()
        return doc.splitlines()[0] if doc else ""

    def infer(self, post1: Post, post2: Post) -> TypedRelation:
        """Infer the typed relation from post1 to post2.

        Args:
            post1: Source post
            post2: Target post (never equal to post1)

        Returns:
            TypedRelation with this genealogist's relation type
        """
        return TypedRelation(post1, post2, self.relation_type, self.score(post1, post2))

    @abstractmethod
    def score(self, post1: Post, post2: Post) -> int:
        """Score the relation from post1 to post2 in [0, 100]."""
        pass

    def __repr__(self):
        return f"{self.__class__.__name__}({self.name!r})"
