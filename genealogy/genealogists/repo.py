"""Shared repository genealogist."""

from typing import Optional

from genealogy.genealogists.base import Genealogist
from genealogy.post import Post
from genealogy.relations import RelationType


def repository_of(post: Post) -> Optional[str]:
    return getattr(post, "repository", None)


class RepoGenealogist(Genealogist):
    """Relates posts that link the same code repository.

    Scores:
        - same repository: 100
        - different repositories: 50
        - neither has a repository: 20
        - only one has a repository: 0
    """

    relation_type = RelationType("repo")

    def score(self, post1: Post, post2: Post) -> int:
        repo1 = repository_of(post1)
        repo2 = repository_of(post2)
        if repo1 is None and repo2 is None:
            return 20
        if repo1 is None or repo2 is None:
            return 0
        return 100 if repo1 == repo2 else 50
