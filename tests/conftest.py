"""Shared fixtures for genealogy tests."""

from datetime import date
from typing import Dict, Tuple

import pytest

from genealogy.genealogists.base import Genealogist
from genealogy.post import Article, Post, Talk, Video
from genealogy.relations import RelationType


def make_article(slug, title=None, tags=(), repository=None, description="A post"):
    return Article(
        slug=slug,
        title=title or slug.upper(),
        tags=frozenset(tags),
        date=date(2020, 1, 23),
        description=description,
        repository=repository,
    )


class ScoreTableGenealogist(Genealogist):
    """Scores pairs from a fixed table keyed by (slug1, slug2)."""

    def __init__(self, relation_type: str, scores: Dict[Tuple[str, str], float], default: float = 0):
        self.relation_type = RelationType(relation_type)
        self.scores = scores
        self.default = default
        self.calls = []

    def score(self, post1: Post, post2: Post) -> float:
        self.calls.append((post1.slug, post2.slug))
        if post1 == post2:
            raise AssertionError("genealogist called with a self-pair")
        return self.scores.get((post1.slug, post2.slug), self.default)


@pytest.fixture
def post_a():
    return make_article("a")


@pytest.fixture
def post_b():
    return make_article("b")


@pytest.fixture
def post_c():
    return make_article("c")


@pytest.fixture
def tag_scores():
    return {
        ("a", "b"): 80, ("a", "c"): 60,
        ("b", "a"): 70, ("b", "c"): 50,
        ("c", "a"): 50, ("c", "b"): 40,
    }


@pytest.fixture
def link_scores():
    return {
        ("a", "b"): 60, ("a", "c"): 40,
        ("b", "a"): 50, ("b", "c"): 30,
        ("c", "a"): 30, ("c", "b"): 20,
    }


@pytest.fixture
def sample_posts():
    """One post of each kind, sharing some tags and repositories."""
    article = Article(
        slug="streams",
        title="Java Streams",
        tags=frozenset({"java", "streams"}),
        date=date(2021, 3, 1),
        description="All about streams",
        repository="nipafx/demo-streams",
    )
    talk = Talk(
        slug="modules-talk",
        title="Java Modules",
        tags=frozenset({"java", "modules"}),
        date=date(2019, 5, 12),
        description="Modules explained",
        slides="https://slides.example.com/modules",
    )
    video = Video(
        slug="streams-video",
        title="Streams in Action",
        tags=frozenset({"java", "streams", "video"}),
        date=date(2022, 7, 4),
        description="Streams on video",
        video="dQw4w9WgXcQ",
        repository="nipafx/demo-streams",
    )
    return [article, talk, video]
