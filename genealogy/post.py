"""Posts: the articles, talks and videos that relations are inferred between.

Posts are immutable and identified by their slug alone; two posts with the same
slug are equal no matter which variant they are or what else they carry.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, Iterable, Optional, Union


def strip_quotes(text: str) -> str:
    """Remove outer whitespace plus a leading and a trailing double quote.

    Each quote is removed on its own, so unbalanced quotes are stripped too:
    ``Post "B"`` becomes ``Post "B``.
    """
    text = text.strip()
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text.strip()


def parse_tags(text: str) -> FrozenSet[str]:
    """Parse a front matter tag list such as ``[java, streams , ]``.

    Args:
        text: Raw tag list, brackets optional

    Returns:
        Set of stripped, non-blank tags
    """
    text = text.strip()
    if text.startswith("["):
        text = text[1:]
    if text.endswith("]"):
        text = text[:-1]
    return frozenset(tag.strip() for tag in text.split(",") if tag.strip())


def _require_text(name: str, value: str) -> str:
    value = strip_quotes(value or "")
    if not value:
        raise ValueError(f"Post {name} can't be empty.")
    return value


@dataclass(frozen=True, eq=False)
class Post:
    """Base post with the attributes every variant shares.

    Attributes:
        slug: Unique identifier
        title: Display title
        tags: Set of tags
        date: Publication date
        description: Short summary
    """

    slug: str
    title: str
    tags: FrozenSet[str]
    date: date
    description: str

    kind = "post"

    def __post_init__(self):
        object.__setattr__(self, "slug", _require_text("slug", self.slug))
        object.__setattr__(self, "title", _require_text("title", self.title))
        object.__setattr__(self, "description", _require_text("description", self.description))
        object.__setattr__(self, "tags", _as_tags(self.tags))

    def __eq__(self, other):
        if not isinstance(other, Post):
            return NotImplemented
        return self.slug == other.slug

    def __hash__(self):
        return hash(self.slug)

    def __str__(self):
        return self.slug


@dataclass(frozen=True, eq=False)
class Article(Post):
    """A written blog post, optionally accompanied by a code repository."""

    repository: Optional[str] = None
    content: str = field(default="", repr=False)

    kind = "article"


@dataclass(frozen=True, eq=False)
class Talk(Post):
    """A conference talk with slides and, sometimes, a recording."""

    slides: str = ""
    video: Optional[str] = None

    kind = "talk"

    @property
    def repository(self) -> Optional[str]:
        # Talks never link a repository
        return None


@dataclass(frozen=True, eq=False)
class Video(Post):
    """A video, identified on the hosting platform by its video slug."""

    video: str = ""
    repository: Optional[str] = None

    kind = "video"

    def __post_init__(self):
        super().__post_init__()
        if not self.video or not self.video.strip():
            raise ValueError("Video slug can't be empty.")


def _as_tags(tags: Union[str, Iterable[str], None]) -> FrozenSet[str]:
    if tags is None:
        return frozenset()
    if isinstance(tags, str):
        return parse_tags(tags)
    return frozenset(tags)
