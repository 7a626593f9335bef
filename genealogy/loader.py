"""
Load posts from Markdown files with front matter.

A post file starts with a front matter block of ``key: value`` lines between
two ``---`` separators; for articles everything after the block is the
content::

    ---
    title: Cool: A blog post
    tags: [java, streams]
    date: 2020-01-23
    description: "Very blog, much post, so wow"
    slug: cool-blog-post
    ---
"""

import logging
from datetime import date
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .post import Article, Post, Talk, Video, parse_tags

logger = logging.getLogger(__name__)

FRONT_MATTER_SEPARATOR = "---"

DATE = "date"
DESCRIPTION = "description"
REPOSITORY = "repo"
SLIDES = "slides"
SLUG = "slug"
TAGS = "tags"
TITLE = "title"
VIDEO = "videoSlug"


class FrontMatter:
    """Parsed front matter of one post file."""

    def __init__(self, values: Dict[str, str]):
        self.values = values

    def required(self, key: str) -> str:
        value = self.values.get(key)
        if value is None or not value.strip():
            raise ValueError(f"Required key '{key}' not present in front matter.")
        return value

    def optional(self, key: str) -> Optional[str]:
        value = self.values.get(key)
        if value is None or not value.strip():
            return None
        return value.strip()


def read_front_matter(lines: List[str]) -> FrontMatter:
    """
    Parse the front matter block of a post.

    Lines starting with ``#`` are comments. Values keep everything after the
    first colon, so titles may contain colons.

    Args:
        lines: Lines of the post file

    Returns:
        Parsed front matter (empty if there is no block)
    """
    values: Dict[str, str] = {}
    inside = False
    for raw_line in lines:
        line = raw_line.strip()
        if line == FRONT_MATTER_SEPARATOR:
            if inside:
                break
            inside = True
            continue
        if not inside or not line or line.startswith("#"):
            continue

        key, colon, value = line.partition(":")
        if not colon:
            raise ValueError(f"Front matter line is not a key-value pair: {line}")
        values[key.strip()] = value.strip()
    return FrontMatter(values)


def read_content(lines: List[str]) -> str:
    """Everything after the second front matter separator."""
    separators = 0
    for i, line in enumerate(lines):
        if line.strip() == FRONT_MATTER_SEPARATOR:
            separators += 1
            if separators == 2:
                return "\n".join(lines[i + 1:]).strip()
    return ""


def _common_fields(front_matter: FrontMatter) -> Dict:
    return {
        "title": front_matter.required(TITLE),
        "tags": parse_tags(front_matter.required(TAGS)),
        "date": date.fromisoformat(front_matter.required(DATE).strip()),
        "description": front_matter.required(DESCRIPTION),
        "slug": front_matter.required(SLUG),
    }


def create_article(lines: List[str]) -> Article:
    front_matter = read_front_matter(lines)
    return Article(
        **_common_fields(front_matter),
        repository=front_matter.optional(REPOSITORY),
        content=read_content(lines),
    )


def create_talk(lines: List[str]) -> Talk:
    front_matter = read_front_matter(lines)
    return Talk(
        **_common_fields(front_matter),
        slides=front_matter.required(SLIDES).strip(),
        video=front_matter.optional(VIDEO),
    )


def create_video(lines: List[str]) -> Video:
    front_matter = read_front_matter(lines)
    return Video(
        **_common_fields(front_matter),
        video=front_matter.required(VIDEO).strip(),
        repository=front_matter.optional(REPOSITORY),
    )


FACTORIES: Dict[str, Callable[[List[str]], Post]] = {
    "article": create_article,
    "talk": create_talk,
    "video": create_video,
}


def load_post(path: Path, kind: str) -> Post:
    """
    Create a post of the given kind from a Markdown file.

    Args:
        path: Markdown file
        kind: "article", "talk" or "video"

    Returns:
        The post

    Raises:
        ValueError: If the kind is unknown or the file is not a valid post
    """
    factory = FACTORIES.get(kind)
    if factory is None:
        raise ValueError(f"Unknown post kind: {kind}")

    lines = Path(path).read_text(encoding="utf-8").splitlines()
    try:
        return factory(lines)
    except ValueError as e:
        raise ValueError(f"Creating {kind} failed: {path}: {e}") from e


def markdown_files_in(folder: Path) -> List[Path]:
    """Regular ``*.md`` files directly inside a folder, sorted by name."""
    folder = Path(folder)
    if not folder.exists():
        raise FileNotFoundError(f"Path doesn't exist: {folder}")
    if not folder.is_dir():
        raise NotADirectoryError(f"Path is no directory: {folder}")
    return sorted(p for p in folder.iterdir() if p.is_file() and p.suffix == ".md")


def load_posts(
    article_folder: Optional[Path] = None,
    talk_folder: Optional[Path] = None,
    video_folder: Optional[Path] = None,
) -> List[Post]:
    """
    Load all articles, talks and videos from their folders.

    Args:
        article_folder: Folder with article files
        talk_folder: Folder with talk files
        video_folder: Folder with video files

    Returns:
        Posts in folder order, then file name order

    Raises:
        ValueError: If two posts share a slug
    """
    posts: List[Post] = []
    seen: Dict[str, Path] = {}
    for kind, folder in (("article", article_folder), ("talk", talk_folder), ("video", video_folder)):
        if folder is None:
            continue
        files = markdown_files_in(folder)
        logger.debug(f"Found {len(files)} {kind} files in {folder}")
        for path in files:
            post = load_post(path, kind)
            if post.slug in seen:
                raise ValueError(f"Duplicate slug '{post.slug}' in {seen[post.slug]} and {path}")
            seen[post.slug] = path
            posts.append(post)

    logger.info(f"Loaded {len(posts)} posts")
    return posts
