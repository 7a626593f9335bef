"""
Serialize recommendations.

Supported formats:
- JSON: ``[{"title", "slug", "recommendations": [{"title", "slug"}]}]``
- YAML: the same structure
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from .recommendation import Recommendation

logger = logging.getLogger(__name__)


def _post_to_dict(post) -> Dict[str, str]:
    return {"title": post.title, "slug": post.slug}


def recommendations_to_dicts(recommendations: Sequence[Recommendation]) -> List[Dict[str, Any]]:
    """Plain data for recommendations, in the given order."""
    return [
        {
            **_post_to_dict(recommendation.post),
            "recommendations": [_post_to_dict(post) for post in recommendation.recommended_posts],
        }
        for recommendation in recommendations
    ]


def export_json(recommendations: Sequence[Recommendation], pretty: bool = True) -> str:
    data = recommendations_to_dicts(recommendations)
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, ensure_ascii=False)


def export_yaml(recommendations: Sequence[Recommendation]) -> str:
    data = recommendations_to_dicts(recommendations)
    return yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)


EXPORTERS = {
    "json": export_json,
    "yaml": export_yaml,
}


def export(recommendations: Sequence[Recommendation], format: str = "json") -> str:
    """
    Render recommendations in a format.

    Args:
        recommendations: Recommendations to render
        format: "json" or "yaml"

    Returns:
        Rendered text

    Raises:
        ValueError: On an unknown format
    """
    exporter = EXPORTERS.get(format)
    if exporter is None:
        raise ValueError(f"Unknown export format: {format}")
    return exporter(recommendations)


def write_recommendations(recommendations: Sequence[Recommendation], path: Path, format: str = "json") -> Path:
    """
    Write rendered recommendations to a file, creating parent folders.

    Returns:
        The written path
    """
    path = Path(path)
    content = export(recommendations, format)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content if content.endswith("\n") else content + "\n", encoding="utf-8")
    logger.info(f"Wrote {len(recommendations)} recommendations to {path}")
    return path
