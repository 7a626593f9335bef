"""Tests for serializing recommendations."""

import json

import pytest
import yaml

from genealogy.exporter import (
    export,
    export_json,
    export_yaml,
    recommendations_to_dicts,
    write_recommendations,
)
from genealogy.recommendation import Recommendation

from conftest import make_article


@pytest.fixture
def recommendations():
    a = make_article("a", title="Post A")
    b = make_article("b", title='The "B" post')
    c = make_article("c", title="Post C: Ünïcode")
    return [
        Recommendation(a, (b, c)),
        Recommendation(b, ()),
    ]


class TestExporter:
    """Test JSON and YAML output."""

    def test_to_dicts(self, recommendations):
        assert recommendations_to_dicts(recommendations) == [
            {
                "title": "Post A",
                "slug": "a",
                "recommendations": [
                    {"title": 'The "B" post', "slug": "b"},
                    {"title": "Post C: Ünïcode", "slug": "c"},
                ],
            },
            {"title": 'The "B" post', "slug": "b", "recommendations": []},
        ]

    def test_json_is_valid(self, recommendations):
        text = export_json(recommendations)
        assert json.loads(text) == recommendations_to_dicts(recommendations)
        assert "Ünïcode" in text

    def test_compact_json(self, recommendations):
        assert "\n" not in export_json(recommendations, pretty=False)

    def test_yaml_is_valid(self, recommendations):
        text = export_yaml(recommendations)
        assert yaml.safe_load(text) == recommendations_to_dicts(recommendations)

    def test_export_dispatch(self, recommendations):
        assert export(recommendations, "json") == export_json(recommendations)
        assert export(recommendations, "yaml") == export_yaml(recommendations)
        with pytest.raises(ValueError):
            export(recommendations, "xml")

    def test_write(self, recommendations, tmp_path):
        path = write_recommendations(recommendations, tmp_path / "out" / "recs.json")
        assert json.loads(path.read_text()) == recommendations_to_dicts(recommendations)

    def test_empty(self):
        assert json.loads(export_json([])) == []
