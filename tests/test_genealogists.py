"""Tests for the built-in genealogists and the registry."""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from genealogy.genealogists import (
    Genealogist,
    GenealogistRegistry,
    RepoGenealogist,
    SillyGenealogist,
    TagGenealogist,
    TypeGenealogist,
    default_registry,
    register_genealogist,
)
from genealogy.genealogists import registry as registry_module
from genealogy.post import Talk, Video
from genealogy.relations import RelationType

from conftest import ScoreTableGenealogist, make_article


def make_talk(slug):
    return Talk(
        slug=slug, title=slug, tags=frozenset(), date=date(2020, 1, 1),
        description="A talk", slides="https://slides.example.com",
    )


def make_video(slug, repository=None):
    return Video(
        slug=slug, title=slug, tags=frozenset(), date=date(2020, 1, 1),
        description="A video", video="xyz", repository=repository,
    )


class TestTagGenealogist:
    """Test tag overlap scoring."""

    @pytest.mark.parametrize("tags1,tags2,expected", [
        ({"a", "b"}, {"a", "b"}, 100),
        ({"a", "b"}, {"c", "d"}, 0),
        ({"a", "b"}, {"a", "c"}, 50),
        ({"a"}, {"a", "b", "c"}, 50),
        ({"a", "b", "c"}, {"a", "d", "e", "f", "g", "h"}, 22),  # 200 / 9 = 22.2
        (set(), set(), 0),
        ({"a"}, set(), 0),
    ])
    def test_score(self, tags1, tags2, expected):
        relation = TagGenealogist().infer(make_article("x", tags=tags1), make_article("y", tags=tags2))
        assert relation.score == expected
        assert relation.type == RelationType("tag")

    def test_symmetric(self):
        post1 = make_article("x", tags={"a", "b", "c"})
        post2 = make_article("y", tags={"a"})
        assert TagGenealogist().score(post1, post2) == TagGenealogist().score(post2, post1)


class TestTypeGenealogist:
    """Test post kind scoring."""

    def test_scores_by_target_kind(self):
        genealogist = TypeGenealogist()
        source = make_article("x")
        assert genealogist.infer(source, make_article("y")).score == 50
        assert genealogist.infer(source, make_video("y")).score == 90
        assert genealogist.infer(source, make_talk("y")).score == 20

    def test_relation_type(self):
        assert TypeGenealogist().infer(make_article("x"), make_article("y")).type.value == "type"


class TestRepoGenealogist:
    """Test shared repository scoring."""

    @pytest.mark.parametrize("repo1,repo2,expected", [
        ("org/repo", "org/repo", 100),
        ("org/repo", "org/other", 50),
        (None, None, 20),
        ("org/repo", None, 0),
        (None, "org/repo", 0),
    ])
    def test_score(self, repo1, repo2, expected):
        post1 = make_article("x", repository=repo1)
        post2 = make_video("y", repository=repo2)
        assert RepoGenealogist().infer(post1, post2).score == expected

    def test_talks_have_no_repository(self):
        assert RepoGenealogist().infer(make_talk("x"), make_article("y", repository="org/repo")).score == 0
        assert RepoGenealogist().infer(make_talk("x"), make_talk("y")).score == 20


class TestSillyGenealogist:
    """Test title letter scoring."""

    def test_same_letters(self):
        post1 = make_article("x", title="abc")
        post2 = make_article("y", title="CBA")
        assert SillyGenealogist().infer(post1, post2).score == 100

    def test_partial(self):
        post1 = make_article("x", title="abcd")
        post2 = make_article("y", title="ab")
        assert SillyGenealogist().score(post1, post2) == 50
        assert SillyGenealogist().score(post2, post1) == 100

    def test_disjoint(self):
        post1 = make_article("x", title="abc")
        post2 = make_article("y", title="xyz")
        assert SillyGenealogist().score(post1, post2) == 0


class TestGenealogistBase:
    """Test base class behaviour."""

    def test_name_and_description(self):
        genealogist = TagGenealogist()
        assert genealogist.name == "tag"
        assert genealogist.description.startswith("Relates posts")

    def test_abstract(self):
        with pytest.raises(TypeError):
            Genealogist()


class TestGenealogistRegistry:
    """Test registration and discovery."""

    def test_builtins(self):
        registry = GenealogistRegistry()
        registry.register_builtins()
        assert registry.names() == ["tag", "type", "repo", "silly"]
        assert len(registry) == 4

    def test_register_and_get(self):
        registry = GenealogistRegistry()
        genealogist = ScoreTableGenealogist("custom", {})
        registry.register(genealogist)
        assert "custom" in registry
        assert registry.get("custom") is genealogist
        assert registry.get("missing") is None

    def test_register_replaces(self):
        registry = GenealogistRegistry()
        first = ScoreTableGenealogist("custom", {})
        second = ScoreTableGenealogist("custom", {})
        registry.register(first)
        registry.register(second)
        assert registry.get("custom") is second
        assert len(registry) == 1

    def test_register_class_twice_keeps_first(self):
        registry = GenealogistRegistry()
        registry.register_builtins()
        tag = registry.get("tag")
        registry.register_builtins()
        assert registry.get("tag") is tag

    def test_unregister(self):
        registry = GenealogistRegistry()
        registry.register_builtins()
        assert registry.unregister("silly")
        assert not registry.unregister("silly")
        assert "silly" not in registry

    def test_enable_disable(self):
        registry = GenealogistRegistry()
        registry.register_builtins()
        assert registry.disable("silly")
        assert not registry.is_enabled("silly")
        assert registry.get("silly") is None
        assert [g.name for g in registry.genealogists()] == ["tag", "type", "repo"]
        assert registry.enable("silly")
        assert registry.get("silly") is not None
        assert not registry.disable("missing")

    def test_procure_all(self):
        registry = GenealogistRegistry()
        registry.register_builtins()
        assert [g.name for g in registry.procure()] == ["tag", "type", "repo", "silly"]

    def test_procure_subset(self):
        registry = GenealogistRegistry()
        registry.register_builtins()
        assert [g.name for g in registry.procure(["repo", "tag"])] == ["tag", "repo"]

    def test_procure_unknown(self):
        registry = GenealogistRegistry()
        registry.register_builtins()
        with pytest.raises(ValueError, match="Unknown genealogists"):
            registry.procure(["nope"])

    def test_procure_empty(self):
        with pytest.raises(ValueError, match="No genealogists found"):
            GenealogistRegistry().procure()

    def test_discover_entry_points(self):
        class PluginGenealogist(Genealogist):
            relation_type = RelationType("plugin")

            def score(self, post1, post2):
                return 1

        good = MagicMock()
        good.name = "plugin"
        good.load.return_value = PluginGenealogist
        not_a_genealogist = MagicMock()
        not_a_genealogist.name = "junk"
        not_a_genealogist.load.return_value = object
        broken = MagicMock()
        broken.name = "broken"
        broken.load.side_effect = ImportError("missing module")

        registry = GenealogistRegistry()
        with patch.object(registry_module.importlib.metadata, "entry_points",
                          return_value=[good, not_a_genealogist, broken]) as entry_points:
            registry.discover()

        entry_points.assert_called_once_with(group="genealogy.genealogists")
        assert registry.names() == ["plugin"]

    def test_discover_skips_unusable_classes(self):
        class NoTypeGenealogist(Genealogist):
            def score(self, post1, post2):
                return 1

        class NeedsArgumentsGenealogist(Genealogist):
            relation_type = RelationType("args")

            def __init__(self, table):
                self.table = table

            def score(self, post1, post2):
                return 1

        entries = []
        for name, genealogist_class in (
            ("no-type", NoTypeGenealogist),
            ("args", NeedsArgumentsGenealogist),
            ("tag", TagGenealogist),
        ):
            entry = MagicMock()
            entry.name = name
            entry.load.return_value = genealogist_class
            entries.append(entry)

        registry = GenealogistRegistry()
        with patch.object(registry_module.importlib.metadata, "entry_points", return_value=entries):
            registry.discover()

        assert registry.names() == ["tag"]

    def test_default_registry_survives_unusable_plugin(self):
        class NoTypeGenealogist(Genealogist):
            def score(self, post1, post2):
                return 1

        entry = MagicMock()
        entry.name = "no-type"
        entry.load.return_value = NoTypeGenealogist
        with patch.object(registry_module.importlib.metadata, "entry_points", return_value=[entry]):
            registry = default_registry()

        assert registry.names() == ["tag", "type", "repo", "silly"]

    def test_default_registry(self):
        with patch.object(registry_module.importlib.metadata, "entry_points", return_value=[]):
            registry = default_registry()
        assert registry.names() == ["tag", "type", "repo", "silly"]

    def test_default_registry_includes_registered(self):
        registered = GenealogistRegistry()
        registered.register(ScoreTableGenealogist("custom", {}))
        with patch.object(registry_module, "genealogist_registry", registered), \
                patch.object(registry_module.importlib.metadata, "entry_points", return_value=[]):
            registry = default_registry()
        assert registry.names() == ["tag", "type", "repo", "silly", "custom"]

    def test_register_decorator(self):
        registry = GenealogistRegistry()
        with patch.object(registry_module, "genealogist_registry", registry):
            @register_genealogist
            class DecoratedGenealogist(Genealogist):
                relation_type = RelationType("decorated")

                def score(self, post1, post2):
                    return 0

            register_genealogist(ScoreTableGenealogist("instance", {}))

        assert registry.names() == ["decorated", "instance"]
