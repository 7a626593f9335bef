"""
Genealogist registry and discovery.

Genealogists are assembled once, before a run starts, and handed to the
inference engine as a plain collection. The registry only covers that
bootstrap step: built-ins, entry points of installed packages and explicit
registration.
"""

import importlib.metadata
import inspect
import logging
from typing import Any, Dict, List, Optional, Type

from genealogy.relations import RelationType

from .base import Genealogist

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "genealogy.genealogists"


class GenealogistRegistry:
    """Registry of genealogist instances, keyed by name."""

    def __init__(self):
        self._genealogists: Dict[str, Genealogist] = {}
        self._enabled: Dict[str, bool] = {}

    def discover(self, entry_point_group: str = ENTRY_POINT_GROUP) -> None:
        """
        Discover genealogists via setuptools entry points.

        Each entry point must refer to a concrete Genealogist subclass with a
        parameterless constructor.

        Args:
            entry_point_group: Entry point group name
        """
        for ep in importlib.metadata.entry_points(group=entry_point_group):
            try:
                genealogist_class = ep.load()
            except Exception as e:
                logger.error(f"Failed to load genealogist {ep.name}: {e}")
                continue

            if not self._is_valid_genealogist_class(genealogist_class):
                logger.warning(f"Entry point {ep.name} is not a genealogist, skipping")
                continue

            if self._register_class(genealogist_class):
                logger.info(f"Loaded genealogist from entry point: {ep.name}")

        logger.info(f"Discovered {len(self._genealogists)} genealogists")

    def register_builtins(self) -> None:
        """Register the genealogists shipped with this package."""
        from .post_type import TypeGenealogist
        from .repo import RepoGenealogist
        from .silly import SillyGenealogist
        from .tags import TagGenealogist

        for genealogist_class in (TagGenealogist, TypeGenealogist, RepoGenealogist, SillyGenealogist):
            self._register_class(genealogist_class)

    def _is_valid_genealogist_class(self, obj: Any) -> bool:
        return (
            inspect.isclass(obj) and
            issubclass(obj, Genealogist) and
            obj is not Genealogist and
            not inspect.isabstract(obj)
        )

    def _register_class(self, genealogist_class: Type[Genealogist]) -> bool:
        """
        Instantiate and register a genealogist class.

        Classes that can't be instantiated without arguments or that don't
        define a RelationType are logged and skipped.

        Returns:
            True if the class was registered
        """
        try:
            instance = genealogist_class()
            if not isinstance(instance.relation_type, RelationType):
                raise TypeError(f"relation_type must be a RelationType, got {instance.relation_type!r}")
            name = instance.name
        except Exception as e:
            logger.error(f"Failed to register genealogist {genealogist_class.__name__}: {e}")
            return False

        if name in self._genealogists:
            logger.warning(f"Genealogist {name} already registered, skipping")
            return False
        self.register(instance)
        return True

    def register(self, genealogist: Genealogist) -> None:
        """
        Register a genealogist instance.

        Args:
            genealogist: Genealogist to register; replaces one with the same name
        """
        name = genealogist.name
        if name in self._genealogists:
            logger.warning(f"Genealogist {name} already registered, replacing")

        self._genealogists[name] = genealogist
        logger.debug(f"Registered genealogist: {name}")

    def unregister(self, name: str) -> bool:
        """
        Unregister a genealogist.

        Returns:
            True if the genealogist was registered
        """
        if name not in self._genealogists:
            return False

        del self._genealogists[name]
        self._enabled.pop(name, None)
        logger.debug(f"Unregistered genealogist: {name}")
        return True

    def get(self, name: str) -> Optional[Genealogist]:
        """Get an enabled genealogist by name."""
        genealogist = self._genealogists.get(name)
        if genealogist and not self._enabled.get(name, True):
            return None
        return genealogist

    def enable(self, name: str) -> bool:
        if name not in self._genealogists:
            logger.error(f"Genealogist {name} not found")
            return False
        self._enabled[name] = True
        return True

    def disable(self, name: str) -> bool:
        if name not in self._genealogists:
            logger.error(f"Genealogist {name} not found")
            return False
        self._enabled[name] = False
        return True

    def is_enabled(self, name: str) -> bool:
        return name in self._genealogists and self._enabled.get(name, True)

    def names(self) -> List[str]:
        """Names of all registered genealogists, enabled or not."""
        return list(self._genealogists)

    def genealogists(self) -> List[Genealogist]:
        """Enabled genealogists in registration order."""
        return [g for name, g in self._genealogists.items() if self._enabled.get(name, True)]

    def procure(self, only: Optional[List[str]] = None) -> List[Genealogist]:
        """
        Assemble the genealogists for one run.

        Args:
            only: Restrict to these names (unknown names are an error)

        Returns:
            Enabled genealogists

        Raises:
            ValueError: If a requested name is unknown or nothing is left
        """
        genealogists = self.genealogists()
        if only:
            unknown = [name for name in only if name not in self._genealogists]
            if unknown:
                raise ValueError(f"Unknown genealogists: {', '.join(unknown)}")
            genealogists = [g for g in genealogists if g.name in only]

        if not genealogists:
            raise ValueError("No genealogists found.")
        return genealogists

    def clear(self) -> None:
        self._genealogists.clear()
        self._enabled.clear()

    def __len__(self) -> int:
        return len(self._genealogists)

    def __contains__(self, name: str) -> bool:
        return name in self._genealogists


# Global genealogist registry instance
genealogist_registry = GenealogistRegistry()


def register_genealogist(genealogist_or_class):
    """
    Decorator or function to register a genealogist.

    Can be used as:
    - @register_genealogist on a class
    - register_genealogist(genealogist_instance)

    Returns:
        The argument unchanged (for decorator usage)
    """
    if inspect.isclass(genealogist_or_class):
        genealogist_registry._register_class(genealogist_or_class)
    else:
        genealogist_registry.register(genealogist_or_class)
    return genealogist_or_class


def default_registry() -> GenealogistRegistry:
    """
    A fresh registry holding the built-ins, installed entry points and
    everything registered through register_genealogist.
    """
    registry = GenealogistRegistry()
    registry.register_builtins()
    registry.discover()
    for genealogist in genealogist_registry.genealogists():
        registry.register(genealogist)
    return registry
