"""
Genealogists: the pluggable scoring strategies relations are inferred with.
"""

from .base import Genealogist
from .post_type import TypeGenealogist
from .registry import (
    GenealogistRegistry,
    default_registry,
    genealogist_registry,
    register_genealogist,
)
from .repo import RepoGenealogist
from .silly import SillyGenealogist
from .tags import TagGenealogist

__all__ = [
    # Base class
    'Genealogist',

    # Built-ins
    'TagGenealogist',
    'TypeGenealogist',
    'RepoGenealogist',
    'SillyGenealogist',

    # Registry
    'GenealogistRegistry',
    'genealogist_registry',
    'register_genealogist',
    'default_registry',
]
