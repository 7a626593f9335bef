"""Errors raised while inferring relations and building recommendations.

Every error in a run is fatal: the pipeline never returns partial results.
"""

from typing import Optional


class GenealogyError(Exception):
    """Base class for all genealogy errors."""
    pass


class InvalidScore(GenealogyError, ValueError):
    """A relation score outside of [0, 100]."""
    pass


class InvalidWeight(GenealogyError, ValueError):
    """A weight (or the default weight) outside of [0, 1]."""
    pass


class InvalidRelationType(GenealogyError, ValueError):
    """An empty or blank relation type."""
    pass


class InvalidRelation(GenealogyError, ValueError):
    """A relation between a post and itself."""
    pass


class EmptyAggregation(GenealogyError):
    """Aggregation was asked to combine zero typed relations."""
    pass


class StrategyFailure(GenealogyError):
    """A genealogist failed to infer a typed relation for a pair of posts."""

    def __init__(self, genealogist: str, post1: str, post2: str, reason: Optional[str] = None):
        self.genealogist = genealogist
        self.post1 = post1
        self.post2 = post2
        message = f"Genealogist '{genealogist}' failed for ({post1}, {post2})"
        if reason:
            message += f": {reason}"
        super().__init__(message)
