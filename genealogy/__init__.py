"""
genealogy - infer relations between posts and recommend the most related ones.

Main API:
    from genealogy import Genealogy, Recommender, Weights
    from genealogy.genealogists import TagGenealogist, RepoGenealogist
    from genealogy.loader import load_posts

    posts = load_posts(Path("articles"), Path("talks"), Path("videos"))

    # Every genealogist scores every ordered pair of posts
    genealogy = Genealogy(
        posts,
        [TagGenealogist(), RepoGenealogist()],
        Weights({"tag": 1.0, "repo": 0.75}, default_weight=0.5),
    )
    relations = genealogy.infer_relations()

    # Top three related posts per post
    recommendations = Recommender().recommend(relations, per_post=3)
"""

from .exceptions import (
    EmptyAggregation,
    GenealogyError,
    InvalidRelation,
    InvalidRelationType,
    InvalidScore,
    InvalidWeight,
    StrategyFailure,
)
from .genealogy import Genealogy, infer_relations
from .post import Article, Post, Talk, Video
from .recommendation import Recommendation, Recommender, recommend
from .relations import Relation, RelationType, TypedRelation, aggregate
from .weights import Weights

__version__ = "0.1.0"
__all__ = [
    # Posts
    "Post",
    "Article",
    "Talk",
    "Video",
    # Relations
    "RelationType",
    "TypedRelation",
    "Relation",
    "aggregate",
    "Weights",
    # Pipeline
    "Genealogy",
    "infer_relations",
    "Recommendation",
    "Recommender",
    "recommend",
    # Errors
    "GenealogyError",
    "InvalidScore",
    "InvalidWeight",
    "InvalidRelationType",
    "InvalidRelation",
    "EmptyAggregation",
    "StrategyFailure",
]
