"""
Individual-level genetic distances computed from SNP genotypes
"""
from ._distance import (
    euclidean,
    bray_curtis,
    prop_shared,
    pca,
    pca_dist,
    calc,
    compare,
    mantel,
    METHODS,
)

__all__ = [
    "euclidean",
    "bray_curtis",
    "prop_shared",
    "pca",
    "pca_dist",
    "calc",
    "compare",
    "mantel",
]
