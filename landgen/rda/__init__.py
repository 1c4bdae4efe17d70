"""
Redundancy analysis (RDA) for genotype-environment association
"""
from ._rda import RDA, fit
from ._anova import anova, anova_axis, significant_axes
from ._outlier import (
    detect_outliers,
    build_candidate_table,
    find_candidates,
    summarize_candidates,
)

__all__ = [
    "RDA",
    "fit",
    "anova",
    "anova_axis",
    "significant_axes",
    "detect_outliers",
    "build_candidate_table",
    "find_candidates",
    "summarize_candidates",
]
