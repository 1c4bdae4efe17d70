"""
landgen.data is for data preparation prior to the analyses,
including genotype imputation and screening of environmental predictors
"""

from ._geno import impute_with_mode, impute_with_mean, allele_freq, filter_maf
from ._env import cor_screen, vif, locus_cor

__all__ = [
    "impute_with_mode",
    "impute_with_mean",
    "allele_freq",
    "filter_maf",
    "cor_screen",
    "vif",
    "locus_cor",
]
