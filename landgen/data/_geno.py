import numpy as np
import pandas as pd
import landgen


def impute_with_mode(geno: pd.DataFrame) -> pd.DataFrame:
    """Impute each missing genotype with the most common genotype of its locus

    Parameters
    ----------
    geno : pd.DataFrame
        (n_indiv, n_snp) genotype matrix with allele dosages and NaN for missing

    Returns
    -------
    pd.DataFrame
        imputed copy of `geno`. Ties between equally common genotypes are
        resolved towards the smaller dosage.
    """
    geno = geno.copy()
    n_missing = int(geno.isna().values.sum())
    # mode() sorts the values so that ties resolve to the smallest dosage
    mode = geno.mode(axis=0, dropna=True).iloc[0]
    geno = geno.fillna(mode)
    landgen.logger.info(
        f"Imputed {n_missing} missing genotypes "
        f"({n_missing / geno.size * 100:.2f}%) with the most common genotype"
    )
    return geno


def impute_with_mean(geno: pd.DataFrame) -> pd.DataFrame:
    """impute the each entry using the mean of its locus (column)

    Parameters
    ----------
    geno : pd.DataFrame
        (n_indiv, n_snp) genotype matrix

    Returns
    -------
    pd.DataFrame
        imputed copy of `geno`
    """
    mat = geno.values.astype(float)
    mean = np.nanmean(mat, axis=0)
    nanidx = np.where(np.isnan(mat))
    # index the mean using the column of each missing entry
    mat[nanidx] = mean[nanidx[1]]
    return pd.DataFrame(mat, index=geno.index, columns=geno.columns)


def allele_freq(geno: pd.DataFrame) -> pd.Series:
    """Frequency of the counted allele per locus, ignoring missing genotypes"""
    return geno.mean(axis=0, skipna=True) / 2


def filter_maf(geno: pd.DataFrame, maf: float = 0.05) -> pd.DataFrame:
    """Remove loci with minor allele frequency below `maf`

    Parameters
    ----------
    geno : pd.DataFrame
        (n_indiv, n_snp) genotype matrix
    maf : float
        minimum minor allele frequency, by default 0.05

    Returns
    -------
    pd.DataFrame
        genotype matrix restricted to the retained loci
    """
    assert 0 <= maf < 0.5, "maf should be within [0, 0.5)"
    freq = allele_freq(geno)
    keep = np.minimum(freq, 1 - freq) >= maf
    landgen.logger.info(
        f"{int(keep.sum())}/{len(keep)} SNPs with MAF >= {maf} are retained"
    )
    return geno.loc[:, keep.values]
