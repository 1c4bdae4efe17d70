import numpy as np
import pandas as pd
import dask
import dask.array as da
from scipy.spatial.distance import pdist, squareform
from typing import Dict, Tuple, Union
import landgen
from .._exceptions import InvalidInputError


def _to_square(dist: np.ndarray, geno: pd.DataFrame) -> pd.DataFrame:
    return pd.DataFrame(dist, index=geno.index, columns=geno.index)


def _check_complete(geno: pd.DataFrame) -> np.ndarray:
    mat = geno.values.astype(float)
    if np.isnan(mat).any():
        raise InvalidInputError("geno contains missing values, impute first")
    return mat


def euclidean(geno: pd.DataFrame) -> pd.DataFrame:
    """Euclidean distance between the genotype vectors of individuals

    Parameters
    ----------
    geno : pd.DataFrame
        (n_indiv, n_snp) imputed genotype matrix

    Returns
    -------
    pd.DataFrame
        (n_indiv, n_indiv) distance matrix
    """
    mat = _check_complete(geno)
    return _to_square(squareform(pdist(mat, metric="euclidean")), geno)


def bray_curtis(geno: pd.DataFrame) -> pd.DataFrame:
    """Bray-Curtis dissimilarity between the genotype vectors of individuals"""
    mat = _check_complete(geno)
    return _to_square(squareform(pdist(mat, metric="braycurtis")), geno)


def prop_shared(geno: pd.DataFrame) -> pd.DataFrame:
    """One minus the proportion of shared alleles between individuals

    For diploid dosages, two individuals share (2 - |g_i - g_j|) of their 2
    alleles at a locus. The proportion is averaged over the loci that are
    observed in both individuals, so missing genotypes need no imputation.

    Parameters
    ----------
    geno : pd.DataFrame
        (n_indiv, n_snp) genotype matrix, may contain NaN

    Returns
    -------
    pd.DataFrame
        (n_indiv, n_indiv) distance matrix
    """
    mat = geno.values.astype(float)
    n_indiv = mat.shape[0]
    observed = ~np.isnan(mat)
    dist = np.zeros((n_indiv, n_indiv))
    for i in range(n_indiv):
        both = observed[i] & observed
        diff = np.abs(mat[i] - mat)
        diff[~both] = 0.0
        n_both = both.sum(axis=1)
        with np.errstate(divide="ignore", invalid="ignore"):
            shared = (2 - diff).sum(axis=1, where=both) / (2 * n_both)
        dist[i] = 1 - shared
    np.fill_diagonal(dist, 0.0)
    if np.isnan(dist).any():
        landgen.logger.warning(
            "Some pairs of individuals share no observed loci, their distance is NaN"
        )
    return _to_square(dist, geno)


def pca(
    geno: pd.DataFrame, n_components: int = 10, n_power_iter: int = 4, seed: int = 0
):
    """Principal component scores of individuals

    Parameters
    ----------
    geno : pd.DataFrame
        (n_indiv, n_snp) imputed genotype matrix
    n_components : int
        number of principal components, by default 10
    n_power_iter : int
        number of power iterations of the randomized SVD, by default 4
    seed : int
        random seed of the randomized SVD, by default 0

    Returns
    -------
    pd.DataFrame
        (n_indiv, n_components) scores with columns PC1, PC2, ...
    """
    gn = _check_complete(geno)
    n_indiv, n_snp = gn.shape
    n_components = min(n_components, n_indiv, n_snp)

    # standardize to mean 0 and variance 1, monomorphic loci are left at 0
    mean_ = gn.mean(axis=0)
    std_ = gn.std(axis=0)
    std_[std_ == 0] = 1.0
    gn = (gn - mean_) / std_

    gn = da.from_array(gn, chunks=(n_indiv, max(1, n_snp // 4)))
    u, s, v = da.linalg.svd_compressed(
        gn, k=n_components, n_power_iter=n_power_iter, seed=seed
    )
    u, s = dask.compute(u, s)

    # calculate explained variance
    exp_var = (s**2) / n_indiv
    landgen.logger.info(
        "Variance explained by the PCs: "
        + ", ".join(f"{e:.3g}" for e in exp_var[:n_components])
    )

    coords = u[:, :n_components] * s[:n_components]
    return pd.DataFrame(
        coords,
        index=geno.index,
        columns=[f"PC{i + 1}" for i in range(n_components)],
    )


def pca_dist(geno: pd.DataFrame, n_pc: int = 10, seed: int = 0) -> pd.DataFrame:
    """Euclidean distance between the first `n_pc` principal component scores"""
    coords = pca(geno, n_components=n_pc, seed=seed)
    return _to_square(squareform(pdist(coords.values, metric="euclidean")), geno)


METHODS = {
    "euclidean": euclidean,
    "bray_curtis": bray_curtis,
    "prop_shared": prop_shared,
    "pca": pca_dist,
}


def calc(geno: pd.DataFrame, method: str = "euclidean", **kwargs) -> pd.DataFrame:
    """Individual-level genetic distance

    Parameters
    ----------
    geno : pd.DataFrame
        (n_indiv, n_snp) genotype matrix
    method : str
        one of "euclidean", "bray_curtis", "prop_shared", "pca"
    **kwargs
        passed to the method, e.g. `n_pc` for "pca"

    Returns
    -------
    pd.DataFrame
        (n_indiv, n_indiv) distance matrix
    """
    if method not in METHODS:
        raise ValueError(
            f"Unknown method `{method}`, should be one of {','.join(METHODS)}"
        )
    landgen.logger.info(
        f"Calculating {method} distance between {geno.shape[0]} individuals "
        f"with {geno.shape[1]} SNPs"
    )
    return METHODS[method](geno, **kwargs)


def _upper(dist: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
    dist = np.asarray(dist)
    assert dist.ndim == 2 and dist.shape[0] == dist.shape[1], "must be square"
    return dist[np.triu_indices_from(dist, k=1)]


def compare(dists: Dict[str, pd.DataFrame]) -> pd.DataFrame:
    """Pearson correlation between the upper triangles of distance matrices

    Parameters
    ----------
    dists : Dict[str, pd.DataFrame]
        distance matrices with the same individuals, keyed by name

    Returns
    -------
    pd.DataFrame
        (n_method, n_method) correlation matrix
    """
    names = list(dists.keys())
    index = dists[names[0]].index
    for name in names[1:]:
        if not dists[name].index.equals(index):
            raise InvalidInputError(f"`{name}` has different individuals")
    df = pd.DataFrame({name: _upper(dists[name]) for name in names})
    return df.corr(method="pearson")


def mantel(
    d1: pd.DataFrame, d2: pd.DataFrame, n_perm: int = 999, seed: int = 0
) -> Tuple[float, float]:
    """Mantel test of correlation between two distance matrices

    Parameters
    ----------
    d1, d2 : pd.DataFrame
        (n_indiv, n_indiv) distance matrices
    n_perm : int
        number of permutations, by default 999
    seed : int
        random seed, by default 0

    Returns
    -------
    Tuple[float, float]
        Pearson correlation and one-sided permutation p-value
    """
    d1, d2 = np.asarray(d1), np.asarray(d2)
    if d1.shape != d2.shape:
        raise InvalidInputError(f"shapes {d1.shape} and {d2.shape} do not match")
    rng = np.random.default_rng(seed)
    x = _upper(d1)
    r_obs = np.corrcoef(x, _upper(d2))[0, 1]
    r_perm = np.zeros(n_perm)
    for i in range(n_perm):
        idx = rng.permutation(d2.shape[0])
        r_perm[i] = np.corrcoef(x, _upper(d2[np.ix_(idx, idx)]))[0, 1]
    pval = (np.sum(r_perm >= r_obs) + 1) / (n_perm + 1)
    return float(r_obs), float(pval)
