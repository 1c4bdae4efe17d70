import numpy as np
import pandas as pd
import dask.array as da
from typing import Optional
from statsmodels.stats.outliers_influence import variance_inflation_factor
from statsmodels.tools.tools import add_constant
import landgen
from .._exceptions import InvalidInputError


def cor_screen(env: pd.DataFrame, threshold: float = 0.7) -> pd.DataFrame:
    """Find pairs of predictors that are strongly correlated

    Parameters
    ----------
    env : pd.DataFrame
        (n_indiv, n_env) predictor table
    threshold : float
        pairs with |r| > threshold are reported, by default 0.7

    Returns
    -------
    pd.DataFrame
        columns `var1`, `var2`, `r`, sorted by |r| in descending order
    """
    cor = env.corr(method="pearson")
    cols = list(cor.columns)
    rows = []
    for i in range(len(cols)):
        for j in range(i + 1, len(cols)):
            r = cor.iloc[i, j]
            if np.abs(r) > threshold:
                rows.append((cols[i], cols[j], r))
    df = pd.DataFrame(rows, columns=["var1", "var2", "r"])
    df = df.reindex(df["r"].abs().sort_values(ascending=False).index)
    df = df.reset_index(drop=True)
    landgen.logger.info(
        f"{len(df)} predictor pairs with |r| > {threshold} among {len(cols)} predictors"
    )
    return df


def vif(env: pd.DataFrame) -> pd.Series:
    """Variance inflation factor of each predictor

    Parameters
    ----------
    env : pd.DataFrame
        (n_indiv, n_env) predictor table

    Returns
    -------
    pd.Series
        VIF indexed by predictor name
    """
    design = add_constant(env.astype(float), has_constant="add")
    values = design.values
    # column 0 is the intercept
    res = [variance_inflation_factor(values, i) for i in range(1, values.shape[1])]
    return pd.Series(res, index=env.columns, name="VIF")


def _standardize(mat: np.ndarray) -> np.ndarray:
    mean = mat.mean(axis=0)
    std = mat.std(axis=0)
    with np.errstate(divide="ignore", invalid="ignore"):
        return (mat - mean) / std


def locus_cor(
    geno: pd.DataFrame, env: pd.DataFrame, chunk_size: Optional[int] = None
) -> pd.DataFrame:
    """Pearson correlation of every locus with every predictor

    Parameters
    ----------
    geno : pd.DataFrame
        (n_indiv, n_snp) imputed genotype matrix
    env : pd.DataFrame
        (n_indiv, n_env) predictor table, rows aligned with `geno`
    chunk_size : int, optional
        number of loci per chunk. If given, the computation is chunked over
        loci with dask, by default None (computed in memory at once)

    Returns
    -------
    pd.DataFrame
        (n_snp, n_env) correlations, indexed by locus and with columns in the
        order of `env.columns`. Monomorphic loci have NaN correlations.
    """
    if geno.shape[0] != env.shape[0]:
        raise InvalidInputError(
            f"geno has {geno.shape[0]} individuals while env has {env.shape[0]}"
        )
    if not geno.index.equals(env.index):
        raise InvalidInputError("geno and env must have the same individual index")
    g = geno.values.astype(float)
    if np.isnan(g).any():
        raise InvalidInputError("geno contains missing values, impute first")

    n_indiv = g.shape[0]
    e = _standardize(env.values.astype(float))

    if chunk_size is None:
        cor = _standardize(g).T @ e / n_indiv
    else:
        g = da.from_array(g, chunks=(n_indiv, chunk_size))
        g = g.map_blocks(_standardize, dtype=float)
        cor = (g.T @ e / n_indiv).compute()

    return pd.DataFrame(cor, index=geno.columns, columns=env.columns)
