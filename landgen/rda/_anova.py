import numpy as np
import pandas as pd
from tqdm import tqdm
from typing import List
import landgen
from ._rda import RDA, _constrained_eig


def _perm_eigenvalues(res: RDA, n_perm: int, seed: int, desc: str) -> np.ndarray:
    """Eigenvalues of the constrained axes with the rows of genotypes permuted

    Returns
    -------
    np.ndarray
        (n_perm, n_axes) matrix of eigenvalues
    """
    rng = np.random.default_rng(seed)
    n_indiv = res.n_indiv
    eig = np.zeros((n_perm, res.n_axes))
    for i in tqdm(range(n_perm), desc=desc):
        idx = rng.permutation(n_indiv)
        _, s, _ = _constrained_eig(res._Y[idx, :], res._X, res.n_axes)
        eig[i, : len(s)] = s**2 / (n_indiv - 1)
    return eig


def anova(res: RDA, n_perm: int = 999, seed: int = 0) -> pd.DataFrame:
    """Permutation F-test of the full model

    Parameters
    ----------
    res : RDA
        fitted redundancy analysis
    n_perm : int
        number of permutations, by default 999
    seed : int
        random seed, by default 0

    Returns
    -------
    pd.DataFrame
        ANOVA-like table with rows `Model` and `Residual` and columns
        `df`, `variance`, `F`, `P`
    """
    assert n_perm > 0, "n_perm should be positive"
    n, m = res.n_indiv, res.n_env
    df_resid = n - m - 1
    con = res.constrained_inertia
    resid = res.total_inertia - con
    f_obs = (con / m) / (resid / df_resid)

    eig = _perm_eigenvalues(res, n_perm, seed, desc="landgen.rda.anova")
    con_perm = eig.sum(axis=1)
    f_perm = (con_perm / m) / ((res.total_inertia - con_perm) / df_resid)
    pval = (np.sum(f_perm >= f_obs) + 1) / (n_perm + 1)
    landgen.logger.info(f"Global permutation test: F={f_obs:.4f}, P={pval:.4g}")

    return pd.DataFrame(
        {
            "df": [m, df_resid],
            "variance": [con, resid],
            "F": [f_obs, np.nan],
            "P": [pval, np.nan],
        },
        index=["Model", "Residual"],
    )


def anova_axis(res: RDA, n_perm: int = 999, seed: int = 0) -> pd.DataFrame:
    """Permutation F-test of each constrained axis

    Each axis is compared with the axis of the same rank obtained with
    permuted genotypes.

    Parameters
    ----------
    res : RDA
        fitted redundancy analysis
    n_perm : int
        number of permutations, by default 999
    seed : int
        random seed, by default 0

    Returns
    -------
    pd.DataFrame
        table indexed by RDA1, RDA2, ... with columns `df`, `variance`, `F`, `P`
    """
    assert n_perm > 0, "n_perm should be positive"
    n, m = res.n_indiv, res.n_env
    df_resid = n - m - 1
    resid = res.total_inertia - res.constrained_inertia
    lam = res.eigenvalues.values
    f_obs = lam / (resid / df_resid)

    eig = _perm_eigenvalues(res, n_perm, seed, desc="landgen.rda.anova_axis")
    f_perm = eig / ((res.total_inertia - eig.sum(axis=1, keepdims=True)) / df_resid)
    pval = (np.sum(f_perm >= f_obs[None, :], axis=0) + 1) / (n_perm + 1)

    df = pd.DataFrame(
        {"df": 1, "variance": lam, "F": f_obs, "P": pval},
        index=res.axes,
    )
    landgen.logger.info(
        "Per-axis permutation test: "
        + ", ".join(f"{ax} P={p:.4g}" for ax, p in df["P"].items())
    )
    return df


def significant_axes(table: pd.DataFrame, alpha: float = 0.05) -> List[int]:
    """1-based indices of the axes with P < alpha

    Parameters
    ----------
    table : pd.DataFrame
        output of :func:`anova_axis`
    alpha : float
        significance level, by default 0.05

    Returns
    -------
    List[int]
        e.g. [1, 2, 3] for RDA1, RDA2, RDA3
    """
    return [i + 1 for i, p in enumerate(table["P"].values) if p < alpha]
