import numpy as np
import pandas as pd
from collections.abc import Mapping
from typing import Dict, Iterable, List, Sequence, Tuple, Union
import landgen
from .._exceptions import InvalidInputError

# columns of the candidate table other than the per-predictor correlations
CANDIDATE_COLUMNS = ["axis", "snp", "loading"]


def _as_series(loadings) -> pd.Series:
    if isinstance(loadings, pd.Series):
        return loadings.astype(float)
    if isinstance(loadings, Mapping):
        return pd.Series(loadings, dtype=float)
    pairs = list(loadings)
    if len(pairs) == 0:
        return pd.Series([], dtype=float)
    if not all(isinstance(p, (tuple, list)) and len(p) == 2 for p in pairs):
        raise InvalidInputError("loadings should be (locus, loading) pairs")
    index, values = zip(*pairs)
    return pd.Series(values, index=list(index), dtype=float)


def detect_outliers(
    loadings: Union[pd.Series, Dict[str, float], Sequence[Tuple[str, float]]],
    z: float = 3.0,
) -> pd.Series:
    """Loci with loadings outside mean +/- z standard deviations

    Parameters
    ----------
    loadings : pd.Series, dict of locus to loading or sequence of (locus, loading)
        loadings of the loci on a single axis
    z : float
        number of standard deviations defining the cutoff, by default 3.0

    Returns
    -------
    pd.Series
        loadings lying strictly outside the two-tailed cutoff, in input order.
        Values exactly on the cutoff are not outliers.
    """
    if not z > 0:
        raise InvalidInputError(f"z should be positive, got {z}")
    x = _as_series(loadings)
    if len(x) < 2:
        raise InvalidInputError(
            f"at least 2 loadings are needed for a standard deviation, got {len(x)}"
        )
    mean, std = x.mean(), x.std(ddof=1)
    lo, hi = mean - z * std, mean + z * std
    return x[(x < lo) | (x > hi)]


def build_candidate_table(
    per_axis_outliers: Union[
        Dict[int, pd.Series], Iterable[Tuple[int, pd.Series]]
    ],
    cor: pd.DataFrame,
) -> pd.DataFrame:
    """Join outliers of several axes with their predictor correlations

    Loci detected on more than one axis are kept only once, attributed to
    the first (lowest) axis they appear on.

    Parameters
    ----------
    per_axis_outliers : dict or iterable of (axis, outliers)
        1-based axis index and the outliers of that axis as returned by
        :func:`detect_outliers`
    cor : pd.DataFrame
        (n_snp, n_env) correlation of each locus with each predictor, as
        returned by :func:`landgen.data.locus_cor`

    Returns
    -------
    pd.DataFrame
        one row per candidate with columns `axis`, `snp`, `loading`, one column
        per predictor, `predictor` (predictor with the largest absolute
        correlation) and `correlation` (its signed correlation)
    """
    if isinstance(per_axis_outliers, dict):
        per_axis_outliers = per_axis_outliers.items()

    predictors = list(cor.columns)
    columns = CANDIDATE_COLUMNS + predictors + ["predictor", "correlation"]

    frames = []
    for axis, outliers in per_axis_outliers:
        outliers = _as_series(outliers)
        if len(outliers) == 0:
            continue
        missing = outliers.index.difference(cor.index)
        if len(missing) > 0:
            raise InvalidInputError(
                f"{len(missing)} outlier loci on axis {axis} are absent from the "
                f"correlation table: {','.join(map(str, missing[:10]))}"
            )
        df = pd.DataFrame(
            {
                "axis": int(axis),
                "snp": outliers.index.values,
                "loading": outliers.values,
            }
        )
        df_cor = cor.loc[outliers.index, predictors].reset_index(drop=True)
        frames.append(pd.concat([df, df_cor], axis=1))

    if len(frames) == 0:
        return pd.DataFrame(columns=columns)

    cand = pd.concat(frames, ignore_index=True)
    n_total = len(cand)
    cand = cand[~cand["snp"].duplicated(keep="first")].reset_index(drop=True)
    landgen.logger.info(
        f"{n_total - len(cand)} duplicated detections removed, "
        f"{len(cand)} unique candidates remain"
    )

    abs_cor = cand[predictors].abs().values
    # argmax returns the first occurrence of ties, following predictor order.
    # NaN correlations never win; an all-NaN row falls back to the first predictor
    best = np.argmax(np.nan_to_num(abs_cor, nan=-1.0), axis=1)
    cand["predictor"] = [predictors[i] for i in best]
    cand["correlation"] = cand[predictors].values[np.arange(len(cand)), best]
    return cand[columns]


def find_candidates(
    loadings: pd.DataFrame,
    cor: pd.DataFrame,
    axes: List[int] = None,
    z: float = 3.0,
) -> pd.DataFrame:
    """Detect outlier loci on several axes and build the candidate table

    Parameters
    ----------
    loadings : pd.DataFrame
        (n_snp, n_axes) SNP scores, e.g. :meth:`landgen.rda.RDA.snp_scores`
    cor : pd.DataFrame
        (n_snp, n_env) correlation of each locus with each predictor
    axes : List[int], optional
        1-based indices of the axes to scan, by default None (all axes)
    z : float
        number of standard deviations defining the cutoff, by default 3.0

    Returns
    -------
    pd.DataFrame
        candidate table, see :func:`build_candidate_table`
    """
    if axes is None:
        axes = list(range(1, loadings.shape[1] + 1))
    assert all(
        1 <= a <= loadings.shape[1] for a in axes
    ), f"axes should be within [1, {loadings.shape[1]}]"

    per_axis_outliers = []
    for a in axes:
        outliers = detect_outliers(loadings.iloc[:, a - 1], z=z)
        landgen.logger.info(f"{len(outliers)} outliers detected on axis {a}")
        per_axis_outliers.append((a, outliers))
    return build_candidate_table(per_axis_outliers, cor)


def summarize_candidates(cand: pd.DataFrame) -> pd.DataFrame:
    """Number of candidates per best predictor, overall and per axis

    Returns
    -------
    pd.DataFrame
        index of predictors, one column per axis (`axis1`, ...) and `total`
    """
    if len(cand) == 0:
        return pd.DataFrame(columns=["total"])
    df = pd.crosstab(cand["predictor"], cand["axis"])
    df.columns = [f"axis{a}" for a in df.columns]
    df["total"] = df.sum(axis=1)
    df.index.name = "predictor"
    return df
