import matplotlib.pyplot as plt
from matplotlib import patheffects
import numpy as np
import pandas as pd
from typing import List, Tuple

import landgen


def loading_hist(loadings, z: float = 3.0, bins: int = 50, ax=None, color="#3b76af"):
    """Histogram of the SNP loadings on a single axis with the outlier cutoffs

    Parameters
    ----------
    loadings : pd.Series
        loadings of the SNPs on one axis
    z : float, optional
        number of standard deviations of the cutoff, by default 3.0
    bins : int, optional
        number of bins, by default 50
    ax : matplotlib.axes, optional
        by default None
    """
    if ax is None:
        ax = plt.gca()
    loadings = np.asarray(loadings, dtype=float)
    mean, std = loadings.mean(), loadings.std(ddof=1)
    ax.hist(loadings, bins=bins, color=color, edgecolor="white")
    for x in [mean - z * std, mean + z * std]:
        ax.axvline(x=x, color="r", ls="--")
    ax.set_xlabel("Loading")
    ax.set_ylabel("Number of SNPs")
    return ax


def rda_triplot(
    res: "landgen.rda.RDA",
    cand: pd.DataFrame = None,
    axes: Tuple[int, int] = (1, 2),
    scaling: int = 3,
    predictor_order: List[str] = None,
    s: float = 5,
    arrow_mult: float = None,
    cmap: str = "Set2",
    ax=None,
):
    """SNP scores of a redundancy analysis with candidates colored by predictor

    Parameters
    ----------
    res : landgen.rda.RDA
        fitted redundancy analysis
    cand : pd.DataFrame, optional
        candidate table from :func:`landgen.rda.find_candidates`, by default None
    axes : Tuple[int, int], optional
        1-based axes to plot, by default (1, 2)
    scaling : int, optional
        scaling of the scores, by default 3
    predictor_order : List[str], optional
        order of the predictors in the legend, by default the predictor order
        of the analysis
    s : float, optional
        dot size, by default 5
    arrow_mult : float, optional
        multiplier of the predictor arrows, by default scaled to the SNP scores
    cmap : str, optional
        colormap of the predictors, by default "Set2"
    ax : matplotlib.axes, optional
        by default None
    """
    if ax is None:
        ax = plt.gca()
    x, y = f"RDA{axes[0]}", f"RDA{axes[1]}"
    snp_scores = res.snp_scores(scaling=scaling)
    bp = res.biplot_scores()

    ax.scatter(snp_scores[x], snp_scores[y], s=s, color="#dddddd", label="neutral")

    if predictor_order is None:
        predictor_order = list(res.env_columns)
    colors = plt.get_cmap(cmap)
    if cand is not None and len(cand) > 0:
        for i, predictor in enumerate(predictor_order):
            snps = cand.loc[cand["predictor"] == predictor, "snp"].values
            if len(snps) == 0:
                continue
            ax.scatter(
                snp_scores.loc[snps, x],
                snp_scores.loc[snps, y],
                s=s * 3,
                color=colors(i),
                label=predictor,
            )

    if arrow_mult is None:
        arrow_mult = 0.8 * np.abs(snp_scores[[x, y]].values).max()
    for predictor, row in bp.iterrows():
        ax.arrow(
            0,
            0,
            row[x] * arrow_mult,
            row[y] * arrow_mult,
            color="#0868ac",
            head_width=0.02 * arrow_mult,
        )
        ax.text(
            row[x] * arrow_mult * 1.1,
            row[y] * arrow_mult * 1.1,
            predictor,
            color="#0868ac",
            path_effects=[patheffects.withStroke(linewidth=2.5, foreground="w")],
            verticalalignment="center",
            horizontalalignment="center",
        )

    prop = res.eigenvalues / res.total_inertia
    ax.set_xlabel(f"{x} ({prop[x] * 100:.1f}%)")
    ax.set_ylabel(f"{y} ({prop[y] * 100:.1f}%)")
    ax.axhline(0, color="gray", lw=0.5, ls=":")
    ax.axvline(0, color="gray", lw=0.5, ls=":")
    ax.legend(loc="lower left", fontsize=8)
    return ax


def screeplot(res: "landgen.rda.RDA", ax=None):
    """Bar plot of the eigenvalues of the constrained axes"""
    if ax is None:
        ax = plt.gca()
    ax.bar(np.arange(res.n_axes), res.eigenvalues.values, color="#3b76af")
    ax.set_xticks(np.arange(res.n_axes))
    ax.set_xticklabels(res.axes)
    ax.set_ylabel("Eigenvalue")
    return ax


def dist_heatmap(dist: pd.DataFrame, cmap: str = "viridis", ax=None):
    """Heatmap of a distance matrix

    Parameters
    ----------
    dist : pd.DataFrame
        (n_indiv, n_indiv) distance matrix
    cmap : str, optional
        by default "viridis"
    ax : matplotlib.axes, optional
        by default None
    """
    if ax is None:
        ax = plt.gca()
    im = ax.imshow(dist.values, cmap=cmap, interpolation="nearest")
    plt.colorbar(im, ax=ax, fraction=0.046, pad=0.04)
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_xlabel("Individuals")
    ax.set_ylabel("Individuals")
    return ax


def dist_pairs(d1: pd.DataFrame, d2: pd.DataFrame, s: float = 2, ax=None):
    """Scatter plot of the pairwise distances from two distance matrices"""
    if ax is None:
        ax = plt.gca()
    idx = np.triu_indices_from(d1.values, k=1)
    x, y = d1.values[idx], d2.values[idx]
    ax.scatter(x, y, s=s, color="#3b76af", alpha=0.5)
    r = np.corrcoef(x, y)[0, 1]
    ax.text(0.05, 0.95, f"r={r:.3f}", transform=ax.transAxes, va="top")
    return ax
