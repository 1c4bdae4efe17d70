import numpy as np
import pandas as pd
import landgen
from .._exceptions import InvalidInputError


def _check_inputs(geno: pd.DataFrame, env: pd.DataFrame):
    if geno.shape[0] != env.shape[0]:
        raise InvalidInputError(
            f"geno has {geno.shape[0]} individuals while env has {env.shape[0]}"
        )
    if not geno.index.equals(env.index):
        raise InvalidInputError("geno and env must have the same individual index")
    if geno.isna().values.any():
        raise InvalidInputError("geno contains missing values, impute first")
    if env.isna().values.any():
        raise InvalidInputError("env contains missing values")
    n_indiv, n_env = env.shape
    if n_indiv < n_env + 2:
        raise InvalidInputError(
            f"{n_indiv} individuals are too few for {n_env} predictors"
        )


def _center(mat: np.ndarray, scale: bool = False) -> np.ndarray:
    mat = mat - mat.mean(axis=0)
    if scale:
        std = mat.std(axis=0, ddof=1)
        std[std == 0] = 1.0
        mat = mat / std
    return mat


def _constrained_fit(Y: np.ndarray, X: np.ndarray) -> np.ndarray:
    """Fitted values of the multivariate regression of Y on X"""
    coef, _, _, _ = np.linalg.lstsq(X, Y, rcond=None)
    return X @ coef


def _constrained_eig(Y: np.ndarray, X: np.ndarray, rank: int):
    """SVD of the fitted values, returns (u, s, vt) restricted to `rank` axes"""
    fitted = _constrained_fit(Y, X)
    u, s, vt = np.linalg.svd(fitted, full_matrices=False)
    return u[:, :rank], s[:rank], vt[:rank, :]


class RDA(object):
    """
    Redundancy analysis of a genotype matrix constrained by a predictor table.

    Use :func:`landgen.rda.fit` to construct it. The object is a read-only
    container of the fit; the score accessors return new data frames.

    Attributes
    ----------
    eigenvalues : pd.Series
        eigenvalues of the constrained axes, indexed by RDA1, RDA2, ...
    total_inertia : float
        total variance of the genotype matrix
    n_indiv : int
        number of individuals
    n_env : int
        number of predictors
    """

    def __init__(
        self,
        u: np.ndarray,
        s: np.ndarray,
        vt: np.ndarray,
        Y: np.ndarray,
        X: np.ndarray,
        total_inertia: float,
        snp_index: pd.Index,
        indiv_index: pd.Index,
        env_columns: pd.Index,
    ):
        self._u = u
        self._s = s
        self._vt = vt
        self._Y = Y
        self._X = X
        self.total_inertia = float(total_inertia)
        self.n_indiv = Y.shape[0]
        self.n_env = X.shape[1]
        self.axes = pd.Index([f"RDA{i + 1}" for i in range(len(s))])
        self.snp_index = snp_index
        self.indiv_index = indiv_index
        self.env_columns = env_columns
        self.eigenvalues = pd.Series(s**2 / (self.n_indiv - 1), index=self.axes)

    def __repr__(self) -> str:
        return (
            f"RDA with n_indiv={self.n_indiv}, n_snp={len(self.snp_index)}, "
            f"n_env={self.n_env}, n_axes={len(self.axes)}"
        )

    @property
    def n_axes(self) -> int:
        return len(self.axes)

    @property
    def constrained_inertia(self) -> float:
        return float(self.eigenvalues.sum())

    @property
    def r2(self) -> float:
        """proportion of genotype variance explained by the predictors"""
        return self.constrained_inertia / self.total_inertia

    @property
    def r2_adj(self) -> float:
        """adjusted R2 following Peres-Neto et al. (2006)"""
        n, m = self.n_indiv, self.n_env
        return 1 - (1 - self.r2) * (n - 1) / (n - m - 1)

    @property
    def prop_explained(self) -> pd.Series:
        """proportion of the constrained variance explained by each axis"""
        return self.eigenvalues / self.constrained_inertia

    def _scaling(self, scaling: int):
        if scaling not in [0, 1, 2, 3]:
            raise ValueError("scaling should be one of 0, 1, 2, 3")
        const = np.sqrt(np.sqrt((self.n_indiv - 1) * self.total_inertia))
        slam = np.sqrt(self.eigenvalues.values / self.total_inertia)
        return const, slam

    def snp_scores(self, scaling: int = 3) -> pd.DataFrame:
        """Loadings of the SNPs (species scores) on the constrained axes

        Parameters
        ----------
        scaling : int
            0: unscaled, 1: site scaling, 2: species scaling,
            3: symmetric scaling (default)

        Returns
        -------
        pd.DataFrame
            (n_snp, n_axes) loadings
        """
        const, slam = self._scaling(scaling)
        v = self._vt.T
        if scaling == 0:
            scores = v
        elif scaling == 1:
            scores = v * const
        elif scaling == 2:
            scores = v * slam * const
        else:
            scores = v * np.sqrt(slam) * const
        return pd.DataFrame(scores, index=self.snp_index, columns=self.axes)

    def site_scores(self, scaling: int = 3, kind: str = "wa") -> pd.DataFrame:
        """Scores of the individuals on the constrained axes

        Parameters
        ----------
        scaling : int
            0: unscaled, 1: site scaling, 2: species scaling,
            3: symmetric scaling (default)
        kind : str
            "wa" weighted averages of SNP scores (default), or
            "lc" linear combinations of the predictors

        Returns
        -------
        pd.DataFrame
            (n_indiv, n_axes) scores
        """
        if kind not in ["wa", "lc"]:
            raise ValueError("kind should be `wa` or `lc`")
        const, slam = self._scaling(scaling)
        if kind == "lc":
            u = self._u
        else:
            u = self._Y @ self._vt.T / self._s
        if scaling == 0:
            scores = u
        elif scaling == 1:
            scores = u * slam * const
        elif scaling == 2:
            scores = u * const
        else:
            scores = u * np.sqrt(slam) * const
        return pd.DataFrame(scores, index=self.indiv_index, columns=self.axes)

    def biplot_scores(self) -> pd.DataFrame:
        """Correlations between predictors and the `lc` site scores

        Returns
        -------
        pd.DataFrame
            (n_env, n_axes) correlations
        """
        X = self._X - self._X.mean(axis=0)
        u = self._u - self._u.mean(axis=0)
        X = X / np.linalg.norm(X, axis=0)
        u = u / np.linalg.norm(u, axis=0)
        return pd.DataFrame(X.T @ u, index=self.env_columns, columns=self.axes)

    def summary(self) -> pd.DataFrame:
        """Eigenvalues and proportion of variance explained by each axis"""
        return pd.DataFrame(
            {
                "eigenvalue": self.eigenvalues,
                "prop_total": self.eigenvalues / self.total_inertia,
                "prop_constrained": self.prop_explained,
                "cumulative": self.prop_explained.cumsum(),
            }
        )


def fit(geno: pd.DataFrame, env: pd.DataFrame, scale_env: bool = False) -> RDA:
    """Fit redundancy analysis of the genotypes constrained by predictors

    The genotype matrix is regressed on the predictors and a PCA is performed
    on the fitted values.

    Parameters
    ----------
    geno : pd.DataFrame
        (n_indiv, n_snp) imputed genotype matrix
    env : pd.DataFrame
        (n_indiv, n_env) predictor table, rows aligned with `geno`
    scale_env : bool
        whether to scale predictors to unit variance in addition to centering,
        by default False. The fitted values do not depend on this choice.

    Returns
    -------
    RDA
        fitted redundancy analysis
    """
    _check_inputs(geno, env)
    Y = _center(geno.values.astype(float))
    X = _center(env.values.astype(float), scale=scale_env)
    n_indiv = Y.shape[0]
    rank = min(np.linalg.matrix_rank(X), Y.shape[1])
    if rank < X.shape[1]:
        landgen.logger.warning(
            f"Predictors are collinear, only {rank}/{X.shape[1]} axes are estimable"
        )

    total_inertia = np.sum(Y**2) / (n_indiv - 1)
    u, s, vt = _constrained_eig(Y, X, rank)
    res = RDA(
        u=u,
        s=s,
        vt=vt,
        Y=Y,
        X=X,
        total_inertia=total_inertia,
        snp_index=geno.columns,
        indiv_index=geno.index,
        env_columns=env.columns,
    )
    landgen.logger.info(
        f"RDA fitted with {res.n_indiv} individuals, {len(res.snp_index)} SNPs "
        f"and {res.n_env} predictors: R2={res.r2:.4f}, adjusted R2={res.r2_adj:.4f}"
    )
    return res
