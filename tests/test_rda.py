import numpy as np
import pandas as pd
import pytest
import landgen


def _load_toy(**kwargs):
    params = dict(n_indiv=200, n_snp=500, n_env=3, n_causal=9, effect=3.0, seed=42)
    params.update(kwargs)
    geno, env, causal = landgen.simulate.gea(**params)
    return landgen.data.impute_with_mode(geno), env, causal


def test_fit():
    geno, env, _ = _load_toy()
    res = landgen.rda.fit(geno, env)
    assert res.n_axes == 3
    assert list(res.axes) == ["RDA1", "RDA2", "RDA3"]
    assert np.all(np.diff(res.eigenvalues.values) <= 0)
    assert 0 <= res.r2 <= 1
    assert res.r2_adj < res.r2

    # eigenvalues sum to the variance of the fitted values
    Y = geno.values - geno.values.mean(axis=0)
    X = env.values - env.values.mean(axis=0)
    X = np.column_stack([np.ones(X.shape[0]), X])
    fitted = X @ np.linalg.lstsq(X, Y, rcond=None)[0]
    assert np.allclose(
        res.constrained_inertia, np.sum(fitted**2) / (geno.shape[0] - 1)
    )
    assert np.allclose(res.total_inertia, geno.var(axis=0, ddof=1).sum())
    assert np.allclose(res.summary()["prop_constrained"].sum(), 1.0)

    # unscaled SNP scores are orthonormal
    v = res.snp_scores(scaling=0).values
    assert np.allclose(v.T @ v, np.eye(3))
    assert res.snp_scores().shape == (500, 3)
    assert res.snp_scores().index.equals(geno.columns)
    assert res.site_scores(kind="lc").shape == (200, 3)
    assert res.site_scores(kind="wa").index.equals(geno.index)

    bp = res.biplot_scores()
    assert bp.shape == (3, 3)
    assert np.all(np.abs(bp.values) <= 1 + 1e-8)

    # scaling of the predictors does not change the fit
    res_scaled = landgen.rda.fit(geno, env, scale_env=True)
    assert np.allclose(res.eigenvalues, res_scaled.eigenvalues)

    with pytest.raises(ValueError):
        res.snp_scores(scaling=4)
    with pytest.raises(ValueError):
        res.site_scores(kind="xx")


def test_fit_invalid():
    geno, env, _ = _load_toy(n_indiv=50, n_snp=50)
    with pytest.raises(landgen.InvalidInputError):
        landgen.rda.fit(geno.iloc[0:40], env)
    with pytest.raises(landgen.InvalidInputError):
        landgen.rda.fit(geno, env.iloc[::-1])
    geno_na = geno.copy()
    geno_na.iloc[0, 0] = np.nan
    with pytest.raises(landgen.InvalidInputError):
        landgen.rda.fit(geno_na, env)


def test_anova():
    geno, env, _ = _load_toy()
    res = landgen.rda.fit(geno, env)
    df = landgen.rda.anova(res, n_perm=49, seed=1)
    assert df.loc["Model", "df"] == 3
    assert df.loc["Residual", "df"] == 200 - 3 - 1
    assert np.allclose(df["variance"].sum(), res.total_inertia)
    assert df.loc["Model", "P"] == pytest.approx(1 / 50)

    # permutations are reproducible given the seed
    assert df.equals(landgen.rda.anova(res, n_perm=49, seed=1))

    df_axis = landgen.rda.anova_axis(res, n_perm=49, seed=1)
    assert list(df_axis.index) == ["RDA1", "RDA2", "RDA3"]
    assert np.allclose(df_axis["variance"], res.eigenvalues)
    assert np.all((df_axis["P"] > 0) & (df_axis["P"] <= 1))
    assert df_axis.loc["RDA1", "P"] == pytest.approx(1 / 50)


def test_significant_axes():
    df = pd.DataFrame(
        {"P": [0.001, 0.2, 0.01, 0.05]}, index=["RDA1", "RDA2", "RDA3", "RDA4"]
    )
    assert landgen.rda.significant_axes(df, alpha=0.05) == [1, 3]
    assert landgen.rda.significant_axes(df, alpha=0.1) == [1, 3, 4]


def test_find_candidates():
    geno, env, causal = _load_toy()
    res = landgen.rda.fit(geno, env)
    cor = landgen.data.locus_cor(geno, env)
    cand = landgen.rda.find_candidates(res.snp_scores(), cor, axes=[1, 2, 3], z=3)

    assert not cand["snp"].duplicated().any()
    assert set(cand["axis"]).issubset({1, 2, 3})
    assert set(cand["predictor"]).issubset(set(env.columns))

    # most of the simulated causal SNPs are recovered with the right predictor
    found = cand.set_index("snp")["predictor"]
    hit = found.index.intersection(causal.index)
    assert len(hit) >= len(causal) // 2
    assert (found[hit] == causal[hit]).mean() >= 0.8

    # same candidates as calling the two steps explicitly
    loadings = res.snp_scores()
    per_axis = [
        (a, landgen.rda.detect_outliers(loadings.iloc[:, a - 1], z=3))
        for a in [1, 2, 3]
    ]
    assert cand.equals(landgen.rda.build_candidate_table(per_axis, cor))

    # scanning no axis yields no candidate
    assert len(landgen.rda.find_candidates(loadings, cor, axes=[], z=3)) == 0
