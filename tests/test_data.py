import numpy as np
import pandas as pd
import pytest
import landgen


def test_impute():
    geno = pd.DataFrame(
        {
            "snp1": [0, 0, 1, np.nan],
            "snp2": [2, 1, 1, np.nan],
            "snp3": [0, 2, np.nan, np.nan],
        },
        index=["i1", "i2", "i3", "i4"],
        dtype=float,
    )
    imputed = landgen.data.impute_with_mode(geno)
    assert imputed.loc["i4", "snp1"] == 0
    assert imputed.loc["i4", "snp2"] == 1
    # ties are resolved towards the smaller genotype
    assert imputed.loc["i3", "snp3"] == 0
    assert imputed.loc["i4", "snp3"] == 0
    assert not imputed.isna().values.any()
    # input is not modified
    assert geno.isna().values.sum() == 4

    imputed = landgen.data.impute_with_mean(geno)
    assert np.isclose(imputed.loc["i4", "snp1"], 1 / 3)
    assert np.isclose(imputed.loc["i4", "snp2"], 4 / 3)
    assert np.isclose(imputed.loc["i3", "snp3"], 1.0)
    assert imputed.index.equals(geno.index)
    assert geno.isna().values.sum() == 4


def test_filter_maf():
    geno = pd.DataFrame(
        {"snp1": [0, 0, 0, 0], "snp2": [0, 1, 1, 2], "snp3": [2, 2, 2, 1]},
        dtype=float,
    )
    assert np.allclose(landgen.data.allele_freq(geno), [0, 0.5, 7 / 8])
    assert list(landgen.data.filter_maf(geno, maf=0.1).columns) == ["snp2", "snp3"]
    assert list(landgen.data.filter_maf(geno, maf=0.2).columns) == ["snp2"]


def test_cor_screen():
    np.random.seed(1)
    x = np.random.randn(100)
    env = pd.DataFrame(
        {
            "AP": x,
            "MDR": -x + np.random.randn(100) * 0.1,
            "Elev": np.random.randn(100),
        }
    )
    df = landgen.data.cor_screen(env, threshold=0.7)
    assert len(df) == 1
    assert (df.loc[0, "var1"], df.loc[0, "var2"]) == ("AP", "MDR")
    assert df.loc[0, "r"] < -0.9

    df = landgen.data.cor_screen(env[["AP", "Elev"]], threshold=0.7)
    assert len(df) == 0


def test_vif():
    a = np.array([1, 1, -1, -1] * 2, dtype=float)
    b = np.array([1, -1, 1, -1] * 2, dtype=float)
    c = np.array([1, -1, -1, 1] * 2, dtype=float)
    env = pd.DataFrame({"a": a, "b": b, "c": c})
    v = landgen.data.vif(env)
    assert list(v.index) == ["a", "b", "c"]
    assert np.allclose(v.values, 1.0)

    np.random.seed(0)
    x = np.random.randn(50)
    env = pd.DataFrame({"x": x, "y": x + np.random.randn(50) * 0.1, "z": np.random.randn(50)})
    v = landgen.data.vif(env)
    assert v["x"] > 10 and v["y"] > 10 and v["z"] < 2


def test_locus_cor():
    geno, env, _ = landgen.simulate.gea(n_indiv=80, n_snp=120, n_env=3, seed=3)
    geno["mono"] = 1.0
    cor = landgen.data.locus_cor(geno, env)
    assert cor.shape == (121, 3)
    assert cor.index.equals(geno.columns)
    assert list(cor.columns) == list(env.columns)
    expected = np.corrcoef(geno["snp5"], env["env2"])[0, 1]
    assert np.isclose(cor.loc["snp5", "env2"], expected)
    assert cor.loc["mono"].isna().all()

    # chunked computation with dask gives identical results in the same order
    cor_chunk = landgen.data.locus_cor(geno, env, chunk_size=17)
    assert cor_chunk.index.equals(cor.index)
    assert np.allclose(cor_chunk.values, cor.values, equal_nan=True)

    with pytest.raises(landgen.InvalidInputError):
        landgen.data.locus_cor(geno.iloc[1:], env)
    geno.iloc[0, 0] = np.nan
    with pytest.raises(landgen.InvalidInputError):
        landgen.data.locus_cor(geno, env)


def test_simulate():
    geno, env, causal = landgen.simulate.gea(
        n_indiv=30, n_snp=40, n_env=2, n_causal=4, missing_rate=0.1, seed=5
    )
    assert geno.shape == (30, 40)
    assert env.shape == (30, 2)
    assert len(causal) == 4
    assert set(causal.values) == {"env1", "env2"}
    assert causal.index.isin(geno.columns).all()
    assert 0 < geno.isna().values.mean() < 0.2
    assert set(np.unique(geno.values[~np.isnan(geno.values)])).issubset({0, 1, 2})

    geno2, _, _ = landgen.simulate.gea(
        n_indiv=30, n_snp=40, n_env=2, n_causal=4, missing_rate=0.1, seed=5
    )
    assert geno.equals(geno2)
