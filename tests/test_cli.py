"""
End-to-end tests for the landgen command line interfaces.
"""
import landgen
import tempfile
from landgen.utils import cd
import subprocess
import pandas as pd
import numpy as np


def test_rda():
    """
    Test that the CLI is consistent with the python API.
    landgen rda \
        --geno toy.geno.csv \
        --env toy.env.csv \
        --out toy
    """
    with tempfile.TemporaryDirectory() as tmp_dir:
        with cd(tmp_dir):
            cmds = [
                "landgen simulate",
                "--out toy",
                "--n-indiv 150",
                "--n-snp 300",
                "--effect 3",
                "--seed 1",
            ]
            subprocess.check_call(" ".join(cmds), shell=True)
            cmds = [
                "landgen rda",
                "--geno toy.geno.csv",
                "--env toy.env.csv",
                "--out toy",
                "--n-perm 49",
                "--z 3",
            ]
            subprocess.check_call(" ".join(cmds), shell=True)
            df_cand = pd.read_csv("toy.candidates.tsv", sep="\t")
            df_anova = pd.read_csv("toy.anova_axis.tsv", sep="\t", index_col=0)

            geno, env, _ = landgen.simulate.gea(
                n_indiv=150, n_snp=300, effect=3, seed=1
            )
            geno = landgen.data.impute_with_mode(geno)
            res = landgen.rda.fit(geno, env)
            axes = landgen.rda.significant_axes(
                landgen.rda.anova_axis(res, n_perm=49, seed=0)
            )
            cand = landgen.rda.find_candidates(
                res.snp_scores(),
                landgen.data.locus_cor(geno, env),
                axes=axes,
                z=3,
            )
            assert landgen.rda.significant_axes(df_anova) == axes
            assert list(df_cand["snp"]) == list(cand["snp"])
            assert list(df_cand["predictor"]) == list(cand["predictor"])
            assert np.allclose(df_cand["loading"], cand["loading"], rtol=1e-4)


def test_distance_env_screen():
    with tempfile.TemporaryDirectory() as tmp_dir:
        with cd(tmp_dir):
            subprocess.check_call(
                "landgen simulate --out toy --n-indiv 30 --n-snp 100 --seed 2",
                shell=True,
            )
            cmds = [
                "landgen distance",
                "--geno toy.geno.csv",
                "--method euclidean,prop_shared",
                "--out toy",
            ]
            subprocess.check_call(" ".join(cmds), shell=True)
            dist = pd.read_csv("toy.euclidean.tsv", sep="\t", index_col=0)
            assert dist.shape == (30, 30)
            df_compare = pd.read_csv("toy.compare.tsv", sep="\t", index_col=0)
            assert list(df_compare.index) == ["euclidean", "prop_shared"]

            subprocess.check_call(
                "landgen env-screen --env toy.env.csv --out toy", shell=True
            )
            df_vif = pd.read_csv("toy.vif.tsv", sep="\t", index_col=0)
            assert list(df_vif.index) == ["env1", "env2", "env3"]
