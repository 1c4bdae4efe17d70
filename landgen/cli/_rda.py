import landgen
from typing import List, Union
from ._utils import log_params, to_list


def rda(
    geno: str,
    env: str,
    out: str,
    predictors: Union[str, List[str]] = None,
    z: float = 3.0,
    n_perm: int = 999,
    alpha: float = 0.05,
    seed: int = 0,
    impute: str = "mode",
    scaling: int = 3,
    maf: float = None,
):
    """
    Genotype-environment association with redundancy analysis.

    Parameters
    ----------
    geno : str
        Path to the genotype table (.csv is comma separated, otherwise tab
        separated; may be inside a .zip archive). 1st column: individual ID,
        other columns: allele dosage (0, 1, 2) of each SNP, missing as "NA".
    env : str
        Path to the predictor table with the same individual IDs as rows.
    out : str
        Output prefix. :code:`<out>.anova.tsv`, :code:`<out>.anova_axis.tsv`,
        :code:`<out>.candidates.tsv`, :code:`<out>.png` will be created.
    predictors : Union[str, List[str]]
        Comma-separated predictors to use (default all columns of :code:`env`).
    z : float
        Number of standard deviations defining the outlier cutoff (default 3).
    n_perm : int
        Number of permutations of the significance tests (default 999).
    alpha : float
        Significance level to select the axes scanned for outliers (default 0.05).
    seed : int
        Random seed of the permutations (default 0).
    impute : str
        Imputation of missing genotypes, :code:`mode` (default) or :code:`mean`.
    scaling : int
        Scaling of the SNP scores (default 3, symmetric).
    maf : float
        If given, SNPs with minor allele frequency below :code:`maf` are removed.
    """
    log_params("rda", locals())
    assert impute in ["mode", "mean"], "impute must be either mode or mean"
    import matplotlib.pyplot as plt

    df_geno = landgen.io.read_geno(geno)
    df_env = landgen.io.read_env(env, columns=to_list(predictors))
    indiv = df_geno.index[df_geno.index.isin(df_env.index)]
    landgen.logger.info(f"{len(indiv)} individuals in both {geno} and {env}")
    df_geno, df_env = df_geno.loc[indiv], df_env.loc[indiv]

    if maf is not None:
        df_geno = landgen.data.filter_maf(df_geno, maf=maf)
    if impute == "mode":
        df_geno = landgen.data.impute_with_mode(df_geno)
    else:
        df_geno = landgen.data.impute_with_mean(df_geno)

    res = landgen.rda.fit(df_geno, df_env)
    df_anova = landgen.rda.anova(res, n_perm=n_perm, seed=seed)
    df_anova_axis = landgen.rda.anova_axis(res, n_perm=n_perm, seed=seed)
    landgen.io.write_table(df_anova, f"{out}.anova.tsv")
    landgen.io.write_table(df_anova_axis, f"{out}.anova_axis.tsv")

    axes = landgen.rda.significant_axes(df_anova_axis, alpha=alpha)
    if len(axes) == 0:
        landgen.logger.warning(
            f"No axis is significant at alpha={alpha}, no candidate is reported"
        )
    else:
        landgen.logger.info(f"Significant axes: {','.join(map(str, axes))}")
    cor = landgen.data.locus_cor(df_geno, df_env)
    cand = landgen.rda.find_candidates(
        res.snp_scores(scaling=scaling), cor, axes=axes, z=z
    )
    landgen.io.write_table(cand, f"{out}.candidates.tsv", index=False)

    fig, ax = plt.subplots(figsize=(5, 5), dpi=150)
    landgen.plot.rda_triplot(
        res, cand, axes=(1, 2) if res.n_axes > 1 else (1, 1), scaling=scaling, ax=ax
    )
    fig.tight_layout()
    fig.savefig(f"{out}.png", bbox_inches="tight")
    plt.close(fig)
    landgen.logger.info(f"RDA plot saved to {out}.png")
