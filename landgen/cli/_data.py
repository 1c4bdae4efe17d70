import landgen
from ._utils import log_params


def env_screen(env: str, out: str, threshold: float = 0.7):
    """
    Screen environmental predictors for collinearity.

    Parameters
    ----------
    env : str
        Path to the predictor table, 1st column: individual ID.
    out : str
        Output prefix. :code:`<out>.cor.tsv` (pairs with |r| > threshold) and
        :code:`<out>.vif.tsv` will be created.
    threshold : float
        Correlation threshold (default 0.7).
    """
    log_params("env-screen", locals())
    df_env = landgen.io.read_env(env)
    landgen.io.write_table(
        landgen.data.cor_screen(df_env, threshold=threshold),
        f"{out}.cor.tsv",
        index=False,
    )
    df_vif = landgen.data.vif(df_env)
    landgen.io.write_table(df_vif.to_frame(), f"{out}.vif.tsv")
    for predictor, v in df_vif.items():
        if v > 10:
            landgen.logger.warning(f"{predictor} has VIF={v:.2f} > 10")


def simulate(
    out: str,
    n_indiv: int = 100,
    n_snp: int = 500,
    n_env: int = 3,
    n_causal: int = 10,
    effect: float = 2.0,
    missing_rate: float = 0.0,
    seed: int = 0,
):
    """
    Simulate a toy genotype-environment association data set.

    Parameters
    ----------
    out : str
        Output prefix. :code:`<out>.geno.csv`, :code:`<out>.env.csv` and
        :code:`<out>.causal.tsv` will be created.
    n_indiv : int
        Number of individuals (default 100).
    n_snp : int
        Number of SNPs (default 500).
    n_env : int
        Number of predictors (default 3).
    n_causal : int
        Number of SNPs associated with a predictor (default 10).
    effect : float
        Effect of the predictor on the logit allele frequency (default 2).
    missing_rate : float
        Proportion of missing genotypes (default 0).
    seed : int
        Random seed (default 0).
    """
    log_params("simulate", locals())
    geno, env, causal = landgen.simulate.gea(
        n_indiv=n_indiv,
        n_snp=n_snp,
        n_env=n_env,
        n_causal=n_causal,
        effect=effect,
        missing_rate=missing_rate,
        seed=seed,
    )
    geno.to_csv(f"{out}.geno.csv", na_rep="NA")
    env.to_csv(f"{out}.env.csv")
    landgen.io.write_table(causal.to_frame(), f"{out}.causal.tsv")
    landgen.logger.info(f"Simulated data written to {out}.geno.csv, {out}.env.csv")
