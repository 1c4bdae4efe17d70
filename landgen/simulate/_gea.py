import numpy as np
import pandas as pd
from typing import List, Tuple
import landgen


def gea(
    n_indiv: int = 100,
    n_snp: int = 500,
    n_env: int = 3,
    n_causal: int = 10,
    effect: float = 2.0,
    missing_rate: float = 0.0,
    env_names: List[str] = None,
    seed: int = 0,
) -> Tuple[pd.DataFrame, pd.DataFrame, pd.Series]:
    """Simulate genotypes associated with environmental predictors

    The generative model is:

    - predictors are drawn from independent standard normal distributions
    - for each neutral SNP, the allele frequency is drawn from Uniform(0.1, 0.9)
      and is shared by all individuals
    - for each causal SNP, a predictor is chosen in turn and the allele frequency
      of each individual is `logistic(logit(p0) + effect * env)`
    - genotypes are drawn from Binomial(2, p), then a fraction `missing_rate`
      of the genotypes is set to missing

    Parameters
    ----------
    n_indiv : int
        number of individuals
    n_snp : int
        number of SNPs
    n_env : int
        number of predictors
    n_causal : int
        number of SNPs associated with a predictor
    effect : float
        effect of the predictor on the logit of the allele frequency
    missing_rate : float
        proportion of missing genotypes
    env_names : List[str], optional
        names of the predictors, by default env1, env2, ...
    seed : int
        random seed

    Returns
    -------
    geno : pd.DataFrame
        (n_indiv, n_snp) genotype matrix
    env : pd.DataFrame
        (n_indiv, n_env) predictor table
    causal : pd.Series
        predictor associated with each causal SNP, indexed by SNP
    """
    assert n_causal <= n_snp, "n_causal should be no larger than n_snp"
    assert 0 <= missing_rate < 1, "missing_rate should be within [0, 1)"
    if env_names is None:
        env_names = [f"env{i + 1}" for i in range(n_env)]
    assert len(env_names) == n_env, "env_names should have length n_env"

    rng = np.random.default_rng(seed)
    indiv = [f"indiv{i + 1}" for i in range(n_indiv)]
    snp = [f"snp{i + 1}" for i in range(n_snp)]

    env = rng.standard_normal((n_indiv, n_env))
    p0 = rng.uniform(0.1, 0.9, size=n_snp)
    freq = np.tile(p0, (n_indiv, 1))

    causal_idx = np.sort(rng.choice(n_snp, size=n_causal, replace=False))
    causal_env = np.arange(n_causal) % n_env
    for i, j in zip(causal_idx, causal_env):
        logit = np.log(p0[i] / (1 - p0[i])) + effect * env[:, j]
        freq[:, i] = 1 / (1 + np.exp(-logit))

    geno = rng.binomial(2, freq).astype(float)
    if missing_rate > 0:
        geno[rng.random(geno.shape) < missing_rate] = np.nan

    landgen.logger.info(
        f"Simulated {n_indiv} individuals, {n_snp} SNPs ({n_causal} causal) "
        f"and {n_env} predictors"
    )
    return (
        pd.DataFrame(geno, index=indiv, columns=snp),
        pd.DataFrame(env, index=indiv, columns=env_names),
        pd.Series(
            [env_names[j] for j in causal_env],
            index=[snp[i] for i in causal_idx],
            name="predictor",
        ),
    )
