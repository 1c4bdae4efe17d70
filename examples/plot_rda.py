"""
Genotype-environment association with redundancy analysis
=========================================================

Redundancy analysis (RDA) is a constrained ordination: the genotype matrix is
regressed on a set of environmental predictors and a PCA is performed on the
fitted values. SNPs with extreme loadings on the constrained axes are
candidates for local adaptation. We will go through the following:

1. Load and impute genotypes.
2. Screen predictors for collinearity.
3. Fit the RDA and test its significance.
4. Identify candidate SNPs and their most associated predictor.
"""

# %%
import landgen
import matplotlib.pyplot as plt

# %%
# We simulate 200 individuals genotyped at 1,000 SNPs, 15 of which are
# associated with one of three predictors. To read your own data, use
# :meth:`~landgen.io.read_geno` and :meth:`~landgen.io.read_env`, which accept
# csv files or zip archives.

geno, env, causal = landgen.simulate.gea(
    n_indiv=200,
    n_snp=1000,
    n_env=3,
    n_causal=15,
    missing_rate=0.01,
    env_names=["AP", "MDR", "Elev"],
    seed=1,
)
print(geno.iloc[0:5, 0:8])

# %%
# RDA requires complete data. We replace each missing genotype with the most
# common genotype of its SNP.

geno = landgen.data.impute_with_mode(geno)

# %%
# Strongly correlated predictors make the ordination hard to interpret. A
# common rule of thumb is to keep |r| < 0.7 and VIF < 10.

print(landgen.data.cor_screen(env, threshold=0.7))
print(landgen.data.vif(env))

# %%
# Fit the RDA. The predictors explain a small proportion of the genetic
# variance, which is expected as most SNPs are neutral.

res = landgen.rda.fit(geno, env)
print(res)
print(res.summary())

fig, ax = plt.subplots(figsize=(4, 3))
landgen.plot.screeplot(res, ax=ax)

# %%
# We test the significance of the full model and of each constrained axis with
# permutations. Only significant axes are scanned for outliers.

print(landgen.rda.anova(res, n_perm=199))
df_axis = landgen.rda.anova_axis(res, n_perm=199)
print(df_axis)
axes = landgen.rda.significant_axes(df_axis, alpha=0.05)

# %%
# SNP loadings are roughly normally distributed; the candidates sit in the
# tails, here beyond 3 standard deviations from the mean.

loadings = res.snp_scores(scaling=3)
if len(axes) > 0:
    fig, ax_list = plt.subplots(figsize=(9, 3), ncols=len(axes), squeeze=False)
    for i, a in enumerate(axes):
        landgen.plot.loading_hist(loadings.iloc[:, a - 1], z=3, ax=ax_list[0, i])
        ax_list[0, i].set_title(f"RDA{a}")
    fig.tight_layout()
else:
    print("No significant axis at alpha = 0.05")

# %%
# Each candidate is annotated with the predictor it is most strongly correlated
# with. A SNP detected on several axes is kept once, on the first axis.

cor = landgen.data.locus_cor(geno, env)
cand = landgen.rda.find_candidates(loadings, cor, axes=axes, z=3)
print(cand)
print(landgen.rda.summarize_candidates(cand))

# %%
# How many simulated causal SNPs were recovered, and with the right predictor?

found = cand.set_index("snp")["predictor"]
hit = found.index.intersection(causal.index)
print(f"{len(hit)}/{len(causal)} causal SNPs detected")
print(f"{(found[hit] == causal[hit]).sum()} with the right predictor")

# %%
# Finally the candidates are shown on the ordination, colored by predictor.

fig, ax = plt.subplots(figsize=(5, 5))
landgen.plot.rda_triplot(res, cand, axes=(1, 2), ax=ax)
plt.show()
