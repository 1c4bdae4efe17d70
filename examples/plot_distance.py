"""
Individual-level genetic distances
==================================

Many landscape genetic analyses start from a matrix of pairwise genetic
distances between individuals. Several metrics are available and we compare
them here:

1. Euclidean distance between allele dosages.
2. Bray-Curtis dissimilarity.
3. Proportion of shared alleles (as 1 - shared).
4. Euclidean distance between principal component scores.
"""

# %%
import landgen
import matplotlib.pyplot as plt

# %%
# We simulate 100 individuals and 2,000 SNPs with a few missing genotypes.

geno, env, _ = landgen.simulate.gea(
    n_indiv=100, n_snp=2000, n_causal=200, missing_rate=0.02, seed=2
)

# %%
# The proportion of shared alleles only uses loci observed in both individuals
# of a pair. The other metrics need imputed genotypes.

imputed = landgen.data.impute_with_mean(geno)
dists = {
    "euclidean": landgen.distance.calc(imputed, method="euclidean"),
    "bray_curtis": landgen.distance.calc(imputed, method="bray_curtis"),
    "prop_shared": landgen.distance.calc(geno, method="prop_shared"),
    "pca": landgen.distance.calc(imputed, method="pca", n_pc=10),
}

# %%
fig, ax = plt.subplots(figsize=(5, 4))
landgen.plot.dist_heatmap(dists["euclidean"], ax=ax)

# %%
# The metrics are highly correlated with each other, except the PCA-based
# distance, which only keeps the main axes of variation.

print(landgen.distance.compare(dists))

fig, ax = plt.subplots(figsize=(4, 4))
landgen.plot.dist_pairs(dists["euclidean"], dists["pca"], ax=ax)
ax.set_xlabel("Euclidean")
ax.set_ylabel("PCA")

# %%
# A Mantel test assesses the correlation between two distance matrices.

r, p = landgen.distance.mantel(dists["euclidean"], dists["prop_shared"], n_perm=199)
print(f"Mantel r={r:.3f}, P={p:.3g}")
plt.show()
