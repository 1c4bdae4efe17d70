"""
Title of the walkthrough
========================

One paragraph describing the question and the data. Then list the steps:

1. Load the data.
2. Run the analysis.
3. Visualize the results.
"""

# %%
import landgen
import matplotlib.pyplot as plt

# %%
# Load the data. Replace the simulated data set with
# :meth:`~landgen.io.read_geno` and :meth:`~landgen.io.read_env`.

geno, env, _ = landgen.simulate.gea(seed=0)

# %%
# Describe and run the analysis here.

# %%
# Describe and plot the results here.

plt.show()
