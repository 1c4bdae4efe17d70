from ._plot import (
    loading_hist,
    rda_triplot,
    screeplot,
    dist_heatmap,
    dist_pairs,
)


__all__ = ["loading_hist", "rda_triplot", "screeplot", "dist_heatmap", "dist_pairs"]
