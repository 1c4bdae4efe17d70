import landgen
from typing import List, Union
from ._utils import log_params, to_list


def distance(
    geno: str,
    out: str,
    method: Union[str, List[str]] = "euclidean",
    n_pc: int = 10,
    impute: str = "mode",
):
    """
    Individual-level genetic distances.

    Parameters
    ----------
    geno : str
        Path to the genotype table, see :code:`landgen rda`.
    out : str
        Output prefix. :code:`<out>.<method>.tsv` will be created for each method,
        and :code:`<out>.compare.tsv` when more than one method is given.
    method : Union[str, List[str]]
        Comma-separated distances among euclidean (default), bray_curtis,
        prop_shared, pca.
    n_pc : int
        Number of principal components of the :code:`pca` distance (default 10).
    impute : str
        Imputation of missing genotypes, :code:`mode` (default) or :code:`mean`.
        :code:`prop_shared` is computed before imputation.
    """
    log_params("distance", locals())
    assert impute in ["mode", "mean"], "impute must be either mode or mean"
    method = to_list(method)
    for m in method:
        if m not in landgen.distance.METHODS:
            raise ValueError(f"Unknown method `{m}`")

    df_geno = landgen.io.read_geno(geno)
    if impute == "mode":
        df_imputed = landgen.data.impute_with_mode(df_geno)
    else:
        df_imputed = landgen.data.impute_with_mean(df_geno)

    dict_dist = {}
    for m in method:
        if m == "prop_shared":
            dict_dist[m] = landgen.distance.calc(df_geno, method=m)
        elif m == "pca":
            dict_dist[m] = landgen.distance.calc(df_imputed, method=m, n_pc=n_pc)
        else:
            dict_dist[m] = landgen.distance.calc(df_imputed, method=m)
        landgen.io.write_table(dict_dist[m], f"{out}.{m}.tsv")

    if len(dict_dist) > 1:
        landgen.io.write_table(
            landgen.distance.compare(dict_dist), f"{out}.compare.tsv"
        )
