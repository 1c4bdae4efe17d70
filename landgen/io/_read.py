import os
import zipfile
import pandas as pd
from typing import List, Optional
import landgen


def _infer_sep(path: str) -> str:
    return "," if path.lower().endswith(".csv") else "\t"


def read_table(path: str, member: Optional[str] = None, index_col=0) -> pd.DataFrame:
    """Read a delimited table, possibly stored in a zip archive

    Parameters
    ----------
    path : str
        path to a .csv file (comma separated), any other text file (tab
        separated), or a .zip archive containing one of these
    member : str, optional
        file name inside the zip archive, by default None (the archive must
        contain a single file)
    index_col : int or str
        column to use as row labels, by default 0

    Returns
    -------
    pd.DataFrame
    """
    if path.lower().endswith(".zip"):
        with zipfile.ZipFile(path) as f:
            names = [n for n in f.namelist() if not n.endswith("/")]
            if member is None:
                assert (
                    len(names) == 1
                ), f"{path} contains {len(names)} files, specify `member`"
                member = names[0]
            assert member in names, f"{member} not found in {path}"
            with f.open(member) as handle:
                df = pd.read_csv(handle, sep=_infer_sep(member), index_col=index_col)
    else:
        df = pd.read_csv(path, sep=_infer_sep(path), index_col=index_col)
    df.index = df.index.astype(str)
    return df


def read_geno(path: str, member: Optional[str] = None, index_col=0) -> pd.DataFrame:
    """Read a (n_indiv, n_snp) genotype matrix with individuals as rows

    Parameters
    ----------
    path : str
        table file or zip archive, see :func:`read_table`
    member : str, optional
        file name inside the zip archive
    index_col : int or str
        column with the individual identifiers, by default 0

    Returns
    -------
    pd.DataFrame
        allele dosages as float, NaN for missing genotypes
    """
    geno = read_table(path, member=member, index_col=index_col).astype(float)
    n_missing = int(geno.isna().values.sum())
    landgen.logger.info(
        f"Read {geno.shape[0]} individuals and {geno.shape[1]} SNPs from {path}, "
        f"{n_missing / geno.size * 100:.2f}% missing genotypes"
    )
    return geno


def read_env(
    path: str,
    columns: Optional[List[str]] = None,
    member: Optional[str] = None,
    index_col=0,
) -> pd.DataFrame:
    """Read a (n_indiv, n_env) predictor table

    Parameters
    ----------
    path : str
        table file or zip archive, see :func:`read_table`
    columns : List[str], optional
        predictors to retain in the given order, by default None (all columns)
    member : str, optional
        file name inside the zip archive
    index_col : int or str
        column with the individual identifiers, by default 0

    Returns
    -------
    pd.DataFrame
    """
    env = read_table(path, member=member, index_col=index_col)
    if columns is not None:
        missing = [c for c in columns if c not in env.columns]
        assert len(missing) == 0, f"{','.join(missing)} not found in {path}"
        env = env[columns]
    landgen.logger.info(
        f"Read {env.shape[1]} predictors ({','.join(env.columns)}) "
        f"for {env.shape[0]} individuals from {os.path.basename(path)}"
    )
    return env
