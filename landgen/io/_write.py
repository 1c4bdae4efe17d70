import pandas as pd
import landgen


def write_table(df: pd.DataFrame, path: str, index: bool = True) -> None:
    """
    Write a table as tab-separated text.

    Parameters
    ----------
    df : pd.DataFrame
        table to write
    path : str
        path to the output file
    index : bool
        whether to write the row labels, by default True
    """
    df.to_csv(path, sep="\t", index=index, na_rep="NA", float_format="%.6g")
    landgen.logger.info(f"Table with {df.shape[0]} rows written to {path}")
