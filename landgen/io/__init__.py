from ._read import read_table, read_geno, read_env
from ._write import write_table

__all__ = ["read_table", "read_geno", "read_env", "write_table"]
