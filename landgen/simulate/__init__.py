from ._gea import gea

__all__ = ["gea"]
