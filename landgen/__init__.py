from ._logging import logger
from ._exceptions import InvalidInputError
from . import data, rda, distance, simulate, plot, io, cli
from .version import __version__

__all__ = [
    "data",
    "rda",
    "distance",
    "simulate",
    "plot",
    "io",
    "cli",
    "InvalidInputError",
]
