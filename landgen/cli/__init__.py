#!/usr/bin/env python

import fire
from ._utils import log_params
from ._rda import rda
from ._distance import distance
from ._data import env_screen, simulate


def cli():
    """
    Entry point for the landgen command line interface.
    """
    fire.Fire()


if __name__ == "__main__":
    fire.Fire()
