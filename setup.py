# flake8: noqa
from setuptools import setup, find_packages
from pathlib import Path

long_description = (Path(__file__).parent / "README.md").read_text()

exec(open("landgen/version.py").read())

setup(
    name="landgen-kit",
    version=__version__,
    description="Tool kits for genotype-environment association and genetic distances",
    author="landgen-kit developers",
    packages=find_packages(include=["landgen", "landgen.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
        "matplotlib",
        "dask[array]>=2021.11.2",
        "tqdm",
        "statsmodels",
        "structlog",
        "fire",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["landgen=landgen.cli:cli"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Intended Audience :: Science/Research",
    ],
    long_description=long_description,
    long_description_content_type="text/markdown",
)
