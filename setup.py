"""
Setup script for rvcore.

Packages live under ``src/``; the version is read at runtime through
``importlib.metadata``.
"""

from setuptools import find_packages, setup

setup(
    name="rvcore",
    version="0.1.0",
    description=(
        "Probability distributions over an open set of output types, "
        "with log-space densities and conjugate composition"
    ),
    author="Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov",
    license="MIT",
    python_requires=">=3.12",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy>=1.26",
        "scipy>=1.11",
        "mypy-extensions>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
)
