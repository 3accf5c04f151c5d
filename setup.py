"""Setup script for the HDBSCAN* package."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="hdbscan-star",
    version="1.0.0",
    author="HDBSCAN* Team",
    description="Hierarchical density-based clustering with GLOSH outlier scores",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["hdbscan_star", "hdbscan_star.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Information Analysis",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20.0",
        "scikit-learn>=1.0.0",
        "scipy>=1.7.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "hdbscan-star=hdbscan_star.cli:main",
        ],
    },
)
