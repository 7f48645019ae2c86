#!/usr/bin/env python3
"""Setup script for deckrunner package."""

from setuptools import setup, find_packages

setup(
    name="deckrunner",
    version="0.1.0",
    description="Dev server and batch build helpers for Slidev slide decks",
    author="Deckrunner Project",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click>=8.0.0",
        "PyYAML>=6.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "deckrunner=deckrunner.cli:cli",
            "deck-dev=deckrunner.cli:dev",
            "deck-build=deckrunner.cli:build",
        ],
    },
    python_requires=">=3.10",
)
