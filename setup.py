#!/usr/bin/env python3
"""
kv-log Setup Script
===================
Allows installation of the kv-log package.

Usage:
    pip install -e .           # Development install
    pip install -e .[test]     # Development install with test tools
    pip install .              # Regular install
"""

from setuptools import setup, find_packages

setup(
    name="kv-log",
    version="1.0.0",
    packages=find_packages(include=["kvlog", "kvlog.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "kvlog=kvlog.runner:main",
        ],
    },
)
