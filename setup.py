#!/usr/bin/env python3
"""
KV-Gate Setup Script
====================
Allows installation of the kvgate package.

Usage:
    pip install -e .           # Development install
    pip install -e .[test]     # With test dependencies
    pip install .              # Regular install
"""

from setuptools import setup, find_packages

setup(
    name="kvgate",
    version="1.0.0",
    packages=find_packages(include=["kvgate", "kvgate.*"]),
    python_requires=">=3.10",
    install_requires=[
        "aiohttp>=3.9.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
            "pytest-aiohttp>=1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "kvgate=kvgate.server:main",
        ],
    },
)
