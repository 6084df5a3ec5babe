# setup.py
from setuptools import setup, find_packages

setup(
    name="sitemap_service",
    version="0.1.0",
    description="Bounded website sitemap crawler with a pollable job API",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "pydantic>=2.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "sitemap-service=sitemap_service.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
