from setuptools import setup, find_packages

setup(
    name="esotape",
    version="0.1.0",
    description="esotape — Brainfuck, Ook and Spoon interpreter on a shared tape machine",
    packages=find_packages(include=["esotape", "esotape.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis>=6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "esotape=esotape.cli:main",
        ],
    },
)
