"""
Setup script for recruit-console project.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="recruit-console",
    version="0.1.0",
    packages=find_packages(include=["recruit", "recruit.*"]),
    python_requires=">=3.11",
    install_requires=[
        "requests>=2.31",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "python-dotenv>=1.0",
        "PyJWT>=2.8",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-mock>=3.12",
        ],
    },
    entry_points={
        "console_scripts": [
            "recruit-console=recruit.cli:main",
        ],
    },
)
