from setuptools import setup, find_packages

setup(
    name="bqm-core",
    version="0.1.0",
    packages=find_packages(include=["bqm_core", "bqm_core.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.24",
        "dimod>=0.12",
        "pydantic>=2.0",
        "typer>=0.9",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "bqm=bqm_core.cli:app",
        ],
    },
)
