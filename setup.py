"""
setup.py: The setup script to make titanic_eda pip-installable.
"""
from setuptools import setup, find_packages

setup(
    name="titanic-eda",
    version="1.0.0",
    packages=find_packages(include=["titanic_eda", "titanic_eda.*"]),
    package_data={"titanic_eda.tests": ["data/*.csv"]},
    install_requires=[
        "numpy",
        "scipy",
        "matplotlib",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
    description="Exploratory survival statistics for the Titanic passenger dataset, plus CLI (JSON report, charts).",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    entry_points={
        "console_scripts": [
            # Exposes a CLI command named "titanic-eda"
            # which points to the 'main_cli' function inside titanic_eda.run.
            "titanic-eda=titanic_eda.run:main_cli",
        ]
    },
)
