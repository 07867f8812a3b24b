"""
titanic_eda package

Modules:
 - run.py: CLI entry point (fields, analyze, missing)
 - config.py: environment-driven defaults and logging setup
 - _types.py: shared enumerations and the fixed field schema
 - errors.py: EmptyDatasetError, UnknownFieldError, MalformedRecordError
 - dataset/: row model and file loading
 - cleaning/: imputation and feature derivation
 - analysis/: aggregation, correlation/binning, factor ranking, analyzer
 - charts/: chart descriptions and matplotlib rendering
 - descriptor/: JSON/CSV export
"""
