"""
cleaning package: imputation and derived features.
"""

from titanic_eda.cleaning.imputation import clean_dataset
