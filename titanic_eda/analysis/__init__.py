"""
analysis package: aggregation, correlation/binning and the factor ranking.

Importing ranking here makes sure the factor rules are registered.
"""

from titanic_eda.analysis import ranking
from titanic_eda.analysis.analyzer import Analyzer
