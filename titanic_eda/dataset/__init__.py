"""
dataset package: the passenger row model and the dataset loader.
"""

from titanic_eda.dataset.titanic_dataset import PassengerRow, TitanicDataset, build_dataset
