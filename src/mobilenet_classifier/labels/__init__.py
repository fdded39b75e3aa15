"""
Labels module for MobileNet Classifier

Label file loading and mapping of score tensors to categories.
"""

from .category import Category, TensorLabel
from .loader import load_labels, load_labels_from_bytes


__all__ = ["Category", "TensorLabel", "load_labels", "load_labels_from_bytes"]
