"""
Post-processing utilities for inference results.

Provides ranking of categories, confidence-based filtering and
aggregation of prediction results.
"""

from .filters import ConfidenceFilter, ResultAggregator, top_k_categories


__all__ = ["ConfidenceFilter", "ResultAggregator", "top_k_categories"]
