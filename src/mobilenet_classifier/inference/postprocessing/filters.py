"""
Post-processing filters for inference results.

This module provides ranking of category lists, confidence-based
filtering of prediction results, and aggregation over result batches.
"""

from typing import Any

import numpy as np

from ...labels import Category
from ...utils.logging import get_logger


def top_k_categories(
    categories: list[Category], k: int | None = None, min_score: float = 0.0
) -> list[Category]:
    """
    Rank categories by score.

    Ties keep their label order.

    Args:
        categories: Categories in label order
        k: Number of categories to keep; all when None
        min_score: Drop categories scoring below this value

    Returns:
        Categories sorted by descending score
    """
    if k is not None and k < 0:
        raise ValueError(f"k must be non-negative, got {k}")

    ranked = sorted(
        (c for c in categories if c.score >= min_score),
        key=lambda c: c.score,
        reverse=True,
    )
    return ranked if k is None else ranked[:k]


class ConfidenceFilter:
    """Filter predictions based on a confidence threshold."""

    def __init__(self, min_confidence: float = 0.5):
        """
        Initialize confidence filter.

        Args:
            min_confidence: Minimum top-1 confidence to keep a prediction
        """
        self.min_confidence = min_confidence
        self.logger = get_logger()

    def filter(self, results: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """
        Filter results based on their confidence.

        Every result is annotated with ``filter_passed``; rejected ones also
        get a ``filter_reason``.

        Args:
            results: List of prediction results

        Returns:
            Results that passed
        """
        filtered = []

        for result in results:
            confidence = result.get("confidence", 0.0)

            if confidence >= self.min_confidence:
                result["filter_passed"] = True
                filtered.append(result)
            else:
                result["filter_passed"] = False
                result["filter_reason"] = (
                    f"Low confidence: {confidence:.3f} < {self.min_confidence:.3f}"
                )

        self.logger.info(
            f"Confidence filter: {len(filtered)}/{len(results)} predictions passed"
        )
        return filtered

    def get_statistics(self, results: list[dict[str, Any]]) -> dict[str, Any]:
        """Get filtering statistics."""
        if not results:
            return {}

        confidences = [r.get("confidence", 0.0) for r in results]
        passed = [r for r in results if r.get("filter_passed", False)]

        return {
            "total_predictions": len(results),
            "passed_filter": len(passed),
            "filter_rate": len(passed) / len(results),
            "avg_confidence": float(np.mean(confidences)),
            "min_confidence_threshold": self.min_confidence,
        }


class ResultAggregator:
    """Aggregate collections of prediction results."""

    def __init__(self, high_confidence_threshold: float = 0.7):
        self.high_confidence_threshold = high_confidence_threshold

    def summarize(self, results: list[dict[str, Any]]) -> dict[str, Any]:
        """
        Summarize a batch of results.

        Args:
            results: List of prediction results

        Returns:
            Label distribution and confidence statistics
        """
        if not results:
            return {"total_predictions": 0}

        label_counts: dict[str, int] = {}
        for result in results:
            # Unranked results carry a None label
            label = result.get("label") or "unknown"
            label_counts[label] = label_counts.get(label, 0) + 1

        confidences = np.array([r.get("confidence", 0.0) for r in results])
        high_confidence = int(np.sum(confidences >= self.high_confidence_threshold))

        return {
            "total_predictions": len(results),
            "label_distribution": dict(
                sorted(label_counts.items(), key=lambda x: (-x[1], x[0]))
            ),
            "most_common_label": max(label_counts.items(), key=lambda x: x[1])[0],
            "average_confidence": float(np.mean(confidences)),
            "confidence_std": float(np.std(confidences)),
            "min_confidence": float(np.min(confidences)),
            "max_confidence": float(np.max(confidences)),
            "high_confidence_ratio": high_confidence / len(results),
        }
