"""
MobileNet classifiers.
"""

from .mobilenet_v1 import MobilenetV1, Outputs


__all__ = ["MobilenetV1", "Outputs"]
