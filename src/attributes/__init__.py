"""
Secondary (age/gender) inference on detected faces.
"""

from .estimator import AttributeEstimator, BoxSelection, select_box

__all__ = ["AttributeEstimator", "BoxSelection", "select_box"]
