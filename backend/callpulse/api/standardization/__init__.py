"""
Field Standardization Package

This package contains the components that classify raw field names and
normalize arbitrarily shaped API records into canonical interactions.
"""

from .field_inference import classify_field, infer_from_sample, infer_from_schema_properties
from .normalizer import InteractionNormalizer, NormalizationOutcome

__all__ = [
    "classify_field",
    "infer_from_sample",
    "infer_from_schema_properties",
    "InteractionNormalizer",
    "NormalizationOutcome",
]
