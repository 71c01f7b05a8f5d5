"""
Module: models
Description: Package initialization for Pydantic data models.

This package contains the data models shared by the delivery strategies:
- DeliveryResult: Normalized outcome of a delivery
"""

from .result import DeliveryResult

__all__ = [
    "DeliveryResult",
]
