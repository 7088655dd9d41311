"""Declarative field descriptor models."""
from __future__ import annotations

from .descriptor import SalesforceField, SalesforceIdField

__all__ = ["SalesforceField", "SalesforceIdField"]
