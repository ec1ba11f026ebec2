"""
Template module for motionsearch.

Contains the labeled reference movements the extractor searches for.
"""

from motionsearch.model.templates.template import Template, MovementType, MovementExecution

__all__ = [
    "Template",
    "MovementType",
    "MovementExecution",
]
