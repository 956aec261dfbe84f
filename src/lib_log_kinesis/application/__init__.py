"""Application layer: payload transformation, destination resolution, dispatch."""

from __future__ import annotations

from .destination import DestinationResolver
from .transform import FieldFilter, FieldTransformer, coerce_value

__all__ = ["DestinationResolver", "FieldFilter", "FieldTransformer", "coerce_value"]
