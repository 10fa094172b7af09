"""
Engine module - label resolution and form filling.
"""

from label_locator.engine.label_resolver import LabelResolver, LabelStrategy, ResolvedLabel
from label_locator.engine.form_filler import (
    FieldResult,
    FieldSpec,
    FormFiller,
    fields_from_pairs,
    load_fields,
)

__all__ = [
    "LabelResolver",
    "LabelStrategy",
    "ResolvedLabel",
    "FormFiller",
    "FieldSpec",
    "FieldResult",
    "load_fields",
    "fields_from_pairs",
]
