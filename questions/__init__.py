"""Question catalog loading, tree walking and step grouping."""

from .catalog import load_catalog, parse_catalog
from .grouping import group_by_category, step_label, step_labels
from .tree import answerable_ids, count_required, flatten, required_answerable_ids, walk

__all__ = [
    "answerable_ids",
    "count_required",
    "flatten",
    "group_by_category",
    "load_catalog",
    "parse_catalog",
    "required_answerable_ids",
    "step_label",
    "step_labels",
    "walk",
]
