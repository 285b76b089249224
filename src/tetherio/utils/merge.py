import copy
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


def deep_merge(parent: Dict[str, Any], child: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge a child dictionary into a copy of the parent.

    Nested dictionaries are merged, ``None`` in the child leaves the parent
    value alone and every other child value overwrites the parent.
    """
    merged = copy.deepcopy(parent)
    for key, child_value in child.items():
        if child_value is None:
            continue
        parent_value = merged.get(key)
        if isinstance(parent_value, dict) and isinstance(child_value, dict):
            merged[key] = deep_merge(parent_value, child_value)
        else:
            merged[key] = child_value
    return merged
