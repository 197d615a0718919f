"""Helpers for working with category hierarchies."""

from typing import Any, Dict, Iterable, List, Optional, Protocol


class CategoryRecord(Protocol):
    id: int
    name: str
    parent_id: Optional[int]
    status: Any


def build_category_tree(categories: Iterable[CategoryRecord]) -> List[Dict[str, Any]]:
    """Build a nested forest from flat category records.

    Sibling order follows the order of ``categories``, so callers pass them
    sorted by name. A record whose parent is missing is promoted to a root.
    """
    categories = list(categories)

    # First pass: one node per category
    nodes: Dict[int, Dict[str, Any]] = {}
    for category in categories:
        nodes[category.id] = {
            "id": category.id,
            "name": category.name,
            "status": category.status,
            "children": [],
        }

    # Second pass: attach each node to its parent
    roots: List[Dict[str, Any]] = []
    for category in categories:
        node = nodes[category.id]
        parent_node = nodes.get(category.parent_id) if category.parent_id is not None else None
        if parent_node is not None:
            parent_node["children"].append(node)
        else:
            roots.append(node)

    return roots
