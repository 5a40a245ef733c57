"""
Field Locator
==============
Resolves a logical field name to the indirect field object that carries it.

Field names (``/T``) are partial names and may repeat across a hierarchy.
The search is depth-first over ``/Fields`` and ``/Kids`` and returns the
first match in traversal order; later matches are never reported.
"""

from __future__ import annotations

import logging

import pikepdf

from .objects import ObjectId, ObjectShapeError, as_text, object_id

logger = logging.getLogger(__name__)


def find_field_by_name(fields: pikepdf.Array, name: str) -> pikepdf.Object | None:
    """
    Depth-first search of ``fields`` for a field whose ``/T`` equals ``name``.

    Only indirect entries are considered: the result must be referenceable
    from the calculation order array.
    """
    visited: set[ObjectId] = set()
    for item in fields:
        found = _search_node(item, name, visited)
        if found is not None:
            return found
    return None


def _search_node(
    node: pikepdf.Object, name: str, visited: set[ObjectId]
) -> pikepdf.Object | None:
    node_id = object_id(node)
    if node_id is None or node_id in visited:
        return None
    visited.add(node_id)

    if not isinstance(node, pikepdf.Dictionary):
        logger.debug("object %s is not a field dictionary; skipping", node_id)
        return None

    if "/T" in node:
        try:
            if as_text(node["/T"], "field /T") == name:
                return node
        except ObjectShapeError as e:
            logger.debug("ignoring field name of %s: %s", node_id, e)

    kids = node.get("/Kids")
    if isinstance(kids, pikepdf.Array):
        for kid in kids:
            found = _search_node(kid, name, visited)
            if found is not None:
                return found
    return None
