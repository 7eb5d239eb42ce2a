"""Flattening and position queries over the layer tree of a map."""

import logging
from typing import Callable, Iterator

from mapindex.models.scene import BaseLayer, Layer, LayerGroup, Map, PositionInfo

logger = logging.getLogger(__name__)

LayerFilter = Callable[[BaseLayer], bool]


def _root_group(collection: Map | LayerGroup) -> LayerGroup | None:
    if isinstance(collection, Map):
        return collection.layer_group
    if isinstance(collection, LayerGroup):
        return collection
    return None


def iter_layers(group: LayerGroup, include_groups: bool = True) -> Iterator[BaseLayer]:
    """
    Walk the subtree of a group depth-first.

    Leaves are yielded when reached. A nested group is yielded after all of
    its descendants, and only if include_groups is set. The group passed in
    is never yielded itself.

    Uses an explicit stack, so deeply nested trees do not exhaust the
    interpreter's recursion limit.

    Args:
        group: Group whose subtree to walk
        include_groups: Yield nested groups as well as leaves

    Yields:
        Layers in traversal order
    """
    stack: list[tuple[LayerGroup, Iterator[BaseLayer]]] = [(group, iter(list(group.layers)))]

    while stack:
        current, children = stack[-1]
        child = next(children, None)

        if child is None:
            stack.pop()
            if include_groups and stack:
                yield current
            continue

        if isinstance(child, LayerGroup):
            stack.append((child, iter(list(child.layers))))
        else:
            yield child


def get_all_layers(collection: Map | LayerGroup, layer_filter: LayerFilter | None = None) -> list[BaseLayer]:
    """
    Get all layers of a map or group, hidden ones included.

    Nested groups are part of the result: each group follows its own
    matching descendants.

    Args:
        collection: Map or layer group to get the layers from
        layer_filter: Optional predicate; only layers it accepts are returned

    Returns:
        List of layers in traversal order, empty if collection is neither a
        Map nor a LayerGroup
    """
    group = _root_group(collection)
    if group is None:
        logger.error(f"Collection must be a Map or LayerGroup, got {type(collection).__name__}")
        return []

    return [layer for layer in iter_layers(group) if layer_filter is None or layer_filter(layer)]


def get_layers_by_group(group: LayerGroup) -> list[Layer]:
    """
    Get the leaf layers of a group's subtree.

    Args:
        group: The group to flatten

    Returns:
        Leaf layers in traversal order, without any intermediate groups
    """
    if not isinstance(group, LayerGroup):
        logger.error(f"Expected a LayerGroup, got {type(group).__name__}")
        return []

    return list(iter_layers(group, include_groups=False))


def get_layer_position_info(layer: BaseLayer, group_or_map: Map | LayerGroup) -> PositionInfo | None:
    """
    Find the group directly containing a layer and the layer's index in it.

    The immediate children of a group are searched before descending into
    its nested groups, in order. The first match wins.

    The result is a snapshot: it is stale as soon as the tree changes.

    Args:
        layer: The layer to locate
        group_or_map: Group or map whose subtree to search

    Returns:
        PositionInfo, or None if the layer is not part of the subtree
    """
    root = _root_group(group_or_map)
    if root is None:
        logger.error(f"Expected a Map or LayerGroup, got {type(group_or_map).__name__}")
        return None

    stack = [root]
    while stack:
        group = stack.pop()
        for position, child in enumerate(group.layers):
            if child is layer:
                return PositionInfo(group_layer=group, position=position)

        # Reversed so the first child group is searched next
        stack.extend(reversed([child for child in group.layers if isinstance(child, LayerGroup)]))

    return None
