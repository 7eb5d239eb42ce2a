"""Layer and interaction lookups on a map.

All layer lookups run over ``get_all_layers`` and are recomputed per call.
Names and property values are not required to be unique: where a single
layer is returned, the first one in traversal order wins.
"""

import logging
from typing import Any, Callable, Sequence

from mapindex.core.config import LAYERS_PARAM
from mapindex.core.layer_tree import get_all_layers
from mapindex.models.feature import Feature
from mapindex.models.scene import BaseLayer, Interaction, Layer, Map, View
from mapindex.utils.feature_type import get_feature_type_name

logger = logging.getLogger(__name__)


def get_interactions_by_name(map: Map, name: str) -> list[Interaction]:
    """Get all interactions of a map with the given name property."""
    if not isinstance(map, Map):
        logger.debug("Input parameter map must be a Map")
        return []

    return [interaction for interaction in map.interactions if interaction.get("name") == name]


def get_interactions_by_class(map: Map, cls: type[Interaction]) -> list[Interaction]:
    """Get all interactions of a map that are instances of cls."""
    if not isinstance(map, Map):
        logger.debug("Input parameter map must be a Map")
        return []

    return [interaction for interaction in map.interactions if isinstance(interaction, cls)]


def get_layer_by_uid(map: Map, uid: int | str) -> BaseLayer | None:
    """
    Get a layer by its unique id.

    Args:
        map: Map to search
        uid: Layer uid; compared as string so '7' and 7 are equivalent

    Returns:
        The layer, or None if not found
    """
    for layer in get_all_layers(map):
        if str(layer.uid) == str(uid):
            return layer
    return None


def get_layer_by_name(map: Map, name: str) -> BaseLayer | None:
    """
    Get the first layer whose name property equals name.

    Args:
        map: Map to search
        name: Layer name

    Returns:
        The layer, or None if not found
    """
    for layer in get_all_layers(map):
        if layer.get("name") == name:
            return layer
    return None


def get_layer_by_name_param(map: Map, name: str) -> Layer | None:
    """
    Get the first layer whose source requests the given LAYERS parameter.

    Args:
        map: Map to search
        name: Value of the LAYERS request parameter (e.g. 'ns:roads')

    Returns:
        The layer, or None if not found
    """
    for layer in get_all_layers(map):
        source = getattr(layer, "source", None)
        if source is None:
            continue
        params = source.get_params()
        if params is not None and params.get(LAYERS_PARAM) == name:
            return layer
    return None


def get_layer_by_feature(
    map: Map,
    feature: Feature,
    namespaces: Sequence[str],
    type_name_resolver: Callable[[Feature], str | None] = get_feature_type_name,
) -> Layer | None:
    """
    Get the layer a feature was requested from.

    The feature's type name is qualified with each namespace in turn, so the
    order of namespaces decides which layer wins when several match.

    Args:
        map: Map to search
        feature: Feature to find the layer for
        namespaces: GeoServer namespaces to try, in order of precedence
        type_name_resolver: Extracts the unqualified type name of a feature

    Returns:
        The layer, or None if not found
    """
    type_name = type_name_resolver(feature)
    if type_name is None:
        logger.debug(f"Feature {feature.id!r} has no type name")
        return None

    for namespace in namespaces:
        layer = get_layer_by_name_param(map, f"{namespace}:{type_name}")
        if layer is not None:
            return layer
    return None


def get_layers_by_property(map: Map, key: str, value: Any) -> list[BaseLayer] | None:
    """
    Get all layers whose property key equals value.

    Args:
        map: Map to search
        key: Property key
        value: Property value

    Returns:
        Matching layers (possibly empty), or None if map or key is missing
    """
    if not map or not key:
        return None

    return [layer for layer in get_all_layers(map) if layer.get(key) == value]


def layer_in_resolution_range(layer: BaseLayer | None, view: View | None) -> bool:
    """
    Check whether a layer should be displayed at the view's resolution.

    The layer's minimum resolution is inclusive, its maximum exclusive.

    Args:
        layer: The layer to check
        view: The view to take the current resolution from

    Returns:
        True if the view resolution lies in the layer's range; False if the
        layer or view is missing or the view has no resolution yet
    """
    current_resolution = view.resolution if view is not None else None
    if layer is None or not current_resolution:
        # Cannot be determined, treat as not visible
        return False

    return layer.min_resolution <= current_resolution < layer.max_resolution
