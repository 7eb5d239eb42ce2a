"""WMS GetLegendGraphic URL building."""

import logging
from typing import Mapping

from mapindex.core.config import LAYERS_PARAM, LEGEND_GRAPHIC_PARAMS
from mapindex.models.scene import BaseLayer, Layer
from mapindex.models.source import SourceKind
from mapindex.utils.url import append_query, object_to_request_string

logger = logging.getLogger(__name__)


def get_legend_graphic_url(layer: BaseLayer | None, extra_params: Mapping[str, str] | None = None) -> str | None:
    """
    Build the GetLegendGraphic URL of a layer. Designed for GeoServer.

    Supported sources:
      - TileWMSSource (first of its URLs)
      - ImageWMSSource

    Args:
        layer: The layer to build the legend URL for
        extra_params: Additional request parameters; they override the defaults

    Returns:
        Legend URL, or None if the layer or its source is not supported
    """
    if layer is None:
        logger.error("No layer passed to get_legend_graphic_url")
        return None

    source = layer.source if isinstance(layer, Layer) else None
    if source is None:
        logger.error(f"Invalid layer passed to get_legend_graphic_url: {layer.name!r} has no source")
        return None

    if source.kind == SourceKind.TILE_WMS:
        url = source.urls[0] if source.urls else ""
    elif source.kind == SourceKind.IMAGE_WMS:
        url = source.url or ""
    else:
        logger.warning(f'Source of "{layer.name}" ({source.kind.value}) is not supported by get_legend_graphic_url')
        return None

    params = {"LAYER": source.params.get(LAYERS_PARAM), **LEGEND_GRAPHIC_PARAMS}
    if extra_params:
        params.update(extra_params)

    return append_query(url, object_to_request_string(params))
