"""CLI mode: query scenes described in YAML files."""

import logging
from pathlib import Path
from typing import Sequence

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from mapindex.core.config import DEFAULT_UNITS
from mapindex.core.layer_lookup import get_layer_by_feature, get_layer_by_name, layer_in_resolution_range
from mapindex.core.layer_tree import get_all_layers, get_layer_position_info, get_layers_by_group
from mapindex.core.legend import get_legend_graphic_url
from mapindex.core.scale_calculator import ScaleCalculator
from mapindex.models.feature import Feature
from mapindex.models.scene import BaseLayer, Layer, LayerGroup, Map
from mapindex.models.scene_config import SceneConfig

logger = logging.getLogger(__name__)


def load_config(config_path: str) -> dict:
    """
    Load a YAML scene file.

    Args:
        config_path: Path to YAML scene file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file is not valid YAML
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Scene file not found: {config_path}")

    with open(config_file) as f:
        config = yaml.safe_load(f)

    return config or {}


def validate_config(config: dict) -> SceneConfig:
    """
    Validate a scene configuration.

    Args:
        config: Configuration dictionary

    Returns:
        Validated scene configuration

    Raises:
        ValueError: If the configuration is invalid
    """
    try:
        return SceneConfig.model_validate(config)
    except ValidationError as e:
        raise ValueError(f"Scene configuration validation failed:\n{e}") from e


def load_scene(config_path: str) -> tuple[SceneConfig, Map]:
    """
    Load, validate and build the scene described by a YAML file.

    Args:
        config_path: Path to YAML scene file

    Returns:
        Tuple of (validated configuration, map)
    """
    logger.debug(f"Loading scene from: {config_path}")
    scene_config = validate_config(load_config(config_path))
    scene_map = scene_config.to_map()
    logger.debug(f"Loaded scene with {len(get_all_layers(scene_map))} layers")
    return scene_config, scene_map


def describe_layer(layer: BaseLayer) -> str:
    """One-line description of a layer for terminal output."""
    name = layer.name or "<unnamed>"
    if isinstance(layer, LayerGroup):
        return f"{name} [group, uid {layer.uid}]"
    kind = layer.source.kind.value if isinstance(layer, Layer) and layer.source else "no source"
    return f"{name} [{kind}, uid {layer.uid}]"


def _build_tree(branch: Tree, group: LayerGroup) -> None:
    for child in group.layers:
        node = branch.add(Text(describe_layer(child)))
        if isinstance(child, LayerGroup):
            _build_tree(node, child)


def _find_layer(scene_map: Map, name: str) -> BaseLayer | None:
    layer = get_layer_by_name(scene_map, name)
    if layer is None:
        logger.error(f"No layer named {name!r}")
    return layer


def _run(func):
    """Run a command body, mapping handled errors to exit code 1."""
    try:
        return func()
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


def run_layers(config_path: str, leaves_only: bool = False, visible_at_view: bool = False) -> int:
    """Print the flattened layer list of a scene."""

    def body():
        _, scene_map = load_scene(config_path)
        if leaves_only:
            layers = get_layers_by_group(scene_map.layer_group)
        else:
            layers = get_all_layers(scene_map)

        if visible_at_view:
            if scene_map.view is None or not scene_map.view.resolution:
                logger.warning("Scene has no view resolution; no layer is in range")
            layers = [layer for layer in layers if layer_in_resolution_range(layer, scene_map.view)]

        for layer in layers:
            print(describe_layer(layer))
        return 0

    return _run(body)


def run_tree(config_path: str, console: Console | None = None) -> int:
    """Render the layer tree of a scene."""

    def body():
        scene_config, scene_map = load_scene(config_path)
        tree = Tree(Text(scene_config.name or config_path))
        _build_tree(tree, scene_map.layer_group)
        (console or Console()).print(tree)
        return 0

    return _run(body)


def run_legend(config_path: str, layer_name: str, extra_params: dict[str, str] | None = None) -> int:
    """Print the legend graphic URL of a named layer."""

    def body():
        _, scene_map = load_scene(config_path)
        layer = _find_layer(scene_map, layer_name)
        if layer is None:
            return 1

        url = get_legend_graphic_url(layer, extra_params)
        if url is None:
            return 1

        print(url)
        return 0

    return _run(body)


def run_zoom(
    scale: str,
    config_path: str | None = None,
    resolutions: Sequence[float] | None = None,
    units: str | None = None,
) -> int:
    """Print the zoom level of a scale on a resolution ladder."""

    def body():
        ladder = resolutions
        zoom_units = units
        if config_path is not None:
            _, scene_map = load_scene(config_path)
            view = scene_map.view
            if view is not None:
                ladder = ladder or view.resolutions
                if zoom_units is None:
                    zoom_units = ScaleCalculator.units_for_projection(view.projection)

        if not ladder:
            raise ValueError("No resolutions given; pass --resolutions or a scene whose view has resolutions")

        zoom = ScaleCalculator.zoom_for_scale(scale, ladder, zoom_units or DEFAULT_UNITS)
        print(zoom)
        return 0

    return _run(body)


def run_scale(config_path: str, rounded: bool = False) -> int:
    """Print the scale of the scene's view."""

    def body():
        _, scene_map = load_scene(config_path)
        scale = ScaleCalculator.view_scale(scene_map.view, rounded=rounded)
        if scale is None:
            logger.error("Scene view has no resolution")
            return 1

        print(f"1:{scale:,}" if rounded else f"1:{scale:,.2f}")
        return 0

    return _run(body)


def run_position(config_path: str, layer_name: str) -> int:
    """Print the owning group and index of a named layer."""

    def body():
        _, scene_map = load_scene(config_path)
        layer = _find_layer(scene_map, layer_name)
        if layer is None:
            return 1

        info = get_layer_position_info(layer, scene_map)
        if info is None:
            logger.error(f"Layer {layer_name!r} is not part of the layer tree")
            return 1

        group_name = "<root>" if info.group_layer is scene_map.layer_group else describe_layer(info.group_layer)
        print(f"{group_name} {info.position}")
        return 0

    return _run(body)


def run_feature(config_path: str, feature_id: str, namespaces: Sequence[str] | None = None) -> int:
    """Print the layer a feature id belongs to."""

    def body():
        scene_config, scene_map = load_scene(config_path)
        search_namespaces = list(namespaces) if namespaces else scene_config.namespaces
        if not search_namespaces:
            raise ValueError("No namespaces given; pass --namespace or set namespaces in the scene file")

        layer = get_layer_by_feature(scene_map, Feature(id=feature_id), search_namespaces)
        if layer is None:
            logger.error(f"No layer found for feature {feature_id!r}")
            return 1

        print(describe_layer(layer))
        return 0

    return _run(body)
