"""Scene graph models: map, view, layers, groups and interactions."""

import itertools
import math
from dataclasses import dataclass, field
from typing import Any

from mapindex.core.config import DEFAULT_PROJECTION
from mapindex.models.source import Source

_uid_counter = itertools.count(1)


def _next_uid() -> int:
    return next(_uid_counter)


@dataclass(eq=False)
class BaseLayer:
    """Common state of leaf layers and layer groups.

    Layers compare by identity: two layers with equal settings are still
    different nodes of the tree.
    """

    properties: dict[str, Any] = field(default_factory=dict)
    min_resolution: float = 0.0  # inclusive
    max_resolution: float = math.inf  # exclusive
    visible: bool = True
    opacity: float = 1.0
    uid: int = field(default_factory=_next_uid, init=False)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a named property."""
        return self.properties.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a named property."""
        self.properties[key] = value

    @property
    def name(self) -> str | None:
        return self.get("name")


@dataclass(eq=False)
class Layer(BaseLayer):
    """A renderable leaf layer."""

    source: Source | None = None


@dataclass(eq=False)
class LayerGroup(BaseLayer):
    """A container of further layers and groups."""

    layers: list[BaseLayer] = field(default_factory=list)


@dataclass
class View:
    """Current view state of a map."""

    resolution: float | None = None
    resolutions: list[float] | None = None
    projection: str = DEFAULT_PROJECTION


@dataclass(eq=False)
class Interaction:
    """A user interaction attached to a map (drag, zoom, draw, ...)."""

    properties: dict[str, Any] = field(default_factory=dict)
    active: bool = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)


@dataclass(eq=False)
class Map:
    """Root of a scene: a layer group, a view and interactions."""

    layer_group: LayerGroup = field(default_factory=LayerGroup)
    view: View | None = None
    interactions: list[Interaction] = field(default_factory=list)

    @property
    def layers(self) -> list[BaseLayer]:
        return self.layer_group.layers


@dataclass(frozen=True)
class PositionInfo:
    """Where a layer sits among its immediate siblings."""

    group_layer: LayerGroup
    position: int
