"""Validation schema for YAML scene files and conversion to scene models."""

import math
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mapindex.core.config import DEFAULT_PROJECTION
from mapindex.models.scene import BaseLayer, Layer, LayerGroup, Map, View
from mapindex.models.source import ImageWMSSource, Source, TileWMSSource, VectorSource, XYZSource


class _ConfigModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class TileWMSSourceConfig(_ConfigModel):
    type: Literal["tile_wms"]
    urls: list[str] = Field(default_factory=list)
    params: dict[str, Any] = Field(default_factory=dict)
    attributions: str | None = None

    def to_source(self) -> Source:
        return TileWMSSource(urls=list(self.urls), params=dict(self.params), attributions=self.attributions)


class ImageWMSSourceConfig(_ConfigModel):
    type: Literal["image_wms"]
    url: str | None = None
    params: dict[str, Any] = Field(default_factory=dict)
    attributions: str | None = None

    def to_source(self) -> Source:
        return ImageWMSSource(url=self.url, params=dict(self.params), attributions=self.attributions)


class XYZSourceConfig(_ConfigModel):
    type: Literal["xyz"]
    url_template: str
    attributions: str | None = None

    def to_source(self) -> Source:
        return XYZSource(url_template=self.url_template, attributions=self.attributions)


class VectorSourceConfig(_ConfigModel):
    type: Literal["vector"]
    attributions: str | None = None

    def to_source(self) -> Source:
        return VectorSource(attributions=self.attributions)


SourceConfig = Annotated[
    Union[TileWMSSourceConfig, ImageWMSSourceConfig, XYZSourceConfig, VectorSourceConfig],
    Field(discriminator="type"),
]


class SceneLayerConfig(_ConfigModel):
    """A leaf layer or a group of layers."""

    type: Literal["layer", "group"] = "layer"
    name: str | None = None
    min_resolution: float = Field(default=0.0, ge=0.0)
    max_resolution: float = math.inf
    visible: bool = True
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)
    properties: dict[str, Any] = Field(default_factory=dict)
    source: SourceConfig | None = None
    layers: list["SceneLayerConfig"] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_layer_shape(self) -> "SceneLayerConfig":
        if self.type == "group" and self.source is not None:
            raise ValueError(f"Group {self.name!r} cannot have a source")
        if self.type == "layer" and self.layers:
            raise ValueError(f"Layer {self.name!r} cannot have child layers; use type: group")
        if self.min_resolution >= self.max_resolution:
            raise ValueError(
                f"Layer {self.name!r}: min_resolution ({self.min_resolution}) "
                f"must be below max_resolution ({self.max_resolution})"
            )
        return self

    def to_layer(self) -> BaseLayer:
        """Build the scene layer (recursively for groups)."""
        properties = dict(self.properties)
        if self.name is not None:
            properties["name"] = self.name

        common = {
            "properties": properties,
            "min_resolution": self.min_resolution,
            "max_resolution": self.max_resolution,
            "visible": self.visible,
            "opacity": self.opacity,
        }

        if self.type == "group":
            return LayerGroup(layers=[child.to_layer() for child in self.layers], **common)

        source = self.source.to_source() if self.source is not None else None
        return Layer(source=source, **common)


class ViewConfig(_ConfigModel):
    resolution: float | None = Field(default=None, gt=0.0)
    resolutions: list[Annotated[float, Field(gt=0.0)]] | None = None
    projection: str = DEFAULT_PROJECTION

    def to_view(self) -> View:
        return View(
            resolution=self.resolution,
            resolutions=list(self.resolutions) if self.resolutions is not None else None,
            projection=self.projection,
        )


class SceneConfig(_ConfigModel):
    """Top level of a scene file."""

    name: str | None = None
    description: str | None = None
    view: ViewConfig | None = None
    # GeoServer namespaces used to match features to layers, in order of precedence
    namespaces: list[str] = Field(default_factory=list)
    layers: list[SceneLayerConfig] = Field(default_factory=list)

    def to_map(self) -> Map:
        """Build the map described by this configuration."""
        return Map(
            layer_group=LayerGroup(layers=[layer.to_layer() for layer in self.layers]),
            view=self.view.to_view() if self.view is not None else None,
        )


SceneLayerConfig.model_rebuild()
