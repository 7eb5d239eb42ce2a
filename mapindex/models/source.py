"""Layer source models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar


class SourceKind(str, Enum):
    """Closed set of source kinds a layer can carry."""

    TILE_WMS = "tile_wms"
    IMAGE_WMS = "image_wms"
    XYZ = "xyz"
    VECTOR = "vector"


@dataclass(eq=False)
class Source:
    """Base class for the data-fetching configuration of a layer."""

    kind: ClassVar[SourceKind]

    attributions: str | None = None

    def get_params(self) -> dict[str, Any] | None:
        """
        Get the request parameters of this source.

        Returns:
            Parameter mapping, or None if the source kind has no request parameters
        """
        return None


@dataclass(eq=False)
class TileWMSSource(Source):
    """Tiled WMS source, possibly spread over several URLs."""

    kind: ClassVar[SourceKind] = SourceKind.TILE_WMS

    urls: list[str] = field(default_factory=list)
    params: dict[str, Any] = field(default_factory=dict)

    def get_params(self) -> dict[str, Any]:
        return self.params


@dataclass(eq=False)
class ImageWMSSource(Source):
    """Single image WMS source."""

    kind: ClassVar[SourceKind] = SourceKind.IMAGE_WMS

    url: str | None = None
    params: dict[str, Any] = field(default_factory=dict)

    def get_params(self) -> dict[str, Any]:
        return self.params


@dataclass(eq=False)
class XYZSource(Source):
    """Slippy map tile source addressed by a {z}/{x}/{y} template."""

    kind: ClassVar[SourceKind] = SourceKind.XYZ

    url_template: str = ""


@dataclass(eq=False)
class VectorSource(Source):
    """In-memory vector features."""

    kind: ClassVar[SourceKind] = SourceKind.VECTOR

