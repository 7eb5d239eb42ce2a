"""Feature model."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class Feature:
    """A vector feature as delivered by a WFS or GetFeatureInfo response.

    Server generated ids follow the ``<typeName>.<fid>`` convention,
    e.g. ``roads.42``.
    """

    id: str | int | None = None
    properties: dict[str, Any] = field(default_factory=dict)
    geometry: Any = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)
