"""Pytest configuration and fixtures."""

from pathlib import Path
from types import SimpleNamespace

import pytest

from mapindex.models.scene import Layer, LayerGroup, Map, View
from mapindex.models.source import ImageWMSSource, TileWMSSource, VectorSource


@pytest.fixture
def tree():
    """
    Fixture for a small nested layer tree.

    Layout:
        Group1
          LayerA (tiled WMS)
          Group2
            LayerB (single image WMS)
            LayerC (vector)
    """
    layer_a = Layer(
        properties={"name": "LayerA", "category": "base"},
        source=TileWMSSource(urls=["http://x/wms"], params={"LAYERS": "ns:a"}),
    )
    layer_b = Layer(
        properties={"name": "LayerB", "category": "overlay"},
        source=ImageWMSSource(url="http://x/wms?map=b", params={"LAYERS": "ns:b"}),
    )
    layer_c = Layer(properties={"name": "LayerC", "category": "overlay"}, source=VectorSource())
    group2 = LayerGroup(properties={"name": "Group2"}, layers=[layer_b, layer_c])
    group1 = LayerGroup(properties={"name": "Group1"}, layers=[layer_a, group2])

    return SimpleNamespace(group1=group1, group2=group2, layer_a=layer_a, layer_b=layer_b, layer_c=layer_c)


@pytest.fixture
def scene_map(tree):
    """Fixture for a map holding the tree plus a top-level layer."""
    layer_d = Layer(properties={"name": "LayerD"})
    scene = Map(
        layer_group=LayerGroup(layers=[tree.group1, layer_d]),
        view=View(resolution=15, resolutions=[100, 50, 25, 12.5]),
    )
    tree.layer_d = layer_d
    return scene


@pytest.fixture
def scene_file():
    """Fixture for the path of the sample scene file."""
    return Path(__file__).parent / "fixtures" / "scene.yaml"
