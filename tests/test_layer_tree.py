"""Tests for layer tree flattening and position lookup."""

import logging

from mapindex.core.layer_tree import get_all_layers, get_layer_position_info, get_layers_by_group, iter_layers
from mapindex.models.scene import Layer, LayerGroup, Map


def test_get_all_layers_includes_groups_after_descendants(tree):
    """Test traversal order: leaves when reached, nested groups after their children."""
    layers = get_all_layers(tree.group1)

    assert layers == [tree.layer_a, tree.layer_b, tree.layer_c, tree.group2]


def test_get_all_layers_of_map(tree, scene_map):
    """Test that maps are flattened through their root group."""
    layers = get_all_layers(scene_map)

    assert layers == [tree.layer_a, tree.layer_b, tree.layer_c, tree.group2, tree.group1, tree.layer_d]


def test_get_all_layers_with_filter(tree, scene_map):
    """Test that the filter applies to leaves and groups alike."""
    overlays = get_all_layers(scene_map, lambda layer: layer.get("category") == "overlay")
    groups = get_all_layers(scene_map, lambda layer: isinstance(layer, LayerGroup))

    assert overlays == [tree.layer_b, tree.layer_c]
    assert groups == [tree.group2, tree.group1]


def test_get_all_layers_invalid_collection(caplog):
    """Test that invalid collections are logged and yield no layers."""
    with caplog.at_level(logging.ERROR):
        assert get_all_layers(Layer()) == []
        assert get_all_layers(None) == []

    assert "must be a Map or LayerGroup" in caplog.text


def test_get_all_layers_is_idempotent(scene_map):
    """Test that repeated flattening of an unchanged tree gives the same result."""
    assert get_all_layers(scene_map) == get_all_layers(scene_map)


def test_get_all_layers_reflects_mutation(tree, scene_map):
    """Test that results are recomputed after the tree changes."""
    before = get_all_layers(scene_map)
    extra = Layer(properties={"name": "Extra"})
    tree.group2.layers.append(extra)

    after = get_all_layers(scene_map)

    assert extra not in before
    assert after.index(extra) == after.index(tree.layer_c) + 1


def test_get_layers_by_group_leaves_only(tree):
    """Test that subtree flattening omits intermediate groups."""
    assert get_layers_by_group(tree.group1) == [tree.layer_a, tree.layer_b, tree.layer_c]
    assert get_layers_by_group(tree.group2) == [tree.layer_b, tree.layer_c]


def test_get_layers_by_group_counts_leaves():
    """Test that leaf-only flattening counts every leaf of an irregular tree."""
    empty = LayerGroup()
    deep = LayerGroup(layers=[LayerGroup(layers=[LayerGroup(layers=[Layer()])]), empty, Layer()])
    root = LayerGroup(layers=[Layer(), deep, LayerGroup()])

    assert len(get_layers_by_group(root)) == 3
    assert get_layers_by_group(empty) == []


def test_get_layers_by_group_invalid_input():
    """Test that non-group input yields no layers."""
    assert get_layers_by_group(Layer()) == []


def test_iter_layers_deep_nesting():
    """Test that very deep trees are walked without hitting the recursion limit."""
    leaf = Layer()
    node = LayerGroup(layers=[leaf])
    for _ in range(5000):
        node = LayerGroup(layers=[node])

    assert list(iter_layers(node, include_groups=False)) == [leaf]
    assert get_layer_position_info(leaf, node).position == 0


def test_position_info_nested(tree):
    """Test locating a layer inside a nested group."""
    info = get_layer_position_info(tree.layer_c, tree.group1)

    assert info.group_layer is tree.group2
    assert info.position == 1


def test_position_info_immediate_child(tree):
    """Test locating a direct child."""
    info = get_layer_position_info(tree.group2, tree.group1)

    assert info.group_layer is tree.group1
    assert info.position == 1


def test_position_info_map(tree, scene_map):
    """Test that maps are searched through their root group."""
    info = get_layer_position_info(tree.layer_d, scene_map)

    assert info.group_layer is scene_map.layer_group
    assert info.position == 1

    assert get_layer_position_info(tree.layer_b, scene_map).group_layer is tree.group2


def test_position_info_not_found(tree):
    """Test that layers outside the subtree have no position."""
    assert get_layer_position_info(Layer(), tree.group1) is None
    assert get_layer_position_info(tree.layer_a, tree.group2) is None


def test_position_info_searches_siblings_in_order():
    """Test that earlier sibling groups are searched first."""
    leaf = Layer()
    first = LayerGroup(layers=[LayerGroup(layers=[leaf])])
    second = LayerGroup(layers=[Layer()])
    root = Map(layer_group=LayerGroup(layers=[first, second]))

    info = get_layer_position_info(leaf, root)

    assert info.group_layer is first.layers[0]
    assert info.position == 0


def test_position_info_invalid_root():
    """Test that invalid roots yield no position."""
    assert get_layer_position_info(Layer(), Layer()) is None


def test_layers_compare_by_identity():
    """Test that equally configured layers are distinct nodes."""
    twin_a = Layer(properties={"name": "Twin"})
    twin_b = Layer(properties={"name": "Twin"})
    group = LayerGroup(layers=[twin_a, twin_b])

    assert twin_a != twin_b
    assert twin_a.uid != twin_b.uid
    assert get_layer_position_info(twin_b, group).position == 1
