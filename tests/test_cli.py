"""Tests for CLI command runners."""

import io

from rich.console import Console

from mapindex.cli import (
    run_feature,
    run_layers,
    run_legend,
    run_position,
    run_scale,
    run_tree,
    run_zoom,
)


def _output_names(output: str) -> list[str]:
    return [line.split(" [")[0] for line in output.strip().splitlines()]


def test_run_layers(scene_file, capsys):
    """Test listing all layers, groups included."""
    assert run_layers(str(scene_file)) == 0

    assert _output_names(capsys.readouterr().out) == ["Basemap", "Roads", "Rivers", "Nested", "Overlays"]


def test_run_layers_leaves_only(scene_file, capsys):
    """Test listing leaf layers only."""
    assert run_layers(str(scene_file), leaves_only=True) == 0

    assert _output_names(capsys.readouterr().out) == ["Basemap", "Roads", "Rivers"]


def test_run_layers_visible_at_view(scene_file, capsys):
    """Test filtering by the view resolution (15)."""
    assert run_layers(str(scene_file), leaves_only=True, visible_at_view=True) == 0

    assert _output_names(capsys.readouterr().out) == ["Basemap", "Roads"]


def test_run_layers_missing_file(tmp_path):
    """Test that a missing scene file fails with exit code 1."""
    assert run_layers(str(tmp_path / "missing.yaml")) == 1


def test_run_layers_invalid_scene(tmp_path):
    """Test that an invalid scene fails with exit code 1."""
    path = tmp_path / "bad.yaml"
    path.write_text("layers:\n  - name: L\n    source: {type: wfs}\n")

    assert run_layers(str(path)) == 1


def test_run_tree(scene_file):
    """Test rendering the layer tree."""
    buffer = io.StringIO()

    assert run_tree(str(scene_file), console=Console(file=buffer, width=120)) == 0

    output = buffer.getvalue()
    assert "Test Scene" in output
    assert "Rivers [image_wms" in output
    assert output.index("Overlays") < output.index("Nested") < output.index("Rivers")


def test_run_legend(scene_file, capsys):
    """Test printing a layer's legend URL."""
    assert run_legend(str(scene_file), "Roads", {"WIDTH": "20"}) == 0

    url = capsys.readouterr().out.strip()
    assert url.startswith("http://x/wms?LAYER=osm:roads&VERSION=1.3.0")
    assert url.endswith("&WIDTH=20")


def test_run_legend_failures(scene_file):
    """Test unknown layers and unsupported sources."""
    assert run_legend(str(scene_file), "Missing") == 1
    assert run_legend(str(scene_file), "Basemap") == 1


def test_run_zoom_with_resolutions(capsys):
    """Test zoom lookup on an explicit ladder."""
    assert run_zoom("50000", resolutions=[100, 50, 25, 12.5]) == 0
    assert capsys.readouterr().out.strip() == "3"

    assert run_zoom("not a number", resolutions=[100, 50]) == 0
    assert capsys.readouterr().out.strip() == "0"


def test_run_zoom_with_config(scene_file, capsys):
    """Test zoom lookup on the scene view's ladder."""
    assert run_zoom("180000", config_path=str(scene_file)) == 0

    assert capsys.readouterr().out.strip() == "1"


def test_run_zoom_without_ladder():
    """Test that a ladder is required."""
    assert run_zoom("1000") == 1


def test_run_scale(scene_file, capsys):
    """Test printing the view scale."""
    assert run_scale(str(scene_file), rounded=True) == 0
    assert capsys.readouterr().out.strip() == "1:53,600"

    assert run_scale(str(scene_file)) == 0
    assert capsys.readouterr().out.strip().startswith("1:53,57")


def test_run_scale_without_view(tmp_path):
    """Test that a scene without view resolution fails."""
    path = tmp_path / "scene.yaml"
    path.write_text("layers: []\n")

    assert run_scale(str(path)) == 1


def test_run_position(scene_file, capsys):
    """Test printing a layer's position."""
    assert run_position(str(scene_file), "Rivers") == 0
    output = capsys.readouterr().out.strip()
    assert output.startswith("Nested [group")
    assert output.endswith(" 0")

    assert run_position(str(scene_file), "Overlays") == 0
    assert capsys.readouterr().out.strip() == "<root> 1"


def test_run_feature(scene_file, capsys):
    """Test finding the layer of a feature id."""
    assert run_feature(str(scene_file), "roads.7") == 0
    assert capsys.readouterr().out.startswith("Roads [")

    assert run_feature(str(scene_file), "rivers.1", namespaces=["topp"]) == 0
    assert capsys.readouterr().out.startswith("Rivers [")


def test_run_feature_not_found(scene_file):
    """Test features without a matching layer."""
    assert run_feature(str(scene_file), "roads.7", namespaces=["topp"]) == 1
    assert run_feature(str(scene_file), "17") == 1
