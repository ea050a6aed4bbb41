"""Tests for the areamap command line."""

import cv2

from areamap_cli.cli import build_parser, main


def test_area_command(config_path, capsys):
    assert main(["area", str(config_path)]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("campus\t4 vertices\t")
    assert lines[0].endswith("simple")
    assert "km²" in lines[0]
    assert lines[1].startswith("plaza\t3 vertices\t")


def test_render_command(config_path, tmp_path):
    output = tmp_path / "areas.png"
    assert main(["render", str(config_path), "-o", str(output), "--width", "200", "--height", "150"]) == 0

    image = cv2.imread(str(output))
    assert image.shape == (150, 200, 3)
    assert (image != 255).any()


def test_render_focus_on_region(config_path, tmp_path):
    output = tmp_path / "plaza.png"
    assert main(["render", str(config_path), "-o", str(output), "--focus", "plaza"]) == 0
    assert output.exists()


def test_unknown_focus_fails(config_path, tmp_path):
    output = tmp_path / "nope.png"
    assert main(["render", str(config_path), "-o", str(output), "--focus", "nope"]) == 1
    assert not output.exists()


def test_missing_config_fails(tmp_path, capsys):
    assert main(["area", str(tmp_path / "missing.yaml")]) == 1
    assert "Config file not found" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_parser_requires_output_for_render():
    parser = build_parser()
    args = parser.parse_args(["render", "areas.yaml", "-o", "out.png", "--focus", "campus"])
    assert (args.command, args.output, args.focus) == ("render", "out.png", "campus")


def test_malformed_config_fails(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("regions: [\n  - name: x\n")
    assert main(["area", str(path)]) == 1
    assert "Invalid YAML" in capsys.readouterr().err


def test_non_mapping_config_fails(tmp_path, capsys):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    assert main(["area", str(path)]) == 1
    assert "must be a mapping" in capsys.readouterr().err
