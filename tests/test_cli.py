import os

import yaml

from tumblecube.cli import main


def test_no_arguments_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out.lower()


def test_create_and_validate_config(tmp_path):
    path = str(tmp_path / "config.yaml")

    assert main(["create-config", "--output", path]) == 0
    assert main(["validate-config", path]) == 0
    # refuses to overwrite without --force
    assert main(["create-config", "--output", path]) == 1
    assert main(["create-config", "--output", path, "--force"]) == 0


def test_validate_config_reports_errors(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"goal": {"position": [10, 10]}}), encoding="utf-8")

    assert main(["validate-config", str(path)]) == 1


def test_validate_config_strict_fails_on_warnings(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"explorer": {"max_moves": None}}), encoding="utf-8")

    assert main(["validate-config", str(path)]) == 0
    assert main(["validate-config", str(path), "--strict"]) == 1


def test_validate_missing_config(tmp_path):
    assert main(["validate-config", str(tmp_path / "missing.yaml")]) == 1


def test_show_piece(capsys):
    assert main(["show-piece"]) == 0
    out = capsys.readouterr().out
    assert "Footprint" in out
    assert "■ ■ ■" in out


def test_show_piece_missing_file(tmp_path):
    assert main(["show-piece", "--shape", str(tmp_path / "missing.json")]) == 1


def test_render(tmp_path):
    output = str(tmp_path / "board.png")
    assert main(["render", "--output", output, "--seed", "3", "--cell-px", "16"]) == 0
    assert os.path.exists(output)


def test_run(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "explorer": {"max_moves": 500},
        "runner": {"log_dir": str(tmp_path / "logs"), "max_scenarios": 3, "seed": 11},
    }), encoding="utf-8")

    assert main(["run", "--config", str(path)]) == 0
    assert os.listdir(tmp_path / "logs")
