import json

import pytest

from hang import main


@pytest.fixture
def project_file(tmp_path, project_state):
    path = tmp_path / "atrium.json"
    path.write_text(json.dumps({"schemaVersion": 1, "state": project_state}), encoding="utf-8")
    return str(path)


def test_svg_and_bom(tmp_path, project_file, capsys, restore_root_logging):
    svg = tmp_path / "front.svg"
    assert main(["--json", project_file, "--output", str(svg), "--skip-validation",
                 "--log-level", "WARNING"]) == 0
    assert svg.exists()
    out = capsys.readouterr().out
    assert "BILL OF MATERIALS - ATRIUM" in out
    assert "LAYOUT ADVISORY REPORT" not in out


def test_rear_view_with_overrides(tmp_path, project_file, capsys, restore_root_logging):
    svg = tmp_path / "rear.svg"
    assert main(["--json", project_file, "--output", str(svg), "--view", "rear",
                 "--rotation", "390", "--strength", "2", "--log-level", "WARNING"]) == 0
    out = capsys.readouterr().out
    assert "View: rear, rotation 30.0°, strength 1.00" in out
    assert "LAYOUT ADVISORY REPORT" in out


def test_bom_only_skips_drawing(tmp_path, project_file, capsys, restore_root_logging):
    svg = tmp_path / "never.svg"
    assert main(["--json", project_file, "--output", str(svg), "--bom-only",
                 "--log-level", "WARNING"]) == 0
    assert not svg.exists()
    assert "BILL OF MATERIALS" in capsys.readouterr().out


def test_json_is_required(restore_root_logging):
    with pytest.raises(SystemExit):
        main([])
