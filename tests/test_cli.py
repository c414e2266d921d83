import json
from types import SimpleNamespace

import pytest

import boresizer.__main__ as cli

FAST_ARGS = ["--max-iterations", "6", "--radius-step", "0.5", "--angle-step", "30"]


def _write_rows(tmp_path, rows):
    path = tmp_path / "rows.json"
    path.write_text(json.dumps({"cables": rows}), encoding="utf-8")
    return path


def test_main_prints_json_and_writes_output(tmp_path, capsys):
    rows_path = _write_rows(
        tmp_path,
        [
            {"selectedCable": "custom", "customName": "Power", "customDiameter": 1.2, "quantity": 2},
            {"selectedCable": {"name": "USB", "diameter": 0.5}, "quantity": 2},
        ],
    )
    output_path = tmp_path / "out" / "bore.json"

    cli.main([str(rows_path), *FAST_ARGS, "--seed", "7", "--json", "--output", str(output_path)])

    printed = json.loads(capsys.readouterr().out)
    written = json.loads(output_path.read_text(encoding="utf-8"))
    assert printed == written
    assert printed["bore"]["name"] == "enclose"
    assert len(printed["cables"]) == 4
    assert {c["name"] for c in printed["cables"]} == {"Power", "USB"}


def test_main_passes_overrides_to_generate_bore(tmp_path, monkeypatch, capsys):
    rows_path = _write_rows(tmp_path, [{"selectedCable": "custom", "customDiameter": 1, "quantity": 1}])
    calls = []

    def _generate(rows, config, rng):
        calls.append((rows, config, rng))
        return SimpleNamespace(metadata={"warnings": ["careful"]})

    monkeypatch.setattr(cli, "generate_bore", _generate)
    monkeypatch.setattr(cli, "format_result", lambda result: "report")

    cli.main([str(rows_path), *FAST_ARGS, "--max-circles", "3", "--max-diameter", "4"])

    (rows, config, rng), = calls
    assert len(rows) == 1
    assert config.max_iterations == 6
    assert config.radius_step_size == 0.5
    assert config.angle_step_size == 30.0
    assert config.max_circles == 3
    assert config.max_diameter == 4.0
    assert rng is None
    assert capsys.readouterr().out == "report\nwarning: careful\n"


def test_main_exits_on_input_error(tmp_path, capsys):
    rows_path = _write_rows(tmp_path, [{"selectedCable": "custom", "customDiameter": 50, "quantity": 1}])

    with pytest.raises(SystemExit) as exc:
        cli.main([str(rows_path), *FAST_ARGS, "--max-diameter", "10"])

    assert exc.value.code == 1
    assert "Diameter exceeds maximum limit" in capsys.readouterr().err


def test_main_rejects_invalid_step(tmp_path):
    rows_path = _write_rows(tmp_path, [])

    with pytest.raises(SystemExit) as exc:
        cli.main([str(rows_path), "--radius-step", "0"])

    assert exc.value.code == 2


@pytest.mark.parametrize(
    "content, message",
    [
        ("{not json", "cannot read cable rows"),
        (json.dumps({"cables": [{"selectedCable": 42, "quantity": 1}]}), "invalid selectedCable"),
        (json.dumps({"cables": "HDMI"}), "expected a list of cable rows"),
    ],
)
def test_main_exits_on_unreadable_rows(tmp_path, capsys, content, message):
    rows_path = tmp_path / "rows.json"
    rows_path.write_text(content, encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        cli.main([str(rows_path), *FAST_ARGS])

    assert exc.value.code == 1
    assert message in capsys.readouterr().err


def test_main_exits_on_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main([str(tmp_path / "missing.json"), *FAST_ARGS])

    assert exc.value.code == 1
    assert "cannot read cable rows" in capsys.readouterr().err
