import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from roadroute import cli

SPLIT_NETWORK = """
name: split
junctions:
  - {id: 1, name: West A}
  - {id: 2, name: West B}
  - {id: 3, name: East A}
  - {id: 4, name: East B}
roads:
  - {from: 1, to: 2, distance: 1, base_time: 5}
  - {from: 3, to: 4, distance: 1, base_time: 5}
"""


def extract_json_from_stdout(output: str) -> str:
    """Return the JSON object from stdout that may include log lines."""
    return output[output.find("{") : output.rfind("}") + 1]


@pytest.fixture
def split_network(tmp_path: Path) -> Path:
    path = tmp_path / "split.yaml"
    path.write_text(SPLIT_NETWORK, encoding="utf-8")
    return path


def _exit_code(argv) -> int:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(argv)
    return exc_info.value.code


# Helpers


def test_format_table_clips_cells() -> None:
    table = cli._format_table(["H1", "H2"], [["abc", "1"], ["defghi", "2"]], max_col_width=5)
    assert "H1" in table and "H2" in table
    assert "de..." in table
    assert cli._format_table(["H"], []) == ""


@pytest.mark.parametrize(
    "value,expected",
    [(20.0, "20"), (28.5, "28.5"), (8.7, "8.7"), (1234.567, "1,234.57"), ("n/a", "n/a")],
)
def test_format_cost(value, expected) -> None:
    assert cli._format_cost(value) == expected


# route


def test_route_default_network(capsys) -> None:
    cli.main(["route", "1", "3"])
    out = capsys.readouterr().out
    assert "Path: Liberty Chowk -> Kalma Chowk -> Mall Road" in out
    assert "Total Time: 20 minutes" in out
    assert "Total Distance: 8.7 km" in out
    assert "Roads: 2" in out


def test_route_by_name(capsys) -> None:
    cli.main(["route", "Liberty Chowk", "model town"])
    out = capsys.readouterr().out
    assert "Path: Liberty Chowk -> Kalma Chowk -> Gulberg Main -> Model Town" in out
    assert "Total Time: 21 minutes" in out


def test_route_with_traffic(capsys) -> None:
    cli.main(["route", "1", "3", "--traffic", "1", "2", "2.0"])
    assert "Total Time: 28 minutes" in capsys.readouterr().out


def test_route_with_repeated_traffic_does_not_compound(capsys) -> None:
    cli.main(["route", "1", "3", "-t", "1", "2", "2", "-t", "2", "1", "2"])
    assert "Total Time: 28 minutes" in capsys.readouterr().out


def test_route_with_level(capsys) -> None:
    cli.main(["route", "1", "3", "--level", "Kalma Chowk", "Liberty Chowk", "heavy"])
    assert "Total Time: 36 minutes" in capsys.readouterr().out


def test_route_json(capsys) -> None:
    cli.main(["--quiet", "route", "1", "8", "--json"])
    payload = json.loads(extract_json_from_stdout(capsys.readouterr().out))
    assert payload["path"] == [1, 2, 6, 8]
    assert payload["totalMinutes"] == 21
    assert payload["totalKm"] == pytest.approx(9.2)
    assert payload["names"] == ["Liberty Chowk", "Kalma Chowk", "Gulberg Main", "Model Town"]


def test_route_same_junction(capsys) -> None:
    cli.main(["route", "4", "4"])
    out = capsys.readouterr().out
    assert "Path: Jail Road" in out
    assert "Total Time: 0 minutes" in out


def test_route_custom_network(split_network: Path, capsys) -> None:
    cli.main(["route", "1", "2", "--network", str(split_network)])
    assert "Path: West A -> West B" in capsys.readouterr().out


# route errors


def test_route_unknown_junction(capsys) -> None:
    assert _exit_code(["route", "1", "99"]) == 1
    assert "ERROR: Unknown junction '99'." in capsys.readouterr().out


def test_route_unknown_name(capsys) -> None:
    assert _exit_code(["route", "Nowhere", "1"]) == 1
    assert "ERROR: Unknown junction 'Nowhere'." in capsys.readouterr().out


def test_route_no_route(split_network: Path, capsys) -> None:
    assert _exit_code(["route", "1", "3", "-n", str(split_network)]) == 1
    assert "ERROR: No route from junction 1 to junction 3." in capsys.readouterr().out


def test_route_road_not_found(capsys) -> None:
    assert _exit_code(["route", "1", "3", "--traffic", "1", "3", "2"]) == 1
    assert "ERROR: No road between junctions 1 and 3." in capsys.readouterr().out


@pytest.mark.parametrize("multiplier", ["0", "-2", "abc", "inf"])
def test_route_invalid_multiplier(multiplier, capsys) -> None:
    assert _exit_code(["route", "1", "3", "--traffic", "1", "2", multiplier]) == 1
    assert "ERROR: Traffic multiplier must be" in capsys.readouterr().out


def test_route_unknown_level(capsys) -> None:
    assert _exit_code(["route", "1", "3", "--level", "1", "2", "gridlock"]) == 1
    assert "Unknown traffic level 'gridlock'" in capsys.readouterr().out


def test_missing_network_file(tmp_path: Path, capsys) -> None:
    missing = tmp_path / "missing.yaml"
    assert _exit_code(["route", "1", "2", "--network", str(missing)]) == 1
    assert "ERROR: Network file not found" in capsys.readouterr().out


def test_invalid_network_schema(tmp_path: Path, capsys) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("roads:\n  - {from: 1, to: 2, distance: -1, base_time: 1}\n")
    assert _exit_code(["inspect", "-n", str(bad)]) == 1
    assert "ERROR: Invalid network" in capsys.readouterr().out


def test_invalid_network_reference(tmp_path: Path, capsys) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text(
        "junctions:\n  - {id: 1, name: A}\n"
        "roads:\n  - {from: 1, to: 2, distance: 1, base_time: 1}\n"
    )
    assert _exit_code(["inspect", "-n", str(bad)]) == 1
    assert "undeclared junction 2" in capsys.readouterr().out


# inspect / junction


def test_inspect_summary(capsys) -> None:
    cli.main(["inspect"])
    out = capsys.readouterr().out
    assert "NETWORK SUMMARY" in out
    assert "Junctions: 8" in out
    assert "Roads: 8" in out
    assert "Liberty Chowk" in out
    assert "ROADS" not in out


def test_inspect_detail(capsys) -> None:
    cli.main(["inspect", "--detail"])
    out = capsys.readouterr().out
    assert "ROADS" in out
    assert "Current min" in out
    assert "Ferozepur Road" in out


def test_junction_by_id(capsys) -> None:
    cli.main(["junction", "5"])
    out = capsys.readouterr().out
    assert "Name: Township" in out
    assert "ID: 5" in out


def test_junction_by_name_case_insensitive(capsys) -> None:
    cli.main(["junction", "gulberg main"])
    assert "ID: 6" in capsys.readouterr().out


def test_junction_by_prefix(capsys) -> None:
    cli.main(["junction", "Kal"])
    out = capsys.readouterr().out
    assert "Junctions starting with 'Kal'" in out
    assert "Kalma Chowk" in out


def test_junction_no_match(capsys) -> None:
    assert _exit_code(["junction", "Zzz"]) == 1
    assert "No junction matches 'Zzz'" in capsys.readouterr().out


# serve / main


def test_serve_runs_uvicorn() -> None:
    with patch("uvicorn.run") as run:
        cli.main(["serve", "--port", "9090"])
    run.assert_called_once()
    _, kwargs = run.call_args
    assert kwargs["port"] == 9090
    assert kwargs["host"] == "0.0.0.0"


def test_no_args_prints_help(capsys) -> None:
    assert _exit_code([]) == 0
    assert "usage: roadroute" in capsys.readouterr().out


def test_verbose_and_quiet_set_levels() -> None:
    root = logging.getLogger("roadroute")
    cli.main(["--verbose", "inspect"])
    assert root.level == logging.DEBUG
    cli.main(["--quiet", "inspect"])
    assert root.level == logging.WARNING
    cli.main(["inspect"])
    assert root.level == logging.INFO


def test_main_uses_sys_argv(capsys) -> None:
    with patch("sys.argv", ["roadroute", "route", "2", "6"]):
        cli.main()
    assert "Total Time: 3 minutes" in capsys.readouterr().out
