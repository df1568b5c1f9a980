from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from rich.console import Console

from tvmatch import cli
from tvmatch.cli import configure_logging

WIRE_PATH = "/tv/The Wire/Season 3/The.Wire.S03E04.720p.HDTV.x264-LOL.mkv"


def _write_catalog_config(path: Path) -> None:
    path.write_text(
        """
library:
  backend: catalog
  shows:
    - id: 2993
      title: The Wire
      year: 2002
matcher:
  release_groups: [NTG]
""",
        encoding="utf-8",
    )


@pytest.fixture
def config_path(tmp_path) -> Path:
    path = tmp_path / "tvmatch.yaml"
    _write_catalog_config(path)
    return path


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr("tvmatch.cli.configure_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(cli, "CONSOLE", Console(width=200))
    monkeypatch.delenv("TVMATCH_STRICT_NUMBERS", raising=False)


def test_match_json_output(config_path, capsys) -> None:
    exit_code = cli.main(["--config", str(config_path), "match", WIRE_PATH, "readme.txt", "--json"])

    assert exit_code == 0
    lines = [line for line in capsys.readouterr().out.splitlines() if line.strip()]
    assert len(lines) == 1
    payload = json.loads(lines[0])
    assert payload["path"] == WIRE_PATH
    assert payload["show_id"] == "2993"
    assert (payload["season"], payload["number"]) == (3, 4)
    assert payload["files"][0]["release_group"] == "LOL"
    assert payload["files"][0]["resolution"] == "720p"


def test_match_table_output(config_path, capsys) -> None:
    exit_code = cli.main(["--config", str(config_path), "match", WIRE_PATH])

    assert exit_code == 0
    output = capsys.readouterr().out
    assert "Matched episodes" in output
    assert "S03E04" in output


def test_unknown_show_sets_failure_exit_code(config_path, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="tvmatch.cli"):
        exit_code = cli.main(["--config", str(config_path), "match", "/tv/Qqqq.S01E01.mkv", WIRE_PATH])

    assert exit_code == 2
    assert "No matching show for 'qqqq'" in caplog.text


def test_trace_output(config_path, capsys) -> None:
    cli.main(["--config", str(config_path), "match", WIRE_PATH, "--trace", "--json"])

    output = capsys.readouterr().out
    assert f"Match trace: {WIRE_PATH}" in output
    assert "standalone on filename" in output


def test_missing_config_returns_error(tmp_path, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="tvmatch.cli"):
        exit_code = cli.main(["--config", str(tmp_path / "missing.yaml"), "match", WIRE_PATH])

    assert exit_code == 1
    assert "Failed to load config" in caplog.text


def test_invalid_config_returns_error(tmp_path) -> None:
    path = tmp_path / "tvmatch.yaml"
    path.write_text("library:\n  backend: catalog\n", encoding="utf-8")

    assert cli.main(["--config", str(path), "match", WIRE_PATH]) == 1


def test_malformed_yaml_returns_error(tmp_path, caplog) -> None:
    path = tmp_path / "tvmatch.yaml"
    path.write_text("library: [unclosed\n", encoding="utf-8")

    with caplog.at_level(logging.ERROR, logger="tvmatch.cli"):
        exit_code = cli.main(["--config", str(path), "match", "x.mkv"])

    assert exit_code == 1
    assert "Failed to load config" in caplog.text


def test_parser_requires_paths() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["match"])


def test_configure_logging_quiets_httpx(tmp_path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    log_file = tmp_path / "logs" / "tvmatch.log"

    configure_logging(logging.INFO, log_file)

    try:
        assert log_file.parent.is_dir()
        assert logging.getLogger("httpx").level == logging.WARNING
        assert root.level == logging.INFO
        assert any(isinstance(handler, logging.FileHandler) for handler in root.handlers)
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
        logging.getLogger("httpx").setLevel(logging.NOTSET)
