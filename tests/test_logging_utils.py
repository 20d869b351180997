import json
import logging

from pacmaze.logging_utils import get_logger
from pacmaze.maze import MazeGenerationSession, MazeGrid
from pacmaze.server import _configure_logging


def test_key_value_format(monkeypatch, capsys):
    monkeypatch.setenv("PACMAZE_LOG_LEVEL", "info")
    monkeypatch.delenv("PACMAZE_LOG_JSON", raising=False)
    get_logger("test.kv").info("hello", seed=42, note="two words", skipped=None)
    out = capsys.readouterr().out.strip()
    assert out.startswith("level=info ts=")
    assert " event=hello " in out
    assert "seed=42" in out
    assert "note=two_words" in out
    assert "logger=test.kv" in out
    assert "skipped" not in out


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setenv("PACMAZE_LOG_JSON", "1")
    get_logger("test.json").warn("careful", cell=(1, 2))
    rec = json.loads(capsys.readouterr().out.strip())
    assert rec["level"] == "warn"
    assert rec["event"] == "careful"
    assert rec["logger"] == "test.json"
    assert rec["cell"] == [1, 2]


def test_level_filtering(monkeypatch, capsys):
    monkeypatch.setenv("PACMAZE_LOG_LEVEL", "warn")
    log = get_logger("test.level")
    log.info("hidden")
    log.debug("hidden")
    log.error("shown")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "event=shown" in captured.err


def test_get_logger_is_cached():
    assert get_logger("maze.carver") is get_logger("maze.carver")


def test_noop_toggle_logged_at_debug(monkeypatch, capsys):
    monkeypatch.setenv("PACMAZE_LOG_LEVEL", "debug")
    monkeypatch.delenv("PACMAZE_LOG_JSON", raising=False)
    g = MazeGrid()
    g.close_edge((3, 3), (3, 4))
    g.close_edge((3, 3), (3, 4))
    assert "event=edge_toggle_noop" in capsys.readouterr().out


def test_configure_logging_writes_rotating_file(tmp_path, monkeypatch, test_app):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    monkeypatch.setattr(test_app, "instance_path", str(tmp_path))
    try:
        # twice to exercise the handler replacement path
        _configure_logging(test_app)
        path = _configure_logging(test_app)
        assert len(root.handlers) == 2
        logging.getLogger("pacmaze.test").info("written to file")
        for h in root.handlers:
            h.flush()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
    log_file = tmp_path / "app.log"
    assert str(log_file) == path
    assert "written to file" in log_file.read_text()


def test_coordinates_render_compactly(monkeypatch, capsys):
    monkeypatch.delenv("PACMAZE_LOG_JSON", raising=False)
    monkeypatch.setenv("PACMAZE_LOG_LEVEL", "info")
    get_logger("test.coords").info("cell_checked", cell=(5, 5), path=[1, 2, 3], label="a b")
    out = capsys.readouterr().out
    assert "cell=5,5" in out
    assert "path=1,2,3" in out
    assert "label=a_b" in out


def test_bind_adds_context_without_touching_parent(monkeypatch, capsys):
    monkeypatch.delenv("PACMAZE_LOG_JSON", raising=False)
    monkeypatch.setenv("PACMAZE_LOG_LEVEL", "info")
    base = get_logger("test.bind")
    bound = base.bind(seed=7).bind(stage="three_target")
    bound.info("tick", removed=2)
    base.info("tock")
    first, second = capsys.readouterr().out.strip().splitlines()
    assert "seed=7" in first and "stage=three_target" in first and "removed=2" in first
    assert "seed=" not in second
    assert bound.name == base.name == "test.bind"


def test_session_records_carry_seed(monkeypatch, capsys):
    monkeypatch.setenv("PACMAZE_LOG_LEVEL", "debug")
    monkeypatch.setenv("PACMAZE_LOG_JSON", "1")
    MazeGenerationSession(seed=4321)
    records = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.startswith("{")]
    events = {r["event"] for r in records if r.get("seed") == 4321}
    assert {"plan_ready", "carve_stage_done", "maze_generated"} <= events
