from unittest.mock import patch

from study_perf.app import cmd_dashboard, cmd_plan, cmd_subject, main
from study_perf.config import DEFAULT_CONFIG, load_config
from study_perf.db import get_connection
from study_perf.seed import DEMO_USER
from study_perf.sources import InMemoryDataSource


def test_main_seeds_and_quits(tmp_db, capsys):
    with patch("study_perf.app.DEFAULT_DB_PATH", tmp_db), \
         patch("study_perf.app.Prompt.ask", side_effect=["dashboard", "plan", "bogus", "q"]):
        main()
    output = capsys.readouterr().out
    assert "Subject Performance" in output
    assert "Study Plan" in output
    assert "Unknown command" in output
    conn = get_connection(tmp_db)
    assert conn.execute("SELECT COUNT(*) FROM courses WHERE user_id = ?", (DEMO_USER,)).fetchone()[0] == 3
    conn.close()


def test_main_reports_command_errors(tmp_db, capsys):
    with patch("study_perf.app.DEFAULT_DB_PATH", tmp_db), \
         patch("study_perf.app.Prompt.ask", side_effect=["dashboard", "quit"]), \
         patch("study_perf.app.analyze_all_subjects", side_effect=RuntimeError("boom")):
        main()
    assert "Error: boom" in capsys.readouterr().out


def test_main_uses_config_file(tmp_db, tmp_path, capsys, monkeypatch):
    config = tmp_path / "perf.yaml"
    config.write_text("thresholds:\n  excellent: 99\n")
    monkeypatch.setenv("STUDY_PERF_CONFIG", str(config))
    with patch("study_perf.app.DEFAULT_DB_PATH", tmp_db), \
         patch("study_perf.app.Prompt.ask", side_effect=["quit"]), \
         patch("study_perf.app.load_config", wraps=load_config) as loader:
        main()
    loader.assert_called_once_with(str(config))


def test_commands_with_no_courses(capsys):
    source = InMemoryDataSource()
    cmd_dashboard(source, "u1", DEFAULT_CONFIG)
    cmd_subject(source, "u1", DEFAULT_CONFIG)
    output = capsys.readouterr().out
    assert output.count("No courses found") == 2
    cmd_plan(source, "u1", DEFAULT_CONFIG)
    assert "No subjects to plan yet" in capsys.readouterr().out
