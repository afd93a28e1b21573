import io
from unittest.mock import patch

import pytest

import run_index
from src.index.key_loader import build_trie


@pytest.fixture
def config_file(tmp_path, keys_file):
    config_path = tmp_path / "config.txt"
    config_path.write_text(
        f"keyspath = {keys_file}\nlog_details = no\n",
        encoding="utf-8",
    )
    return config_path


def test_answer_query(keys_file):
    data_trie = build_trie(keys_file)

    assert run_index.answer_query(data_trie, "baby", False) == "STRING EXISTS"
    assert (
        run_index.answer_query(data_trie, "bab", False) == "STRING NOT FOUND"
    )


def test_answer_query_outside_alphabet_is_not_found(keys_file):
    data_trie = build_trie(keys_file)

    assert (
        run_index.answer_query(data_trie, "Baby!", False)
        == "STRING NOT FOUND"
    )


def test_answer_query_logs_details(keys_file):
    data_trie = build_trie(keys_file)

    with patch("run_index.log") as mock_log:
        run_index.answer_query(data_trie, "jar", True)

    mock_log.assert_called_once()
    _, operation, key, result, execution_time_ms = mock_log.call_args.args
    assert (operation, key, result) == ("contains", "jar", True)
    assert execution_time_ms >= 0


def test_main_with_query_arguments(config_file, capsys):
    status = run_index.main(
        ["--config_path", str(config_file), "jar", "jam", "bachelor"],
    )

    assert status == 0
    assert capsys.readouterr().out.splitlines() == [
        "STRING EXISTS",
        "STRING NOT FOUND",
        "STRING EXISTS",
    ]


def test_main_reads_queries_from_stdin(config_file, capsys):
    with patch("sys.stdin", io.StringIO("badge\nbadg\n")):
        status = run_index.main(["--config_path", str(config_file)])

    assert status == 0
    assert capsys.readouterr().out.splitlines() == [
        "STRING EXISTS",
        "STRING NOT FOUND",
    ]


def test_main_with_logging_enabled(tmp_path, keys_file, capsys):
    config_path = tmp_path / "config.txt"
    config_path.write_text(
        f"keyspath = {keys_file}\nlog_details = yes\n",
        encoding="utf-8",
    )

    with (
        patch("run_index.setup_logging") as mock_setup,
        patch("run_index.log") as mock_log,
    ):
        status = run_index.main(["--config_path", str(config_path), "jar"])

    assert status == 0
    mock_setup.assert_called_once()
    mock_log.assert_called_once()
    assert capsys.readouterr().out.strip() == "STRING EXISTS"


def test_main_missing_config(tmp_path, capsys):
    status = run_index.main(
        ["--config_path", str(tmp_path / "missing.txt"), "jar"],
    )

    assert status == 1
    assert "Configuration error" in capsys.readouterr().err
