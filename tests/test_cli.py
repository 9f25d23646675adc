"""
Tests for the docstore CLI and config loading.

TestConfig  - defaults, TOML overrides, env var lookup, bad files
TestCLI     - check / show / fmt commands against temp files
"""

from __future__ import annotations

import json
import logging

import pytest

from docstore import MultipartDocument, SimpleDocument
from docstore.cli import main
from docstore.config import CONFIG_ENV_VAR, DEFAULT_CONFIG, load_config

MULTIPART = "Boundary: B\n\n--B\nb: 2\na:1\n\nfirst\n--B\nc: \" x\"\n\nsecond"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config lookup at a file that does not exist."""
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))


@pytest.fixture
def simple_file(tmp_path):
    path = tmp_path / "simple.txt"
    path.write_bytes(b"b: 2\na:1\n\nbody")
    return path


@pytest.fixture
def multipart_file(tmp_path):
    path = tmp_path / "multi.txt"
    path.write_bytes(MULTIPART.encode("utf-8"))
    return path


# ---------------------------------------------------------------------------
# TestConfig
# ---------------------------------------------------------------------------

class TestConfig:

    def test_defaults_when_missing(self, tmp_path):
        assert load_config(tmp_path / "nope.toml") == DEFAULT_CONFIG

    def test_overrides(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('encoding = "utf-8"\nlog_level = "DEBUG"\n')
        assert load_config(path) == {"encoding": "utf-8", "log_level": "DEBUG"}

    def test_env_var(self, tmp_path, monkeypatch):
        path = tmp_path / "env.toml"
        path.write_text('log_level = "INFO"\n')
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert load_config()["log_level"] == "INFO"

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('color = true\n')
        assert load_config(path) == DEFAULT_CONFIG

    def test_wrong_type_ignored(self, tmp_path, caplog):
        path = tmp_path / "config.toml"
        path.write_text("encoding = 8\n")
        with caplog.at_level(logging.WARNING, logger="docstore.config"):
            assert load_config(path) == DEFAULT_CONFIG
        assert "encoding" in caplog.text

    def test_invalid_toml(self, tmp_path, caplog):
        path = tmp_path / "config.toml"
        path.write_text("encoding = \n")
        with caplog.at_level(logging.WARNING, logger="docstore.config"):
            assert load_config(path) == DEFAULT_CONFIG
        assert "Failed to load config" in caplog.text


# ---------------------------------------------------------------------------
# TestCLI
# ---------------------------------------------------------------------------

class TestCLI:

    def test_no_command_prints_usage(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 0
        assert "docstore check" in capsys.readouterr().out

    def test_check_simple(self, simple_file, capsys):
        main(["check", str(simple_file)])
        assert capsys.readouterr().out == f"OK {simple_file} (2 header(s), 4 body chars)\n"

    def test_check_multipart(self, multipart_file, capsys):
        main(["check", str(multipart_file), "--multipart"])
        assert capsys.readouterr().out == f"OK {multipart_file} (2 part(s))\n"

    def test_check_invalid(self, tmp_path, capsys):
        path = tmp_path / "bad.txt"
        path.write_bytes(b"bull\tshit\n\n")
        with pytest.raises(SystemExit) as exc:
            main(["check", str(path)])
        assert exc.value.code == 1
        assert "Invalid header: 'bull\\tshit'." in capsys.readouterr().err

    def test_check_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["check", str(tmp_path / "nope.txt")])
        assert exc.value.code == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_show_simple(self, simple_file, capsys):
        main(["show", str(simple_file)])
        data = json.loads(capsys.readouterr().out)
        assert data == {"headers": {"a": "1", "b": "2"}, "body": "body"}

    def test_show_multipart(self, multipart_file, capsys):
        main(["show", str(multipart_file), "--multipart"])
        data = json.loads(capsys.readouterr().out)
        assert data == {"parts": [
            {"headers": {"a": "1", "b": "2"}, "body": "first"},
            {"headers": {"c": " x"}, "body": "second"},
        ]}

    def test_fmt_simple_stdout(self, simple_file, capsys):
        main(["fmt", str(simple_file)])
        assert capsys.readouterr().out == "a: 1\nb: 2\n\nbody"

    def test_fmt_multipart_seeded(self, multipart_file, capsys):
        main(["fmt", str(multipart_file), "--multipart", "--seed", "5"])
        first = capsys.readouterr().out
        main(["fmt", str(multipart_file), "--multipart", "--seed", "5"])
        second = capsys.readouterr().out
        assert first == second
        assert MultipartDocument.parse(first) == MultipartDocument.load_file(multipart_file)

    def test_fmt_to_file(self, simple_file, tmp_path, capsys):
        out = tmp_path / "out.txt"
        main(["fmt", str(simple_file), "-o", str(out)])
        assert out.read_bytes() == b"a: 1\nb: 2\n\nbody"
        assert "Formatted" in capsys.readouterr().out
        assert SimpleDocument.load_file(out) == SimpleDocument.load_file(simple_file)

    def test_encoding_from_config(self, tmp_path, capsys):
        config = tmp_path / "config.toml"
        config.write_text('encoding = "utf-8"\n')
        path = tmp_path / "utf8.txt"
        path.write_bytes("T: Café\n\n".encode("utf-8"))
        main(["--config", str(config), "show", str(path)])
        assert json.loads(capsys.readouterr().out)["headers"] == {"T": "Café"}

    def test_invalid_bytes_for_configured_encoding(self, tmp_path, capsys):
        config = tmp_path / "config.toml"
        config.write_text('encoding = "utf-8"\n')
        path = tmp_path / "bin.txt"
        path.write_bytes(b"T: \xff\n\n")
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config), "check", str(path)])
        assert exc.value.code == 1

    def test_raw_bytes_checked(self, tmp_path, capsys):
        path = tmp_path / "bin.txt"
        path.write_bytes(b"T: \xff\n\n\xfe\x00")
        main(["check", str(path)])
        assert capsys.readouterr().out.startswith("OK ")

    def test_fmt_raw_bytes_to_file(self, tmp_path, capsys):
        path = tmp_path / "bin.txt"
        path.write_bytes(b"b: \xff\na: 1\n\n\xfe\x00")
        out = tmp_path / "out.txt"
        main(["fmt", str(path), "-o", str(out)])
        assert out.read_bytes() == b"a: 1\nb: \xff\n\n\xfe\x00"

    def test_fmt_raw_bytes_to_stdout(self, tmp_path, capsysbinary):
        path = tmp_path / "bin.txt"
        path.write_bytes(b"b: \xff\na: 1\n\n\xfe\x00")
        main(["fmt", str(path)])
        assert capsysbinary.readouterr().out == b"a: 1\nb: \xff\n\n\xfe\x00"
