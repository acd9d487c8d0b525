"""Tests for the run.py entry point."""

import os
import sys
from unittest.mock import patch

import pytest

import run


def test_version_flag_exits_cleanly(capsys):
    with patch.object(sys, "argv", ["run.py", "--version"]):
        with pytest.raises(SystemExit) as excinfo:
            run.main()

    assert excinfo.value.code == 0
    assert "wordpress-graph-source" in capsys.readouterr().out


def test_missing_base_url_exits_with_error(capsys):
    with patch.dict(os.environ, {}, clear=True), \
         patch.object(sys, "argv", ["run.py", "--env", "/nonexistent/.env"]):
        with pytest.raises(SystemExit) as excinfo:
            run.main()

    assert excinfo.value.code == 1
    assert "WORDPRESS_BASE_URL is required" in capsys.readouterr().out


def test_cli_flags_override_environment():
    env = {"WORDPRESS_BASE_URL": "https://blog.example.com", "WORDPRESS_CONCURRENCY": "10"}
    with patch.dict(os.environ, env, clear=True), \
         patch.object(sys, "argv", ["run.py", "--env", "/nonexistent/.env", "--concurrency", "0"]):
        with pytest.raises(SystemExit) as excinfo:
            run.main()

    assert excinfo.value.code == 1
