"""Tests for the ``python -m university_etl`` entry point."""

import runpy
from unittest.mock import patch


def test_module_entry_point_starts_server(monkeypatch, mock_env):
    with patch("university_etl.main.uvicorn.run") as uvicorn_run:
        runpy.run_module("university_etl", run_name="__main__")

    uvicorn_run.assert_called_once()
    _, kwargs = uvicorn_run.call_args
    assert kwargs["port"] == 3000
    assert kwargs["timeout_graceful_shutdown"] == 0
