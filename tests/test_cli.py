"""Tests for the estimator CLI."""

import json

import duckdb
import pytest

from ci.validate_estimate import validate
from src.estimator import cli
from src.estimator.cli import main
from src.estimator.config import Parameters
from src.estimator.store import DuckDBStore, ParameterStore
from src.warehouse.db import get_connection


class TestMain:
    def test_prints_estimate_without_persisting(self, capsys):
        main(["--memory", "--users", "2.000.000"])
        out = capsys.readouterr().out
        assert "200.000" in out
        assert "Formulas:" in out

    def test_edits_persist_between_runs(self, tmp_path, capsys):
        db = str(tmp_path / "estimator.duckdb")
        main(["--db", db, "--think-time", "0,5", "--dau", "20"])
        main(["--db", db])
        capsys.readouterr()

        conn = get_connection(db)
        params = ParameterStore(DuckDBStore(conn)).load()
        conn.close()
        assert params == Parameters(dau_percent=20, think_time_sec=0.5)

    def test_reset_applied_before_edits(self, tmp_path, capsys):
        db = str(tmp_path / "estimator.duckdb")
        main(["--db", db, "--users", "5"])
        main(["--db", db, "--reset", "--concurrent", "4"])
        capsys.readouterr()

        conn = get_connection(db)
        params = ParameterStore(DuckDBStore(conn)).load()
        conn.close()
        assert params == Parameters(concurrent_percent=4)

    def test_export_passes_ci_validation(self, tmp_path, capsys):
        out_path = tmp_path / "out" / "estimate.json"
        main(["--memory", "--concurrent", "150", "--export", str(out_path)])
        capsys.readouterr()

        data = json.loads(out_path.read_text())
        assert data["parameters"]["concurrentPercent"] == 150
        assert data["metrics"]["peakConcurrent"] == data["metrics"]["dau"]
        assert validate(data) == []

    def test_connection_closed_when_render_fails(self, tmp_path, monkeypatch):
        opened = []

        def _open(db_path):
            conn = get_connection(db_path)
            opened.append(conn)
            return conn

        def _fail(params, metrics):
            raise RuntimeError("render failed")

        monkeypatch.setattr(cli, "get_connection", _open)
        monkeypatch.setattr(cli, "render", _fail)

        with pytest.raises(RuntimeError, match="render failed"):
            main(["--db", str(tmp_path / "estimator.duckdb")])

        assert len(opened) == 1
        with pytest.raises(duckdb.Error):
            opened[0].execute("SELECT 1")
