"""
scripts/evaluate_results.py 테스트
"""

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).parent.parent / "scripts" / "evaluate_results.py"


@pytest.fixture
def script(monkeypatch):
    spec = importlib.util.spec_from_file_location("evaluate_results", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module, "setup_logging", lambda *a, **kw: None)
    return module


def test_no_arguments(script, capsys):
    assert script.main([]) == 1
    assert "사용법" in capsys.readouterr().out


def test_catalog_id_with_results(script, capsys):
    from fixtures import get_fixture_results_path

    path = get_fixture_results_path("c083_two_cylinders.json")
    assert script.main(["norma_nmx_c083", str(path)]) == 0

    report = json.loads(capsys.readouterr().out)
    assert report["norm"] == "NMX-C-083-ONNCCE-2014"
    assert report["verdict"] == "aprobado"
    assert len(report["structured"]["specimen_rows"]) == 2
    assert report["warnings"] == []


def test_schema_file_without_results(script, capsys, tmp_path):
    norm = tmp_path / "norm.json"
    norm.write_text(json.dumps({
        "id": "n1",
        "campos": [{"id": "f1", "nombre": "F1", "tipo": "number", "limiteMin": 1, "esRequerido": True}],
    }), encoding="utf-8")
    assert script.main([str(norm)]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["verdict"] == "en_proceso"
    assert report["missing_keys"] == ["f1"]


def test_invalid_schema(script, capsys, tmp_path):
    norm = tmp_path / "bad.json"
    norm.write_text(json.dumps({
        "id": "bad",
        "campos": [{"id": "s", "tipo": "select"}],
    }), encoding="utf-8")
    assert script.main([str(norm)]) == 2
    assert "ERROR" in capsys.readouterr().out


def test_unknown_catalog_id(script, capsys):
    assert script.main(["norma_inexistente"]) == 2


def test_missing_results_file(script, capsys, tmp_path):
    assert script.main(["norma_nmx_c083", str(tmp_path / "missing.json")]) == 2
    assert "ERROR" in capsys.readouterr().out


def test_malformed_norm_json(script, capsys, tmp_path):
    norm = tmp_path / "broken.json"
    norm.write_text("{\"id\": \"n1\", \"campos\": [", encoding="utf-8")
    assert script.main([str(norm)]) == 2
    assert "ERROR" in capsys.readouterr().out


def test_results_must_be_object(script, capsys, tmp_path):
    results = tmp_path / "results.json"
    results.write_text("[1, 2]", encoding="utf-8")
    assert script.main(["norma_nmx_c083", str(results)]) == 2
