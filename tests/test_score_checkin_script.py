"""Tests for scripts/score_checkin.py."""

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT = Path(__file__).parent.parent / "scripts" / "score_checkin.py"

TEMPLATE = {
    "id": "weekly",
    "sections": [
        {
            "id": "s1",
            "category": "training",
            "questions": [{"id": "trained", "type": "boolean"}],
        }
    ],
    "bands": [
        {"name": "red", "min_score": 0, "max_score": 50},
        {"name": "green", "min_score": 50, "max_score": 100},
    ],
}


@pytest.fixture
def script():
    spec = importlib.util.spec_from_file_location("score_checkin", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def run(script, tmp_path, monkeypatch):
    def _run(template: dict, answers: list, *extra: str) -> None:
        template_path = tmp_path / "template.json"
        answers_path = tmp_path / "answers.json"
        template_path.write_text(json.dumps(template))
        answers_path.write_text(json.dumps(answers))
        monkeypatch.setattr(
            "sys.argv", ["score_checkin.py", str(template_path), str(answers_path), *extra]
        )
        script.main()

    return _run


def test_prints_summary(run, capsys):
    run(TEMPLATE, [{"question_id": "trained", "value": True}], "--summary")

    assert "green - Score: 100%" in capsys.readouterr().out


def test_scoring_error_exits_with_status_1(run, capsys):
    with pytest.raises(SystemExit) as exc_info:
        run(TEMPLATE, [{"question_id": "ghost", "value": True}])

    assert exc_info.value.code == 1
    assert "unknown question 'ghost'" in capsys.readouterr().err


def test_malformed_template_exits_with_status_1(run, capsys):
    malformed = {**TEMPLATE, "sections": [{"id": "s1"}]}

    with pytest.raises(SystemExit) as exc_info:
        run(malformed, [])

    assert exc_info.value.code == 1
    assert "sections.0.category" in capsys.readouterr().err
