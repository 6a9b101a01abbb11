import argparse
import importlib.util
from pathlib import Path

import pytest

from gentle_diary.config import AppConfig
from gentle_diary.pipeline import DiaryPipeline
from gentle_diary.schemas import Mood

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "run_diary.py"


@pytest.fixture(scope="module")
def run_diary():
    spec = importlib.util.spec_from_file_location("run_diary", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def pipeline(tmp_path, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    cfg = AppConfig.from_dict({"storage": {"path": "diary.db"}}, base_dir=tmp_path)
    pipe = DiaryPipeline(cfg)
    yield pipe
    pipe.close()


def test_show_prints_full_entry(run_diary, pipeline, capsys):
    reflection = "long " * 40
    entry = pipeline.create_entry(Mood.HAPPY, reflection)
    code = run_diary.cmd_show(pipeline, argparse.Namespace(entry_id=entry.id))
    out = capsys.readouterr().out
    assert code == 0
    assert entry.id in out
    assert "Happy" in out
    assert entry.reflection in out
    assert entry.encouragement in out


def test_show_missing_entry(run_diary, pipeline, capsys):
    code = run_diary.cmd_show(pipeline, argparse.Namespace(entry_id="nope"))
    assert code == 1
    assert "No entry with that id." in capsys.readouterr().out
