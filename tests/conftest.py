# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

from dataset_processor.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _fresh_logging():
    # CLI は setup_logging() 時点の sys.stdout をハンドラに掴むため毎回リセット
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("DATASET_PROCESSOR_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """duplicate_policy: reject
error_log_dir: ./logs
grades:
  thresholds:
    A: 90
    B: 75
    C: 60
  fallback_grade: D
cart:
  catalog:
    apple: 30.0
    banana: 10.0
    milk: 25.5
    bread: 40.0
  discount_base: 5
  discount_step: 5
  payment_methods: [cash, card, upi]
devices:
  interface: eth0
  prefix_length: 24
  enable_secret: admin123
collections:
  mapping:
    Alice: 25
    Bob: 30
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "processor.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_csv(temp_workdir: Path) -> Callable[[str, str], Path]:
    def _write(name: str, text: str) -> Path:
        path = temp_workdir / "data" / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture()
def feed_input(monkeypatch) -> Callable[[list[str]], list[str]]:
    """Replace builtins.input with a scripted answer list; returns the prompts seen."""
    def _feed(answers: list[str]) -> list[str]:
        remaining = list(answers)
        prompts: list[str] = []

        def fake_input(prompt: str = "") -> str:
            prompts.append(prompt)
            if not remaining:
                raise EOFError
            return remaining.pop(0)

        monkeypatch.setattr("builtins.input", fake_input)
        return prompts
    return _feed
