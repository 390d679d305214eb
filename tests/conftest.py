from __future__ import annotations

import json

import pytest

from core.patterns import build_registry


def make_registry(**categories):
    table = {name: [] for name in ("phrases", "tokens", "errata", "extra")}
    table.update({name: [list(pair) for pair in rules] for name, rules in categories.items()})
    return build_registry(table)


@pytest.fixture
def archaic_registry():
    return make_registry(tokens=[("thou", "you"), ("art", "are")])


@pytest.fixture
def write_json(tmp_path):
    def _write(name: str, data) -> str:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def write_csv(tmp_path):
    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write
