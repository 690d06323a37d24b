from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _clean_concept_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in [key for key in os.environ if key.startswith("CONCEPT_")]:
        monkeypatch.delenv(name, raising=False)
