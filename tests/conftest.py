"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import pytest

from src.graph import CausalNode


@pytest.fixture
def sample_nodes() -> list[CausalNode]:
    """Four-step chain a->b->c->d plus an orphan whose parent is missing; input order shuffled."""
    a = CausalNode(id="a", label="AI Compute Demand", kind="root")
    b = CausalNode(id="b", label="Power Shortage", kind="event", parent_id="a")
    c = CausalNode(id="c", label="Nuclear Premium", kind="impact", parent_id="b")
    d = CausalNode(id="d", label="VST (Vistra)", kind="ticker", parent_id="c")
    orphan = CausalNode(id="e", label="Orphan", kind="impact", parent_id="missing")
    return [d, c, b, a, orphan]


@pytest.fixture
def sample_rows() -> list[dict]:
    """The same graph as content-store rows."""
    return [
        {"id": "a", "post_id": "post-1", "label": "AI Compute Demand", "type": "root", "parent_id": None},
        {"id": "b", "post_id": "post-1", "label": "Power Shortage", "type": "event", "parent_id": "a"},
        {"id": "c", "post_id": "post-1", "label": "Nuclear Premium", "type": "impact", "parent_id": "b"},
        {"id": "d", "post_id": "post-1", "label": "VST (Vistra)", "type": "ticker", "parent_id": "c"},
        {"id": "e", "post_id": "post-1", "label": "Orphan", "type": "impact", "parent_id": "missing"},
    ]


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Avoid loading project .env in tests unless explicitly set."""
    for key in ("DATA_DIR", "OUTPUT_DIR", "PREVIEW_FONT", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
