"""Tests for XMind mind map export from a layout and relationship validation."""
from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

from src.graph import CausalNode, FlowGraph, build_layout
from src.render import build_xmind, load_xmind_parent_child_pairs, load_xmind_topic_titles
from src.render.mind import topic_title


def test_main_help_shows_xmind() -> None:
    """main.py --help mentions --xmind."""
    result = subprocess.run(
        [sys.executable, "main.py", "--help"],
        cwd=Path(__file__).resolve().parent.parent,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "--xmind" in result.stdout


def test_topic_title_for_ticker() -> None:
    graph = build_layout([
        CausalNode(id="t", label="VST (Vistra)", kind="ticker"),
        CausalNode(id="u", label="nuclear", kind="ticker"),
        CausalNode(id="i", label="Grid stress", kind="impact"),
    ])
    titles = {n.id: topic_title(n) for n in graph.nodes}
    assert titles == {"t": "VST | VST (Vistra)", "u": "nuclear", "i": "Grid stress"}


def test_single_root_becomes_central_topic(tmp_path: Path) -> None:
    graph = build_layout([
        CausalNode(id="r", label="Root", kind="root"),
        CausalNode(id="a", label="Child A", parent_id="r"),
        CausalNode(id="b", label="Child B", parent_id="r"),
        CausalNode(id="g", label="Grandchild", parent_id="b"),
    ])
    out = build_xmind(graph, tmp_path / "single.xmind", sheet_title="Sheet")
    assert out.is_file()

    titles = load_xmind_topic_titles(out)
    assert "Root" in titles
    assert {"Child A", "Child B", "Grandchild"}.issubset(set(titles))
    assert "Sheet" not in titles

    pairs = set(load_xmind_parent_child_pairs(out))
    assert all(child != "Root" for _, child in pairs)
    assert {("Root", "Child A"), ("Root", "Child B"), ("Child B", "Grandchild")}.issubset(pairs)


def test_several_roots_hang_off_sheet_title(tmp_path: Path, sample_nodes) -> None:
    out = build_xmind(build_layout(sample_nodes), tmp_path / "forest.xmind", sheet_title="AI and Power")
    pairs = set(load_xmind_parent_child_pairs(out))
    expected = {
        ("AI and Power", "AI Compute Demand"),
        ("AI and Power", "Orphan"),
        ("AI Compute Demand", "Power Shortage"),
        ("Power Shortage", "Nuclear Premium"),
        ("Nuclear Premium", "VST | VST (Vistra)"),
    }
    assert expected.issubset(pairs), f"Expected relationships {expected} not found in {pairs}"


def test_cycle_members_attached_to_center(tmp_path: Path) -> None:
    graph = build_layout([
        CausalNode(id="r", label="Root", kind="root"),
        CausalNode(id="p", label="P", parent_id="q"),
        CausalNode(id="q", label="Q", parent_id="p"),
    ])
    out = build_xmind(graph, tmp_path / "cycle.xmind")
    titles = load_xmind_topic_titles(out)
    assert titles.count("P") == 1
    assert titles.count("Q") == 1
    pairs = set(load_xmind_parent_child_pairs(out))
    assert ("Root", "P") in pairs or ("Root", "Q") in pairs


def test_build_xmind_empty_creates_root_only(tmp_path: Path) -> None:
    """Empty layout produces xmind with single root (no content)."""
    out = build_xmind(FlowGraph(), tmp_path / "empty.xmind")
    assert out.is_file()
    titles = load_xmind_topic_titles(out)
    assert "(No content)" in titles


def test_read_back_deep_chain_without_recursion(tmp_path: Path) -> None:
    """Reading a workbook whose topics nest deeper than the recursion limit."""
    depth = sys.getrecursionlimit() * 3
    leaf = SimpleNamespace(title=f"n{depth - 1}", subtopics=[])
    topic = leaf
    for i in range(depth - 2, -1, -1):
        topic = SimpleNamespace(title=f"n{i}", subtopics=[topic])
    sheet = SimpleNamespace(root_topic=topic)
    workbook = SimpleNamespace(sheet_count=1, get_sheet=lambda i: sheet)

    with patch("py_xmind16.Workbook.load", return_value=workbook):
        titles = load_xmind_topic_titles(tmp_path / "deep.xmind")
        pairs = load_xmind_parent_child_pairs(tmp_path / "deep.xmind")
    assert len(titles) == depth
    assert titles[0] == "n0" and titles[-1] == f"n{depth - 1}"
    assert pairs[-1] == (f"n{depth - 2}", f"n{depth - 1}")


def test_read_back_keeps_sibling_order(tmp_path: Path) -> None:
    c = SimpleNamespace(title="C", subtopics=[])
    a = SimpleNamespace(title="A", subtopics=[c])
    b = SimpleNamespace(title="B", subtopics=[])
    untitled = SimpleNamespace(title="", subtopics=[SimpleNamespace(title="hidden", subtopics=[])])
    root = SimpleNamespace(title="Root", subtopics=[a, untitled, b])
    workbook = SimpleNamespace(sheet_count=1, get_sheet=lambda i: SimpleNamespace(root_topic=root))

    with patch("py_xmind16.Workbook.load", return_value=workbook):
        assert load_xmind_topic_titles(tmp_path / "x.xmind") == ["Root", "A", "C", "B"]
