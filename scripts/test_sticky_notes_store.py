"""
便签集合（StickyNotes/sticky_notes.json）持久化回归测试。

定位：
- 保存后读回，内容与顺序一致。
- 磁盘上字段名必须是 camelCase（inkData / isMinimized / isPinned / zIndex）。
- 文件不存在 => 空列表；文件损坏 => DeserializationError。

用法：
  python scripts/test_sticky_notes_store.py
"""

from __future__ import annotations

from pathlib import Path
import json
import sys
import tempfile


REPO_ROOT = Path(__file__).resolve().parents[1]


def _ensure_backend_src_on_path(repo_root: Path) -> None:
    src_dir = repo_root / "backend" / "src"
    if not src_dir.exists():
        raise RuntimeError(f"找不到 backend/src：{src_dir}")
    sys.path.insert(0, str(src_dir))


_ensure_backend_src_on_path(REPO_ROOT)

from redpill_backend.domain.sticky_note import StickyNote  # noqa: E402
from redpill_backend.errors import DeserializationError, SerializationError  # noqa: E402
from redpill_backend.infra import storage  # noqa: E402


def _note(note_id: str, z: int, **overrides) -> dict:
    d = {
        "id": note_id,
        "title": f"Note {note_id}",
        "content": "support at 42k",
        "inkData": None,
        "mode": "text",
        "isMinimized": False,
        "isPinned": True,
        "position": {"x": 120.5, "y": 64.0},
        "size": {"w": 240.0, "h": 180.0},
        "zIndex": z,
        "color": "yellow",
    }
    d.update(overrides)
    return d


def test_round_trip_preserves_content_and_order() -> None:
    with tempfile.TemporaryDirectory() as d:
        root = Path(d) / "Database"
        notes = [
            StickyNote.model_validate(_note("n3", 3)),
            StickyNote.model_validate(_note("n1", 1, mode="ink", inkData="data:image/png;base64,AAAA")),
            StickyNote.model_validate(_note("n2", 2**40, isPinned=None, isMinimized=True, color="dark")),
        ]
        storage.save_sticky_notes(root, notes)
        loaded = storage.load_sticky_notes(root)
        assert loaded == notes
        assert [n.id for n in loaded] == ["n3", "n1", "n2"]


def test_wire_names_and_pretty_print() -> None:
    with tempfile.TemporaryDirectory() as d:
        root = Path(d)
        p = storage.save_sticky_notes(root, [_note("a", 7)])
        assert p == root / "StickyNotes" / "sticky_notes.json"
        text = p.read_text(encoding="utf-8")
        assert "\n  {" in text
        raw = json.loads(text)
        assert set(raw[0]) == {"id", "title", "content", "inkData", "mode", "isMinimized", "isPinned", "position", "size", "zIndex", "color"}
        assert raw[0]["zIndex"] == 7
        assert raw[0]["position"] == {"x": 120.5, "y": 64.0}


def test_missing_optional_fields_written_as_null() -> None:
    with tempfile.TemporaryDirectory() as d:
        root = Path(d)
        n = _note("a", 1)
        del n["inkData"]
        del n["isPinned"]
        p = storage.save_sticky_notes(root, [n])
        raw = json.loads(p.read_text(encoding="utf-8"))
        assert raw[0]["inkData"] is None
        assert raw[0]["isPinned"] is None


def test_save_replaces_whole_collection() -> None:
    with tempfile.TemporaryDirectory() as d:
        root = Path(d)
        storage.save_sticky_notes(root, [_note("a", 1), _note("b", 2)])
        storage.save_sticky_notes(root, [_note("c", 3)])
        assert [n.id for n in storage.load_sticky_notes(root)] == ["c"]
        storage.save_sticky_notes(root, [])
        assert storage.load_sticky_notes(root) == []


def test_fresh_root_loads_empty() -> None:
    with tempfile.TemporaryDirectory() as d:
        root = Path(d) / "never-created"
        assert storage.load_sticky_notes(root) == []
        assert not root.exists()


def test_malformed_file_is_deserialization_error() -> None:
    bad_contents = [
        "{not json",
        '{"id": "not-an-array"}',
        json.dumps([{"id": "x"}]),
        json.dumps([_note("a", "7")]),
    ]
    for content in bad_contents:
        with tempfile.TemporaryDirectory() as d:
            root = Path(d)
            p = storage.sticky_notes_path(root)
            p.parent.mkdir(parents=True)
            p.write_text(content, encoding="utf-8")
            try:
                storage.load_sticky_notes(root)
            except DeserializationError:
                pass
            else:
                raise AssertionError(f"expected DeserializationError for {content!r}")


def test_bad_input_is_serialization_error_and_leaves_file() -> None:
    with tempfile.TemporaryDirectory() as d:
        root = Path(d)
        storage.save_sticky_notes(root, [_note("keep", 1)])
        for bad in (_note("z", 2**63), _note("z", True), _note("z", 1, position={"x": "1", "y": 2.0})):
            try:
                storage.save_sticky_notes(root, [_note("ok", 1), bad])
            except SerializationError:
                pass
            else:
                raise AssertionError(f"expected SerializationError for {bad!r}")
        assert [n.id for n in storage.load_sticky_notes(root)] == ["keep"]


def main() -> None:
    test_round_trip_preserves_content_and_order()
    test_wire_names_and_pretty_print()
    test_missing_optional_fields_written_as_null()
    test_save_replaces_whole_collection()
    test_fresh_root_loads_empty()
    test_malformed_file_is_deserialization_error()
    test_bad_input_is_serialization_error_and_leaves_file()
    print("[OK] sticky notes store")


if __name__ == "__main__":
    main()
