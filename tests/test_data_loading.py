from __future__ import annotations

import json

import pytest

from veering.data_loading import list_session_files, load_session, session_from_dict, session_to_dict
from veering.errors import InternalInconsistencyError


def _payload() -> dict:
    return {
        "walked_distance": 8.0,
        "headings": [
            {"heading_degrees": 358.0, "elapsed_ms": 0},
            {"heading_degrees": 2.0, "elapsed_ms": 1000},
        ],
    }


def test_session_from_dict() -> None:
    record = session_from_dict(_payload())
    assert record.heading_values == [358.0, 2.0]
    assert record.total_elapsed_ms == 1000
    assert record.walked_distance == 8.0


def test_session_dict_roundtrip() -> None:
    record = session_from_dict(_payload())
    assert session_from_dict(session_to_dict(record)) == record


def test_bare_heading_values_are_accepted() -> None:
    record = session_from_dict({"headings": [10.0, 20.0]})
    assert record.heading_values == [10.0, 20.0]
    assert record.total_elapsed_ms == 0
    assert record.walked_distance == 0.0


def test_malformed_documents_raise_value_error() -> None:
    with pytest.raises(ValueError, match="heading_degrees"):
        session_from_dict({"headings": [{"elapsed_ms": 0}]})
    with pytest.raises(ValueError, match="headings\\[1\\]"):
        session_from_dict({"headings": [{"heading_degrees": 1.0}, {"heading_degrees": 2.0, "elapsed_ms": -5}]})
    with pytest.raises(ValueError):
        session_from_dict({"headings": "north"})
    with pytest.raises(ValueError):
        session_from_dict([1, 2, 3])
    with pytest.raises(ValueError):
        session_from_dict({"headings": [], "walked_distance": -2})


def test_mismatched_total_is_internal_inconsistency() -> None:
    payload = _payload()
    payload["total_elapsed_ms"] = 1500
    with pytest.raises(InternalInconsistencyError):
        session_from_dict(payload)


def test_load_session_file(tmp_path) -> None:
    path = tmp_path / "walk.json"
    path.write_text(json.dumps(_payload()), encoding="utf-8")
    assert load_session(path).heading_values == [358.0, 2.0]


def test_load_session_rejects_invalid_json(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_session(path)


def test_list_session_files(tmp_path) -> None:
    (tmp_path / "morning_walk.json").write_text("{}", encoding="utf-8")
    (tmp_path / "a_loop.json").write_text("{}", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("", encoding="utf-8")
    assert list_session_files(tmp_path) == [
        {"filename": "a_loop.json", "display_name": "A Loop"},
        {"filename": "morning_walk.json", "display_name": "Morning Walk"},
    ]
    assert list_session_files(tmp_path / "missing") == []
