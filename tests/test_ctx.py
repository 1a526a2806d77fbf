import pytest

from lxstd import ctx


def test_empty_is_empty_record():
    assert ctx.empty() == {}
    assert ctx.keys(ctx.empty()) == []


def test_save_load_round_trip(tmp_path):
    path = str(tmp_path / "ctx.json")
    record = {"name": "agent", "steps": [1, 2], "done": False}
    ctx.save(path, record)
    assert ctx.load(path) == record


def test_load_missing_file(tmp_path):
    with pytest.raises(OSError):
        ctx.load(str(tmp_path / "missing.json"))


def test_load_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="invalid JSON"):
        ctx.load(str(path))


def test_get_present_and_absent():
    record = {"a": 1}
    assert ctx.get("a", record) == 1
    assert ctx.get("b", record) is None


def test_with_key_does_not_mutate():
    record = {"a": 1}
    updated = ctx.with_key("b", 2, record)
    assert updated == {"a": 1, "b": 2}
    assert record == {"a": 1}


def test_with_key_keeps_position_on_overwrite():
    updated = ctx.with_key("a", 9, {"a": 1, "b": 2})
    assert ctx.keys(updated) == ["a", "b"]
    assert updated["a"] == 9


def test_without_key_preserves_order():
    record = {"a": 1, "b": 2, "c": 3}
    updated = ctx.without_key("b", record)
    assert ctx.keys(updated) == ["a", "c"]
    assert "b" in record


def test_merge_right_wins():
    merged = ctx.merge({"a": 1, "b": 2}, {"b": 3, "c": 4})
    assert merged == {"a": 1, "b": 3, "c": 4}


def test_merge_type_error():
    with pytest.raises(TypeError, match="two Records"):
        ctx.merge({"a": 1}, [1])


def test_non_record_rejected():
    with pytest.raises(TypeError, match="expects Record"):
        ctx.get("a", [1, 2])


def test_non_str_key_rejected():
    with pytest.raises(TypeError, match="Str key"):
        ctx.with_key(1, "v", {})