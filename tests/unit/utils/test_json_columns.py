import pytest

from sergas.utils.json_columns import (
    dump_list_column,
    dump_mapping_column,
    normalize_list_column,
    normalize_mapping_column,
    resolve_slugs,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [None, "", 3, "3", "[3,5]", "not json", [1, 2], "[abc", 3.5, True, {"a": 1}, b"[1]", b"\xff"],
)
def test_normalize_list_column_always_returns_list(raw) -> None:
    assert isinstance(normalize_list_column(raw), list)


@pytest.mark.unit
def test_normalize_list_column_wraps_scalars() -> None:
    assert normalize_list_column(3) == [3]
    assert normalize_list_column("3") == ["3"]
    assert normalize_list_column("not json") == ["not json"]


@pytest.mark.unit
def test_normalize_list_column_parses_json_arrays() -> None:
    assert normalize_list_column("[3,5]") == [3, 5]
    assert normalize_list_column(' ["a", "b"]') == ["a", "b"]
    assert normalize_list_column("[bad json") == []
    assert normalize_list_column("[abc") == []


@pytest.mark.unit
def test_normalize_list_column_passes_sequences_through() -> None:
    assert normalize_list_column([1, 2]) == [1, 2]
    assert normalize_list_column((1, 2)) == [1, 2]
    assert normalize_list_column(None) == []
    assert normalize_list_column("") == []


@pytest.mark.unit
def test_normalize_list_column_decodes_bytes() -> None:
    assert normalize_list_column(b"[1,2]") == [1, 2]
    assert normalize_list_column(b"\xff\xfe") == []


@pytest.mark.unit
def test_resolve_slugs_drops_unknown_ids() -> None:
    assert resolve_slugs([1, 2, 99], {1: "a", 2: "b"}) == ["a", "b"]


@pytest.mark.unit
def test_resolve_slugs_accepts_raw_column_values() -> None:
    lookup = {3: "gas", 5: "electricidad"}

    assert resolve_slugs("[5,3]", lookup) == ["electricidad", "gas"]
    assert resolve_slugs("3", lookup) == ["gas"]
    assert resolve_slugs(5, lookup) == ["electricidad"]
    assert resolve_slugs(None, lookup) == []
    assert resolve_slugs([True, "x", 3.0], lookup) == ["gas"]


@pytest.mark.unit
def test_dump_list_column_writes_compact_json() -> None:
    assert dump_list_column([1, "año"]) == '[1,"año"]'
    assert dump_list_column(None) == "[]"
    assert dump_list_column("[2]") == "[2]"


@pytest.mark.unit
def test_mapping_column_round_trip_is_lenient() -> None:
    assert normalize_mapping_column('{"proyectos": true}') == {"proyectos": True}
    assert normalize_mapping_column("[1]") == {}
    assert normalize_mapping_column("{bad") == {}
    assert normalize_mapping_column(None) == {}
    assert dump_mapping_column({"instagram": "https://x"}) == '{"instagram":"https://x"}'
    assert dump_mapping_column("garbage") == "{}"


@pytest.mark.unit
def test_deeply_nested_json_degrades_to_empty_value() -> None:
    nested_array = "[" * 100_000 + "]" * 100_000
    nested_object = '{"a":' + "[" * 100_000

    assert normalize_list_column("[" * 100_000) == []
    assert normalize_list_column(nested_array) == []
    assert dump_list_column(nested_array) == "[]"
    assert resolve_slugs(nested_array, {1: "gas"}) == []
    assert normalize_mapping_column(nested_object) == {}


@pytest.mark.unit
def test_resolve_slugs_ignores_non_ascii_digit_strings() -> None:
    lookup = {2: "gas", 3: "agua"}

    assert resolve_slugs(["²", "3"], lookup) == ["agua"]
    assert resolve_slugs('["²", 2]', lookup) == ["gas"]
