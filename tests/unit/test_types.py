import pytest

from pgtables.catalog.types import (
    TYPE_LABELS,
    human_data_type,
    is_boolean,
    is_numeric,
    is_temporal,
    is_time_only,
    wants_range,
)


@pytest.mark.parametrize(
    "data_type, label",
    [
        ("timestamp with time zone", "tstz"),
        ("timestamp without time zone", "ts-ntz"),
        ("time with time zone", "time-tz"),
        ("character varying", "varchar"),
        ("double precision", "float8"),
        ("integer", "int"),
        ("boolean", "bool"),
        ("INTEGER", "int"),
    ],
)
def test_human_data_type_known(data_type, label):
    assert human_data_type(data_type) == label


def test_human_data_type_unknown_is_truncated():
    assert human_data_type("USER-DEFINED") == "USER-DEF"
    assert human_data_type("tsvector") == "tsvector"
    assert human_data_type("inet") == "inet"


def test_all_labels_fit_eight_characters():
    for data_type in list(TYPE_LABELS) + ["character varying(255) with extras", "ARRAY"]:
        assert len(human_data_type(data_type)) <= 8


def test_classification():
    assert is_numeric("bigint")
    assert is_numeric("double precision")
    assert not is_numeric("text")

    assert is_temporal("date")
    assert is_temporal("time without time zone")
    assert is_time_only("time with time zone")
    assert not is_time_only("timestamp with time zone")

    assert is_boolean("boolean")
    assert not is_boolean("text")

    assert wants_range("numeric")
    assert wants_range("timestamp without time zone")
    assert not wants_range("boolean")
    assert not wants_range("uuid")
