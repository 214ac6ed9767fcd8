from datetime import datetime

import pytest

from adder.exceptions import FlagDefinitionError, FlagError
from adder.flags import (
    DependsOn,
    DirFilter,
    ExtensionFilter,
    Flag,
    FlagType,
    MutuallyExclusive,
    Required,
    SetByFramework,
    deserialize_annotations,
    serialize_annotations,
)
from adder.flags.annotations import FILENAME_EXTENSIONS, MUTUALLY_EXCLUSIVE, REQUIRED_FLAG
from adder.flags.utils import coerce_bool, coerce_value, split_csv


@pytest.mark.parametrize(
    "alias, expected",
    [
        ("bool", FlagType.BOOL),
        ("Boolean", FlagType.BOOL),
        ("str", FlagType.STRING),
        ("integer", FlagType.INT),
        ("string_slice", FlagType.STRING_SLICE),
        ("stringslice", FlagType.STRING_SLICE),
        ("list", FlagType.STRING_SLICE),
        ("stringArray", FlagType.STRING_ARRAY),
    ],
)
def test_flag_type_aliases(alias, expected):
    assert FlagType(alias) is expected


def test_flag_type_invalid():
    with pytest.raises(ValueError, match="Must be one of"):
        FlagType("complex")


def test_flag_type_properties():
    assert FlagType.STRING_SLICE.is_repeatable
    assert FlagType.STRING_ARRAY.is_repeatable
    assert not FlagType.STRING_ARRAY.splits_on_comma
    assert not FlagType.COUNT.is_repeatable
    assert FlagType.BOOL.no_opt_default == "true"
    assert FlagType.COUNT.no_opt_default == "+1"
    assert FlagType.INT.no_opt_default is None
    assert str(FlagType.INT_SLICE) == "intSlice"


@pytest.mark.parametrize(
    "value, target_type, expected",
    [
        ("42", int, 42),
        ("3.5", float, 3.5),
        ("True", bool, True),
        ("off", bool, False),
        ("hello", str, "hello"),
        ("2024-01-02", datetime, datetime(2024, 1, 2)),
    ],
)
def test_coerce_value(value, target_type, expected):
    assert coerce_value(value, target_type) == expected


def test_coerce_bool_rejects_unknown_text():
    with pytest.raises(ValueError):
        coerce_bool("maybe")


def test_coerce_datetime_failure():
    with pytest.raises(ValueError, match="could not be parsed as a datetime"):
        coerce_value("not a date", datetime)


def test_split_csv_honours_quotes():
    assert split_csv('a,"b,c",d') == ["a", "b,c", "d"]
    assert split_csv("") == []


def test_flag_defaults_follow_type():
    assert Flag("verbose", type="bool").value is False
    assert Flag("tags", type=FlagType.STRING_SLICE).value == []
    assert Flag("name").value == ""
    assert Flag("name").expects_value
    assert not Flag("verbose", type="bool").expects_value


def test_flag_default_copy_is_independent():
    flag = Flag("tags", type="stringSlice", default=["a"])
    flag.set("b")
    flag.set("c")
    assert flag.value == ["b", "c"]
    assert flag.default == ["a"]
    flag.reset()
    assert flag.value == ["a"]
    assert not flag.changed


@pytest.mark.parametrize("name", ["", "-bad"])
def test_invalid_flag_names(name):
    with pytest.raises(FlagDefinitionError):
        Flag(name)


def test_invalid_shorthand():
    with pytest.raises(FlagDefinitionError):
        Flag("name", shorthand="nm")


def test_int_slice_invalid_value():
    flag = Flag("ids", type="intSlice")
    with pytest.raises(FlagError, match='invalid argument "1,x"'):
        flag.set("1,x")
    assert not flag.changed


def test_count_flag_explicit_value():
    flag = Flag("level", type="count")
    flag.set("+1")
    flag.set("5")
    assert flag.value == 5


def test_annotations_are_typed_and_deduplicated():
    flag = Flag("config")
    flag.annotate(Required())
    flag.annotate(Required())
    flag.annotate(ExtensionFilter(("yaml", "yml")))
    assert flag.is_required
    assert flag.extension_filter == ExtensionFilter(("yaml", "yml"))
    assert flag.dir_filter is None
    assert not flag.is_set_by_framework
    assert len(flag.annotations) == 2


def test_annotation_map_round_trip():
    annotations = [
        Required(),
        ExtensionFilter(("json",)),
        DirFilter("templates"),
        SetByFramework(),
        MutuallyExclusive.create(["json", "yaml"]),
        DependsOn.create(["user", "token", "password"]),
    ]
    mapping = serialize_annotations(annotations)
    assert mapping[REQUIRED_FLAG] == ["true"]
    assert mapping[FILENAME_EXTENSIONS] == ["json"]
    assert mapping[MUTUALLY_EXCLUSIVE] == ["json yaml"]
    assert deserialize_annotations(mapping) == annotations


def test_group_annotation_keys():
    assert MutuallyExclusive.create(["b", "a"]).group_key == "a b"
    depends = DependsOn.create(["z", "c", "b"])
    assert depends.group_key == "z b c"
    assert depends.special == "z"
    assert depends.others == ("b", "c")


def test_deserialize_ignores_unknown_keys():
    assert deserialize_annotations({"something_else": ["x"]}) == []
