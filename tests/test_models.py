import pytest

from settings_store.errors import SettingTypeMismatchError
from settings_store.models import Setting
from settings_store.value_types import SettingType


def test_constructor_initializes_fields(clock) -> None:
    s = Setting("site_name", SettingType.STRING, "My Website")

    assert s.name == "site_name"
    assert s.type is SettingType.STRING
    assert s.value == "My Website"
    assert s.created_at == clock.now
    assert s.updated_at == s.created_at


def test_auto_type_is_resolved_at_construction() -> None:
    assert Setting("a", SettingType.AUTO, 5).type is SettingType.INTEGER
    assert Setting("b", "auto", '{"k": 1}').type is SettingType.JSON
    assert Setting("c", "auto", "text").type_name == "string"


def test_constructor_validates_value() -> None:
    with pytest.raises(SettingTypeMismatchError):
        Setting("n", SettingType.INTEGER, "12")


@pytest.mark.parametrize("name", ["", None, 5])
def test_constructor_rejects_bad_name(name) -> None:
    with pytest.raises(ValueError):
        Setting(name, SettingType.STRING, "x")


def test_every_mutation_refreshes_updated_at(clock) -> None:
    s = Setting("n", SettingType.STRING, "v")
    created = s.created_at

    clock.advance()
    s.rename("m")
    assert s.name == "m"
    assert s.updated_at == clock.now

    clock.advance()
    s.set_value("w")
    assert s.updated_at == clock.now

    clock.advance()
    s.assign(SettingType.INTEGER, 3)
    assert s.updated_at == clock.now

    assert s.created_at == created


def test_set_value_keeps_declared_type() -> None:
    s = Setting("n", SettingType.FLOAT, 1.5)
    s.set_value(2.25)
    assert s.value == 2.25
    with pytest.raises(SettingTypeMismatchError):
        s.set_value("2.5")
    assert s.value == 2.25


def test_set_type_reencodes_current_value(clock) -> None:
    s = Setting("n", SettingType.INTEGER, 3)
    clock.advance()
    s.set_type(SettingType.FLOAT)
    assert s.type is SettingType.FLOAT
    assert s.value == 3.0
    assert s.updated_at == clock.now

    s2 = Setting("n2", SettingType.STRING, "abc")
    with pytest.raises(SettingTypeMismatchError):
        s2.set_type(SettingType.INTEGER)
    assert s2.type is SettingType.STRING


def test_assign_is_all_or_nothing(clock) -> None:
    s = Setting("n", SettingType.STRING, "v")
    before = s.updated_at
    clock.advance()
    with pytest.raises(SettingTypeMismatchError):
        s.assign(SettingType.BOOLEAN, "yes")
    assert s.type is SettingType.STRING
    assert s.raw_value == "v"
    assert s.updated_at == before


def test_value_decoding_per_type() -> None:
    assert Setting("i", SettingType.INTEGER, 123).value == 123
    assert Setting("b", SettingType.BOOLEAN, True).value is True
    assert Setting("f", SettingType.FLOAT, 1.23).value == 1.23
    assert Setting("j", SettingType.JSON, '{"key":"value"}').value == {"key": "value"}
    assert Setting("j2", SettingType.JSON, {"key": [1, 2]}).value == {"key": [1, 2]}


def test_str_and_snapshot() -> None:
    s = Setting("flag", SettingType.BOOLEAN, False)
    assert str(s) == "false"
    d = s.to_dict()
    assert d["name"] == "flag"
    assert d["value"] is False
    assert d["type"] == "boolean"
    assert d["created_at"] == s.created_at
