"""Tests for PackageId and Realm."""

import pytest
from pydantic import ValidationError
from wally_installer import PackageId
from wally_installer import PackageIdError
from wally_installer import Realm


def test_parse_package_id():
    """Test parsing the scope/name@version form."""
    package_id = PackageId.parse("roblox/roact@1.4.4")

    assert package_id.scope == "roblox"
    assert package_id.name == "roact"
    assert package_id.version == "1.4.4"
    assert str(package_id) == "roblox/roact@1.4.4"


@pytest.mark.parametrize("text", ["roact@1.0.0", "roblox/roact", "roblox/roact@", "a/b/c@1.0.0", ""])
def test_parse_invalid_package_id(text):
    """Test malformed ids are rejected."""
    with pytest.raises(PackageIdError):
        PackageId.parse(text)


def test_empty_fields_rejected():
    """Test empty components fail validation."""
    with pytest.raises(ValidationError):
        PackageId(scope="", name="foo", version="1.0.0")


def test_file_name_is_canonical():
    """Test canonical directory name."""
    assert PackageId.parse("scope/Foo@1.0.0").file_name() == "scope_Foo@1.0.0"


def test_file_names_distinct_for_distinct_ids():
    """Test different identities never share a directory name."""
    ids = [
        PackageId.parse("scope/foo@1.0.0"),
        PackageId.parse("scope/foo@1.0.1"),
        PackageId.parse("scope/bar@1.0.0"),
        PackageId.parse("other/foo@1.0.0"),
        PackageId.parse("a/b_c@1.0.0"),
    ]

    assert len({package_id.file_name() for package_id in ids}) == len(ids)


def test_package_id_hashable_and_equal():
    """Test ids work as dict keys and compare by value."""
    a = PackageId.parse("scope/foo@1.0.0")
    b = PackageId(scope="scope", name="foo", version="1.0.0")

    assert a == b
    assert {a: 1}[b] == 1


def test_package_id_ordering():
    """Test ids sort by scope, name, version."""
    ids = [
        PackageId.parse("b/a@1.0.0"),
        PackageId.parse("a/b@2.0.0"),
        PackageId.parse("a/b@1.0.0"),
    ]

    assert [str(package_id) for package_id in sorted(ids)] == ["a/b@1.0.0", "a/b@2.0.0", "b/a@1.0.0"]


def test_package_id_frozen():
    """Test ids are immutable."""
    package_id = PackageId.parse("scope/foo@1.0.0")

    with pytest.raises(ValidationError):
        package_id.version = "2.0.0"  # type: ignore


def test_realm_parse():
    """Test realm names parse case-insensitively."""
    assert Realm.parse("shared") is Realm.SHARED
    assert Realm.parse("Server") is Realm.SERVER
    assert Realm.parse(" DEV ") is Realm.DEV


def test_realm_parse_unknown():
    """Test unknown realm names list the valid choices."""
    with pytest.raises(ValueError, match="shared, server, dev"):
        Realm.parse("client")


def test_scope_with_underscore_rejected():
    """Test scopes cannot contain the scope/name separator used on disk."""
    with pytest.raises(PackageIdError):
        PackageId.parse("a_b/c@1.0.0")


@pytest.mark.parametrize(
    "fields",
    [
        {"scope": "../../evil", "name": "x", "version": "1"},
        {"scope": "scope", "name": "a/b", "version": "1.0.0"},
        {"scope": "scope", "name": "foo", "version": "1.0.0/../.."},
        {"scope": "scope", "name": "foo@2", "version": "1.0.0"},
        {"scope": "scope", "name": "foo bar", "version": "1.0.0"},
        {"scope": "my_scope", "name": "foo", "version": "1.0.0"},
    ],
)
def test_direct_construction_validates_components(fields):
    """Test constructing a PackageId directly applies the same character rules."""
    with pytest.raises(ValidationError):
        PackageId(**fields)


def test_underscore_allowed_in_name():
    """Test names may contain underscores."""
    assert PackageId.parse("scope/foo_bar@1.0.0").file_name() == "scope_foo_bar@1.0.0"
