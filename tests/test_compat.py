import pytest

from readsutils.compat import API_SUBJECT_TO_CHANGE, NEW_CLIENT_AVAILABLE, check_compatibility, parse_version
from readsutils.utils.exceptions import ClientServerIncompatible


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("1.3", (1, 3)),
        ("1.3.7", (1, 3)),
        ("2", (2, 0)),
        (" 0.1.0 ", (0, 1)),
        ("1.3-dev", (1, 3)),
        ("2rc1", (2, 0)),
        ("1.x", (1, 0)),
    ],
)
def test_parse_version(raw, expected) -> None:
    assert parse_version(raw) == expected


def test_parse_version_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        parse_version("v1.x")


def test_pre_release_suffix_is_compatible() -> None:
    assert check_compatibility("1.3-dev", "1.3.0") == []


def test_unparseable_server_version_is_incompatible() -> None:
    with pytest.raises(ClientServerIncompatible) as err:
        check_compatibility("v1.x", "1.3")
    assert "Cannot compare versions" in err.value.message
    assert err.value.server_version == "v1.x"
    assert isinstance(err.value.__cause__, ValueError)


def test_major_mismatch_is_incompatible() -> None:
    with pytest.raises(ClientServerIncompatible) as err:
        check_compatibility("2.5", "1.3")
    assert err.value.message == "Major version numbers differ."
    assert err.value.to_dict()["details"] == {"server_version": "2.5", "client_version": "1.3"}


def test_older_server_minor_is_incompatible() -> None:
    with pytest.raises(ClientServerIncompatible) as err:
        check_compatibility("1.1", "1.3")
    assert err.value.message == "Client minor version greater than Server minor version."


def test_newer_server_minor_is_a_notice() -> None:
    notices = check_compatibility("1.7", "1.3")
    assert len(notices) == 1
    assert notices[0].startswith(NEW_CLIENT_AVAILABLE)


def test_equal_versions_are_silent() -> None:
    assert check_compatibility("1.3.9", "1.3.0") == []


def test_major_zero_is_flagged_unstable() -> None:
    notices = check_compatibility("0.2.0", "0.1.0", client_name="ReadsUtils client")
    assert len(notices) == 2
    assert "ReadsUtils client" in notices[0]
    assert API_SUBJECT_TO_CHANGE in notices[1]
