import pytest

from cmdeploy.constants import (
    CERT_MANAGER_DEFAULT_VERSION,
    supported_version,
)


def test_default_version_is_supported():
    assert supported_version(CERT_MANAGER_DEFAULT_VERSION) is True


@pytest.mark.parametrize("version", ["v1.3.0", "v1.2.0"])
def test_previous_versions_are_supported(version):
    assert supported_version(version) is True


@pytest.mark.parametrize("version", ["v0.0.0", "1.3.1", "", "v1.4.0"])
def test_unknown_versions_are_not_supported(version):
    assert supported_version(version) is False