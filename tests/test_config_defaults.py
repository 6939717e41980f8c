import pytest

from cmdeploy import config_types_v1_2_0 as v1_2_0
from cmdeploy import config_types_v1_3_1 as v1_3_1
from cmdeploy.config_defaults import (
    RELEASES,
    cainjector_config,
    controller_config,
    webhook_config,
)

TYPES = {"v1.2.0": v1_2_0, "v1.3.1": v1_3_1}


@pytest.mark.parametrize("release", ["v1.2.0", "v1.3.1"])
def test_controller_default_parses(release):
    config = TYPES[release].CertManagerControllerConfig.from_yaml(controller_config(release))
    assert config.kind == "CertManagerControllerConfig"
    assert config.api_version == TYPES[release].API_VERSION
    assert config.flags.verbosity_level == 2
    assert config.flags.cluster_resource_namespace == "$(POD_NAMESPACE)"
    assert config.flags.leader_election_namespace == "$(POD_NAMESPACE)"


@pytest.mark.parametrize("release", ["v1.2.0", "v1.3.1"])
def test_webhook_default_parses(release):
    config = TYPES[release].CertManagerWebhookConfig.from_yaml(webhook_config(release))
    assert config.kind == "CertManagerWebhookConfig"
    assert config.flags.listen_port == 10250
    assert config.flags.dynamic_serving_ca_secret_name == "cert-manager-webhook-ca"
    assert config.flags.dynamic_serving_dns_names == [
        "cert-manager-webhook",
        "cert-manager-webhook.cert-manager",
        "cert-manager-webhook.cert-manager.svc",
    ]


@pytest.mark.parametrize("release", ["v1.2.0", "v1.3.1"])
def test_cainjector_default_parses(release):
    config = TYPES[release].CertManagerCAInjectorConfig.from_yaml(cainjector_config(release))
    assert config.kind == "CertManagerCAInjectorConfig"
    assert config.flags.verbosity_level == 2
    assert config.flags.leader_election_namespace == "$(POD_NAMESPACE)"


@pytest.mark.parametrize("getter", [controller_config, webhook_config, cainjector_config])
def test_defaults_are_bytes_and_nonempty(getter):
    for release in RELEASES:
        data = getter(release)
        assert isinstance(data, bytes)
        assert len(data) > 0


@pytest.mark.parametrize("getter", [controller_config, webhook_config, cainjector_config])
@pytest.mark.parametrize("release", ["v0.0.0", "v1.3.0", ""])
def test_unknown_release_raises(getter, release):
    with pytest.raises(ValueError):
        getter(release)


def test_defaults_differ_between_components():
    release = "v1.3.1"
    assert len({controller_config(release), webhook_config(release), cainjector_config(release)}) == 3