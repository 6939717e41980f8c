import pytest

from cmdeploy.componentry import (
    COMPONENTS,
    INSTANCE_LABEL_KEY,
    STANDARD_LABELS,
    CertManagerComponent,
    all_components,
    component_for_cainjector,
    component_for_controller,
    component_for_webhook,
)
from cmdeploy.constants import (
    CERT_MANAGER_BASE_NAME,
    CERT_MANAGER_DEFAULT_VERSION,
    SUPPORTED_VERSIONS,
    supported_version,
)
from cmdeploy.rbac import RoleData
from cmdeploy.webhook import WebhookData

PREVIOUS_VERSIONS = ["v1.3.0", "v1.2.0"]


def test_supported_versions_contain_default():
    assert CERT_MANAGER_DEFAULT_VERSION in SUPPORTED_VERSIONS
    assert supported_version(CERT_MANAGER_DEFAULT_VERSION)


@pytest.mark.parametrize("version", PREVIOUS_VERSIONS)
def test_supported_versions_contain_previous(version):
    assert version in SUPPORTED_VERSIONS
    assert supported_version(version)


def test_component_list_names():
    names = sorted(build(CERT_MANAGER_DEFAULT_VERSION).name for build in COMPONENTS)
    assert names == ["cainjector", "controller", "webhook"]
    assert names == sorted(c.name for c in all_components(CERT_MANAGER_DEFAULT_VERSION))


def test_all_components_names():
    names = [c.name for c in all_components(CERT_MANAGER_DEFAULT_VERSION)]
    assert names == ["controller", "cainjector", "webhook"]


@pytest.mark.parametrize("version", PREVIOUS_VERSIONS)
@pytest.mark.parametrize(
    "build, kind",
    [
        (component_for_controller, "controller"),
        (component_for_cainjector, "cainjector"),
        (component_for_webhook, "webhook"),
    ],
)
def test_image_follows_version(build, kind, version):
    image = build(version).containers()[0]["image"]
    assert image == f"quay.io/jetstack/cert-manager-{kind}:{version}"


@pytest.mark.parametrize(
    "build, kind",
    [
        (component_for_controller, "controller"),
        (component_for_cainjector, "cainjector"),
        (component_for_webhook, "webhook"),
    ],
)
def test_unknown_version_keeps_latest_image(build, kind):
    image = build("v0.0.0").containers()[0]["image"]
    assert image == f"quay.io/jetstack/cert-manager-{kind}:v1.3.1"


def test_controller_edit_role_for_v1_2_0():
    roles = {r.name: r for r in component_for_controller("v1.2.0").cluster_roles}
    edit = roles["cert-manager-edit"]
    assert edit.is_aggregate
    assert edit.policy_rules[1].verbs == ("get", "list", "watch")


def test_controller_edit_role_for_latest():
    roles = {r.name: r for r in component_for_controller("v1.3.1").cluster_roles}
    assert roles["cert-manager-edit"].policy_rules[1].verbs == (
        "create",
        "delete",
        "deletecollection",
        "patch",
        "update",
    )


def test_controller_has_nine_cluster_roles():
    assert len(component_for_controller("v1.3.1").cluster_roles) == 9


def test_controller_labels_include_standard_labels():
    labels = component_for_controller("v1.3.1").labels
    assert labels["app.kubernetes.io/component"] == "controller"
    for key, value in STANDARD_LABELS.items():
        assert labels[key] == value


def test_webhook_data_of_webhook_component():
    webhooks = component_for_webhook("v1.3.1").webhooks
    assert len(webhooks) == 1
    data = webhooks[0]
    assert data.name == "cert-manager-webhook"
    assert data.mutating_webhooks[0]["clientConfig"]["service"]["path"] == "/mutate"
    assert data.validating_webhooks[0]["clientConfig"]["service"]["path"] == "/validate"
    assert not data.is_empty()


def test_webhook_service_ports():
    service = component_for_webhook("v1.3.1").service
    assert service["ports"][0]["port"] == 443
    assert service["ports"][0]["targetPort"] == 10250


def test_builds_are_independent():
    first = component_for_controller("v1.3.1")
    first.containers()[0]["image"] = "changed"
    assert component_for_controller("v1.3.1").containers()[0]["image"].endswith(":v1.3.1")


@pytest.fixture
def component():
    return CertManagerComponent(
        name="foo",
        service_account_name="foo-service-account",
        labels={"foo": "bar"},
        cluster_roles=[RoleData(name="fooCluster")],
        roles=[RoleData(name="foo")],
        deployment={"replicas": 99},
        service={"clusterIP": "127.0.0.1"},
        webhooks=[WebhookData()],
    )


def test_component_fields(component):
    assert component.name == "foo"
    assert component.service_account_name == "foo-service-account"
    assert component.labels["foo"] == "bar"
    assert component.cluster_roles[0].name == "fooCluster"
    assert component.roles[0].name == "foo"
    assert component.deployment["replicas"] == 99
    assert component.service["clusterIP"] == "127.0.0.1"
    assert component.webhooks[0].name == ""


def test_base_label_selector(component):
    selector = component.base_label_selector()
    assert selector["matchLabels"]["app.kubernetes.io/component"] == "foo"
    assert selector["matchLabels"]["app.kubernetes.io/name"] == "foo"


def test_resource_name(component):
    assert component.resource_name() == CERT_MANAGER_BASE_NAME + "-foo"


def test_labels_with_instance_name(component):
    labels = component.labels_with_instance_name("foo-instance")
    assert labels[INSTANCE_LABEL_KEY] == "foo-instance"
    assert labels["foo"] == "bar"
    assert INSTANCE_LABEL_KEY not in component.labels


def test_containers_of_deployment():
    comp = CertManagerComponent(
        deployment={"template": {"metadata": {}, "spec": {"containers": [{"name": "foo-container"}]}}}
    )
    assert comp.containers()[0]["name"] == "foo-container"


def test_containers_without_deployment():
    assert CertManagerComponent().containers() == []