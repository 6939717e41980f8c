"""Descriptions of the cert-manager components and the objects each one needs."""

from dataclasses import dataclass, field

from cmdeploy.constants import CERT_MANAGER_BASE_NAME
from cmdeploy.rbac import (
    CLUSTER_ROLE_APPROVER,
    CLUSTER_ROLE_CAINJECTOR,
    CLUSTER_ROLE_CERTIFICATES,
    CLUSTER_ROLE_CHALLENGES,
    CLUSTER_ROLE_CLUSTER_ISSUERS,
    CLUSTER_ROLE_EDIT,
    CLUSTER_ROLE_INGRESS_SHIM,
    CLUSTER_ROLE_ISSUERS,
    CLUSTER_ROLE_ORDERS,
    CLUSTER_ROLE_SUBJECT_ACCESS_REVIEWS,
    CLUSTER_ROLE_VIEW,
    ROLE_FOR_CAINJECTOR_LEADER_ELECTION,
    ROLE_FOR_CONTROLLER,
    ROLE_FOR_WEBHOOK,
    PolicyRule,
    RoleData,
)
from cmdeploy.webhook import WebhookData

STANDARD_LABELS = {
    "app": "cert-manager",
    "app.kubernetes.io/managed-by": "operator",
}
"""Labels applied to every resource managed by the operator."""

INSTANCE_LABEL_KEY = "app.kubernetes.io/instance"
"""Label key that associates a resource with the name of its owner."""

COMPONENT_LABEL_KEY = "app.kubernetes.io/component"
NAME_LABEL_KEY = "app.kubernetes.io/name"

INJECT_CA_ANNOTATION = "cert-manager.io/inject-ca-from-secret"
"""Annotation telling the cainjector where to take the webhook CA from."""

WEBHOOK_CA_SOURCE = "cert-manager/cert-manager-webhook-ca"
"""Namespace and name of the object holding the webhook CA."""

_IMAGE_REPOSITORY = "quay.io/jetstack/cert-manager-{}"
_LATEST_TAG = "v1.3.1"
_RETAGGED_VERSIONS = ("v1.3.0", "v1.2.0")


@dataclass
class CertManagerComponent:
    """One cert-manager component and the Kubernetes objects it is made of.

    ``deployment`` and ``service`` hold the spec sections of the respective
    manifests as plain dicts.
    """

    name: str = ""
    service_account_name: str = ""
    labels: dict = field(default_factory=dict)
    cluster_roles: list = field(default_factory=list)
    roles: list = field(default_factory=list)
    deployment: dict = field(default_factory=dict)
    service: dict = field(default_factory=dict)
    webhooks: list = field(default_factory=list)

    def labels_with_instance_name(self, name):
        """Return the component labels plus the instance label set to ``name``."""
        return {**self.labels, INSTANCE_LABEL_KEY: name}

    def base_label_selector(self):
        """Return a label selector matching this component by name."""
        return {
            "matchLabels": {
                COMPONENT_LABEL_KEY: self.name,
                NAME_LABEL_KEY: self.name,
            }
        }

    def resource_name(self):
        """Return the base name and the component name joined by a hyphen."""
        return f"{CERT_MANAGER_BASE_NAME}-{self.name}"

    def containers(self):
        """Return the containers of the component's deployment pod template."""
        return self.deployment.get("template", {}).get("spec", {}).get("containers", [])


def _component_labels(name):
    return {COMPONENT_LABEL_KEY: name, NAME_LABEL_KEY: name, **STANDARD_LABELS}


def _image_for(component, version):
    tag = version if version in _RETAGGED_VERSIONS else _LATEST_TAG
    return f"{_IMAGE_REPOSITORY.format(component)}:{tag}"


def _pod_namespace_env():
    return [
        {
            "name": "POD_NAMESPACE",
            "valueFrom": {"fieldRef": {"fieldPath": "metadata.namespace"}},
        }
    ]


def _base_container(image):
    return {
        "name": "cert-manager",
        "args": [],
        "env": _pod_namespace_env(),
        "image": image,
        "imagePullPolicy": "IfNotPresent",
    }


def _http_probe(path, initial_delay, period):
    return {
        "httpGet": {"path": path, "port": 6080, "scheme": "HTTP"},
        "initialDelaySeconds": initial_delay,
        "periodSeconds": period,
        "successThreshold": 1,
        "timeoutSeconds": 1,
        "failureThreshold": 3,
    }


_CLUSTER_ROLE_EDIT_V1_2_0 = RoleData(
    name="cert-manager-edit",
    is_aggregate=True,
    labels={
        "rbac.authorization.k8s.io/aggregate-to-admin": "true",
        "rbac.authorization.k8s.io/aggregate-to-edit": "true",
    },
    policy_rules=(
        PolicyRule(
            verbs=("create", "delete", "deletecollection", "patch", "update"),
            api_groups=("cert-manager.io",),
            resources=("certificates", "certificaterequests", "issuers"),
        ),
        PolicyRule(
            verbs=("get", "list", "watch"),
            api_groups=("acme.cert-manager.io",),
            resources=("challenges", "orders"),
        ),
    ),
)


def component_for_controller(version):
    """Return the cert-manager controller component for ``version``."""
    edit_role = _CLUSTER_ROLE_EDIT_V1_2_0 if version == "v1.2.0" else CLUSTER_ROLE_EDIT
    container = _base_container(_image_for("controller", version))
    container["ports"] = [{"containerPort": 9402, "protocol": "TCP"}]
    return CertManagerComponent(
        name="controller",
        service_account_name="cert-manager",
        labels=_component_labels("controller"),
        cluster_roles=[
            CLUSTER_ROLE_CLUSTER_ISSUERS,
            CLUSTER_ROLE_ISSUERS,
            CLUSTER_ROLE_CHALLENGES,
            edit_role,
            CLUSTER_ROLE_INGRESS_SHIM,
            CLUSTER_ROLE_ORDERS,
            CLUSTER_ROLE_CERTIFICATES,
            CLUSTER_ROLE_VIEW,
            CLUSTER_ROLE_APPROVER,
        ],
        roles=[ROLE_FOR_CONTROLLER],
        deployment={
            "replicas": 1,
            "template": {
                "metadata": {
                    "annotations": {
                        "prometheus.io/path": "/metrics",
                        "prometheus.io/port": "9402",
                        "prometheus.io/scrape": "true",
                    }
                },
                "spec": {"containers": [container]},
            },
        },
        service={
            "ports": [{"protocol": "TCP", "port": 9402, "targetPort": 9402}],
            "type": "ClusterIP",
        },
        webhooks=[],
    )


def component_for_cainjector(version):
    """Return the cert-manager cainjector component for ``version``."""
    return CertManagerComponent(
        name="cainjector",
        service_account_name="cert-manager-cainjector",
        labels=_component_labels("cainjector"),
        cluster_roles=[CLUSTER_ROLE_CAINJECTOR],
        roles=[ROLE_FOR_CAINJECTOR_LEADER_ELECTION],
        deployment={
            "replicas": 1,
            "template": {
                "metadata": {},
                "spec": {"containers": [_base_container(_image_for("cainjector", version))]},
            },
        },
        service={},
        webhooks=[],
    )


def _webhook_common(path):
    return {
        "name": "webhook.cert-manager.io",
        "admissionReviewVersions": ["v1", "v1beta1"],
        "clientConfig": {"service": {"name": "cert-manager-webhook", "path": path}},
        "failurePolicy": "Fail",
        "sideEffects": "None",
        "timeoutSeconds": 10,
        "rules": [
            {
                "operations": ["CREATE", "UPDATE"],
                "apiGroups": ["cert-manager.io", "acme.certmanager.io"],
                "apiVersions": ["*"],
                "resources": ["*/*"],
            }
        ],
    }


def component_for_webhook(version):
    """Return the cert-manager webhook component for ``version``."""
    container = _base_container(_image_for("webhook", version))
    container["livenessProbe"] = _http_probe("/livez", 60, 10)
    container["ports"] = [{"containerPort": 10250, "name": "https"}]
    container["readinessProbe"] = _http_probe("/healthz", 5, 5)

    validating = _webhook_common("/validate")
    validating["namespaceSelector"] = {
        "matchExpressions": [
            {
                "key": "cert-manager.io/disable-validation",
                "operator": "NotIn",
                "values": ["true"],
            },
            {"key": "name", "operator": "NotIn", "values": ["cert-manager"]},
        ]
    }

    return CertManagerComponent(
        name="webhook",
        service_account_name="cert-manager-webhook",
        labels=_component_labels("webhook"),
        cluster_roles=[CLUSTER_ROLE_SUBJECT_ACCESS_REVIEWS],
        roles=[ROLE_FOR_WEBHOOK],
        deployment={
            "replicas": 1,
            "template": {"metadata": {}, "spec": {"containers": [container]}},
        },
        service={
            "ports": [{"protocol": "TCP", "port": 443, "targetPort": 10250}],
            "type": "ClusterIP",
        },
        webhooks=[
            WebhookData(
                name="cert-manager-webhook",
                annotations={INJECT_CA_ANNOTATION: WEBHOOK_CA_SOURCE},
                mutating_webhooks=[_webhook_common("/mutate")],
                validating_webhooks=[validating],
            )
        ],
    )


COMPONENTS = (component_for_controller, component_for_cainjector, component_for_webhook)
"""One function per component that builds it for a given version."""


def all_components(version):
    """Return every component of a cert-manager deployment for ``version``."""
    return [build(version) for build in COMPONENTS]