"""Role and cluster-role descriptions for the cert-manager components."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PolicyRule:
    """One set of permissions granted by a role."""

    verbs: tuple = ()
    api_groups: tuple = ()
    resources: tuple = ()
    resource_names: tuple = ()

    def to_dict(self):
        """Return the rule as it appears in a Kubernetes manifest."""
        data = {"verbs": list(self.verbs)}
        if self.api_groups:
            data["apiGroups"] = list(self.api_groups)
        if self.resources:
            data["resources"] = list(self.resources)
        if self.resource_names:
            data["resourceNames"] = list(self.resource_names)
        return data


@dataclass(frozen=True)
class RoleData:
    """Metadata for a Role or ClusterRole.

    Aggregate roles carry aggregation labels and are not bound to any subject.
    """

    name: str
    is_aggregate: bool = False
    labels: dict = field(default_factory=dict)
    policy_rules: tuple = ()

    def to_dict(self):
        """Return the role data as plain, independent Python values."""
        return {
            "name": self.name,
            "isAggregate": self.is_aggregate,
            "labels": dict(self.labels),
            "rules": [rule.to_dict() for rule in self.policy_rules],
        }


def _rule(api_groups, resources, verbs, resource_names=()):
    return PolicyRule(
        verbs=tuple(verbs),
        api_groups=tuple(api_groups),
        resources=tuple(resources),
        resource_names=tuple(resource_names),
    )


_AGGREGATE_ADMIN = "rbac.authorization.k8s.io/aggregate-to-admin"
_AGGREGATE_EDIT = "rbac.authorization.k8s.io/aggregate-to-edit"
_AGGREGATE_VIEW = "rbac.authorization.k8s.io/aggregate-to-view"

_READ = ("get", "list", "watch")
_EVENTS = _rule([""], ["events"], ["create", "patch"])

# Namespaced roles.

ROLE_FOR_CAINJECTOR_LEADER_ELECTION = RoleData(
    name="cert-manager-cainjector:leaderelection",
    policy_rules=(
        _rule(
            [""],
            ["configmaps"],
            ["get", "update", "patch"],
            [
                "cert-manager-cainjector-leader-election",
                "cert-manager-cainjector-leader-election-core",
            ],
        ),
        _rule([""], ["configmaps"], ["create"]),
    ),
)

ROLE_FOR_CONTROLLER = RoleData(
    name="cert-manager-controller:leaderelection",
    policy_rules=(
        _rule([""], ["configmaps"], ["get", "update", "patch"], ["cert-manager-controller"]),
        _rule([""], ["configmaps"], ["create"]),
    ),
)

ROLE_FOR_WEBHOOK = RoleData(
    name="cert-manager-webhook:dynamic-serving",
    policy_rules=(
        _rule([""], ["secrets"], ["get", "list", "watch", "update"], ["cert-manager-webhook-ca"]),
        _rule([""], ["secrets"], ["create"]),
    ),
)

# Cluster roles.

CLUSTER_ROLE_CLUSTER_ISSUERS = RoleData(
    name="cert-manager-controller-clusterissuers",
    policy_rules=(
        _rule(["cert-manager.io"], ["clusterissuers", "clusterissuers/status"], ["update"]),
        _rule(["cert-manager.io"], ["clusterissuers"], _READ),
        _rule([""], ["secrets"], ["get", "list", "watch", "create", "update", "delete"]),
        _EVENTS,
    ),
)

CLUSTER_ROLE_ISSUERS = RoleData(
    name="cert-manager-controller-issuers",
    policy_rules=(
        _rule(["cert-manager.io"], ["issuers", "issuers/status"], ["update"]),
        _rule(["cert-manager.io"], ["issuers"], _READ),
        _rule([""], ["secrets"], ["get", "list", "watch", "create", "update", "delete"]),
        _EVENTS,
    ),
)

CLUSTER_ROLE_CHALLENGES = RoleData(
    name="cert-manager-controller-challenges",
    policy_rules=(
        _rule(["acme.cert-manager.io"], ["challenges", "challenges/status"], ["update"]),
        _rule(["acme.cert-manager.io"], ["challenges"], _READ),
        _rule(["cert-manager.io"], ["issuers", "clusterissuers"], _READ),
        _rule([""], ["secrets"], _READ),
        _EVENTS,
        _rule([""], ["pods", "services"], ["get", "list", "watch", "create", "delete"]),
        _rule(["extensions"], ["ingresses"], ["get", "list", "watch", "create", "delete", "update"]),
        _rule(["route.openshift.io"], ["routes/custom-host"], ["create"]),
        _rule(["acme.cert-manager.io"], ["challenges/finalizers"], ["update"]),
        _rule([""], ["secrets"], _READ),
    ),
)

CLUSTER_ROLE_EDIT = RoleData(
    name="cert-manager-edit",
    is_aggregate=True,
    labels={_AGGREGATE_ADMIN: "true", _AGGREGATE_EDIT: "true"},
    policy_rules=(
        _rule(
            ["cert-manager.io"],
            ["certificates", "certificaterequests", "issuers"],
            ["create", "delete", "deletecollection", "patch", "update"],
        ),
        _rule(
            ["acme.cert-manager.io"],
            ["challenges", "orders"],
            ["create", "delete", "deletecollection", "patch", "update"],
        ),
    ),
)

CLUSTER_ROLE_CERTIFICATES = RoleData(
    name="cert-manager-controller-certificates",
    policy_rules=(
        _rule(
            ["cert-manager.io"],
            [
                "certificates",
                "certificates/status",
                "certificaterequests",
                "certificaterequests/status",
            ],
            ["update"],
        ),
        _rule(
            ["cert-manager.io"],
            ["certificates", "certificaterequests", "clusterissuers", "issuers"],
            ["get", "watch", "list"],
        ),
        _rule(
            ["cert-manager.io"],
            ["certificates/finalizers", "certificaterequests/finalizers"],
            ["update"],
        ),
        _rule(["acme.cert-manager.io"], ["orders"], ["create", "delete", "get", "list", "watch"]),
        _rule([""], ["secrets"], ["get", "list", "watch", "create", "update", "delete"]),
        _EVENTS,
    ),
)

CLUSTER_ROLE_ORDERS = RoleData(
    name="cert-manager-controller-orders",
    policy_rules=(
        _rule(["acme.cert-manager.io"], ["orders", "orders/status"], ["update"]),
        _rule(["acme.cert-manager.io"], ["orders", "challenges"], _READ),
        _rule(["cert-manager.io"], ["clusterissuers", "issuers"], _READ),
        _rule(["acme.cert-manager.io"], ["challenges"], ["create", "delete"]),
        _rule(["acme.cert-manager.io"], ["orders/finalizers"], ["update"]),
        _rule([""], ["secrets"], _READ),
        _EVENTS,
    ),
)

CLUSTER_ROLE_INGRESS_SHIM = RoleData(
    name="cert-manager-controller-ingress-shim",
    policy_rules=(
        _rule(["cert-manager.io"], ["certificates", "certificaterequests"], ["create", "update", "delete"]),
        _rule(
            ["cert-manager.io"],
            ["certificates", "certificaterequests", "issuers", "clusterissuers"],
            _READ,
        ),
        _rule(["extensions"], ["ingresses"], _READ),
        _rule(["extensions"], ["ingresses/finalizers"], ["update"]),
        _EVENTS,
    ),
)

CLUSTER_ROLE_VIEW = RoleData(
    name="cert-manager-view",
    is_aggregate=True,
    labels={_AGGREGATE_ADMIN: "true", _AGGREGATE_EDIT: "true", _AGGREGATE_VIEW: "true"},
    policy_rules=(
        _rule(["cert-manager.io"], ["certificates", "certificaterequests", "issuers"], _READ),
        _rule(["acme.cert-manager.io"], ["challenges", "orders"], _READ),
    ),
)

CLUSTER_ROLE_CAINJECTOR = RoleData(
    name="cert-manager-cainjector",
    policy_rules=(
        _rule(["cert-manager.io"], ["certificates"], _READ),
        _rule([""], ["secrets"], _READ),
        _rule([""], ["events"], ["get", "create", "update", "patch"]),
        _rule(["apiregistration.k8s.io"], ["apiservices"], ["get", "list", "watch", "update"]),
        _rule(
            ["apiextensions.k8s.io"],
            ["customresourcedefinitions"],
            ["get", "list", "watch", "update"],
        ),
        _rule(["auditregistration.k8s.io"], ["auditsinks"], ["get", "list", "watch", "update"]),
        _rule(
            ["admissionregistration.k8s.io"],
            ["validatingwebhookconfigurations", "mutatingwebhookconfigurations"],
            ["get", "list", "watch", "update"],
        ),
    ),
)

CLUSTER_ROLE_APPROVER = RoleData(
    name="cert-manager-controller-approve:cert-manager-io",
    policy_rules=(
        _rule(
            ["cert-manager.io"],
            ["signers"],
            ["approve"],
            ["issuers.cert-manager.io/*", "clusterissuers.cert-manager.io/*"],
        ),
    ),
)

CLUSTER_ROLE_SUBJECT_ACCESS_REVIEWS = RoleData(
    name="cert-manager-webhook:subjectaccessreviews",
    policy_rules=(_rule(["authorization.k8s.io"], ["subjectaccessreviews"], ["create"]),),
)