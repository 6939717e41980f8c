# cmdeploy

`cmdeploy` describes what is needed to deploy cert-manager into a cluster: the
components, their RBAC roles, deployments, services and webhooks, and the
command-line flag configuration of each component binary. It returns plain
Python objects and dictionaries, which you hand to the client of your choice.

## Installation

```
pip install cmdeploy
```

To run the test suite:

```
pip install "cmdeploy[test]"
pytest
```

## Supported cert-manager versions

`v1.2.0`, `v1.3.0` and `v1.3.1`. The default is `v1.3.1`
(`cmdeploy.constants.CERT_MANAGER_DEFAULT_VERSION`). Check a version with
`cmdeploy.constants.supported_version(version)`.

`cmdeploy.constants` also holds `CERT_MANAGER_BASE_NAME`,
`CERT_MANAGER_DEPLOYMENT_NAMESPACE` (both `cert-manager`) and the status
phases `STATUS_PHASE_PENDING` and `STATUS_PHASE_RUNNING`.

## Components

`cmdeploy.componentry` builds a `CertManagerComponent` for each part of
cert-manager at a given version:

```python
from cmdeploy.componentry import all_components, component_for_webhook

webhook = component_for_webhook("v1.3.1")
print(webhook.resource_name())          # cert-manager-webhook
print(webhook.base_label_selector())
print(webhook.labels_with_instance_name("cluster"))

for component in all_components("v1.2.0"):
    print(component.name, component.containers()[0]["image"])
```

`all_components` returns the controller, cainjector and webhook, in that
order. The container image tag follows the requested version; for `v1.2.0`
the controller also gets the older `cert-manager-edit` cluster role.

A component has these attributes:

- `name` and `service_account_name`;
- `labels`;
- `cluster_roles` and `roles`, lists of `cmdeploy.rbac.RoleData`, each holding
  `PolicyRule` entries;
- `deployment` and `service`, the spec sections of the manifests as dicts;
- `webhooks`, a list of `cmdeploy.webhook.WebhookData`.

`RoleData.to_dict()` and `PolicyRule.to_dict()` give the manifest-shaped form.
`WebhookData.copy_annotations()` returns an independent copy of the
annotations, and `WebhookData.is_empty()` tells whether it has no name and no
webhooks.

## Component configuration

Every component binary takes a set of command-line flags. They are described
by dataclasses in `cmdeploy.config_types_v1_2_0` (cert-manager v1.2.0) and
`cmdeploy.config_types_v1_3_1` (v1.3.0 and v1.3.1). Each module has
`CertManagerControllerConfig`, `CertManagerCAInjectorConfig` and
`CertManagerWebhookConfig`, with `from_dict`, `from_yaml` and `to_dict`.
Durations are integers counting nanoseconds.

The two modules differ in how strict they are:

- `config_types_v1_2_0` ignores unknown keys, also matches keys regardless of
  case, and raises `TypeError` for a value of the wrong type (`ValueError` for
  an integer out of range);
- `config_types_v1_3_1` raises `ValueError` for unknown keys, for values of the
  wrong type and for invalid YAML. Its webhook flags also include
  `api-server-host`.

`cmdeploy.config_defaults` holds the default configurations as YAML bytes:
`controller_config(release)`, `webhook_config(release)` and
`cainjector_config(release)`, for the releases `v1.2.0` and `v1.3.1`.

`cmdeploy.getter` picks the defaults and types for a component name
(`controller`, `webhook` or `cainjector`) and a cert-manager version:

```python
from cmdeploy.config_types_v1_3_1 import CertManagerWebhookConfig
from cmdeploy.getter import default_config_for, empty_config_for

text = default_config_for("webhook", "v1.3.1")   # YAML bytes
config = CertManagerWebhookConfig.from_yaml(text)
print(config.flags.dynamic_serving_dns_names)

empty = empty_config_for("webhook", "v1.3.1")    # config object with defaults
```

An unknown component name or an unsupported version raises `ValueError`.

## What this package does not do

`cmdeploy` is a library of descriptions. It does not connect to a cluster,
create or update any object, or run as a controller or a command. In
particular it does not watch secrets or restart workloads when a certificate
they mount is renewed; that has to be done by the code that uses these
descriptions.