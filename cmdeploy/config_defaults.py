"""Default flag configurations for the cert-manager components, as YAML bytes.

The defaults are kept per release of the configuration types. A release
names the cert-manager version in which the configuration types last
changed, so one release may serve several cert-manager versions.
"""

_CONTROLLER = b"""apiVersion: certmanagerconfigs.operators.opdev.io/v1
kind: CertManagerControllerConfig
flags:
  v: 2
  cluster-resource-namespace: $(POD_NAMESPACE)
  leader-election-namespace: $(POD_NAMESPACE)"""

_WEBHOOK = b"""apiVersion: certmanagerconfigs.operators.opdev.io/v1
kind: CertManagerWebhookConfig
flags:
  v: 2
  secure-port: 10250
  dynamic-serving-ca-secret-namespace: $(POD_NAMESPACE)
  dynamic-serving-ca-secret-name: cert-manager-webhook-ca
  dynamic-serving-dns-names:
  - cert-manager-webhook
  - cert-manager-webhook.cert-manager
  - cert-manager-webhook.cert-manager.svc"""

_CAINJECTOR = b"""apiVersion: certmanagerconfigs.operators.opdev.io/v1
kind: CertManagerCAInjectorConfig
flags:
  v: 2
  leader-election-namespace: $(POD_NAMESPACE)"""

_DEFAULTS = {
    "v1.2.0": {"controller": _CONTROLLER, "webhook": _WEBHOOK, "cainjector": _CAINJECTOR},
    "v1.3.1": {"controller": _CONTROLLER, "webhook": _WEBHOOK, "cainjector": _CAINJECTOR},
}

RELEASES = tuple(_DEFAULTS)
"""Releases of the configuration types that have defaults."""


def _lookup(release, component):
    try:
        return _DEFAULTS[release][component]
    except KeyError:
        raise ValueError(
            f"no default configuration for release {release!r}; "
            f"expected one of: {', '.join(RELEASES)}"
        ) from None


def controller_config(release):
    """Return the default controller configuration of ``release`` as YAML bytes."""
    return _lookup(release, "controller")


def webhook_config(release):
    """Return the default webhook configuration of ``release`` as YAML bytes."""
    return _lookup(release, "webhook")


def cainjector_config(release):
    """Return the default cainjector configuration of ``release`` as YAML bytes."""
    return _lookup(release, "cainjector")