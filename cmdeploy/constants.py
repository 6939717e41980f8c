"""Names, versions and status phases shared by all cert-manager components."""

CERT_MANAGER_DEFAULT_VERSION = "v1.3.1"
"""The cert-manager release installed when none is requested."""

CERT_MANAGER_BASE_NAME = "cert-manager"
"""Base name used in the names of created objects."""

CERT_MANAGER_DEPLOYMENT_NAMESPACE = CERT_MANAGER_BASE_NAME
"""Namespace that holds the namespaced resources of the cert-manager controllers."""

SUPPORTED_VERSIONS = frozenset({"v1.2.0", "v1.3.0", "v1.3.1"})
"""Releases of cert-manager this package knows how to deploy."""

STATUS_PHASE_PENDING = "Pending"
"""The object is stored but its dependent objects are not yet."""

STATUS_PHASE_RUNNING = "Running"
"""The object and all dependent objects are stored and running."""


def supported_version(version):
    """Return True if ``version`` is a supported cert-manager release."""
    return version in SUPPORTED_VERSIONS