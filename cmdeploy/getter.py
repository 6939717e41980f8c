"""Look up default and empty flag configurations by component and version.

Each cert-manager component binary takes configuration through command-line
flags, and the set of flags may change between cert-manager versions. The
functions here map a supported cert-manager version onto the release of the
configuration types that describes it, so declarative flag settings can be
checked against a stable representation of what that binary accepts.
"""

from cmdeploy import config_defaults
from cmdeploy import config_types_v1_2_0 as v1_2_0
from cmdeploy import config_types_v1_3_1 as v1_3_1

CONTROLLER = "controller"
WEBHOOK = "webhook"
CAINJECTOR = "cainjector"

COMPONENT_NAMES = (CONTROLLER, WEBHOOK, CAINJECTOR)
"""Names of the components that have configurations."""

_RELEASE_FOR_VERSION = {
    "v1.3.1": "v1.3.1",
    "v1.3.0": "v1.3.1",
    "v1.2.0": "v1.2.0",
}

_DEFAULT_GETTERS = {
    CONTROLLER: config_defaults.controller_config,
    WEBHOOK: config_defaults.webhook_config,
    CAINJECTOR: config_defaults.cainjector_config,
}

_CONFIG_TYPES = {
    "v1.3.1": {
        CONTROLLER: v1_3_1.CertManagerControllerConfig,
        WEBHOOK: v1_3_1.CertManagerWebhookConfig,
        CAINJECTOR: v1_3_1.CertManagerCAInjectorConfig,
    },
    "v1.2.0": {
        CONTROLLER: v1_2_0.CertManagerControllerConfig,
        WEBHOOK: v1_2_0.CertManagerWebhookConfig,
        CAINJECTOR: v1_2_0.CertManagerCAInjectorConfig,
    },
}


def _check_component(component_name):
    if component_name not in COMPONENT_NAMES:
        raise ValueError(
            "expected a component name of: "
            f"{', '.join(COMPONENT_NAMES)} but received: {component_name!r}"
        )


def _release_for(version):
    try:
        return _RELEASE_FOR_VERSION[version]
    except KeyError:
        raise ValueError(
            f"expected a supported cert-manager version but received: {version!r}"
        ) from None


def default_config_for(component_name, version):
    """Return the default configuration of a component at ``version`` as YAML bytes.

    Raises ValueError for an unknown component or an unsupported version.
    """
    _check_component(component_name)
    return _DEFAULT_GETTERS[component_name](_release_for(version))


def empty_config_for(component_name, version):
    """Return an empty configuration object of a component at ``version``.

    Raises ValueError for an unknown component or an unsupported version.
    """
    _check_component(component_name)
    return _CONFIG_TYPES[_release_for(version)][component_name]()