"""Command-line configuration of the cert-manager v1.2.0 components.

A configuration object holds the flags of one component binary. It is
never stored in the cluster. It is read from YAML or from a plain mapping,
and every value is checked against the type of its flag. Keys are matched
exactly first and then without regard to case. Unknown keys are ignored,
and a null value leaves the flag at its default.

Durations are integers counting nanoseconds. List flags default to None,
meaning "not set".
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields

import yaml

GROUP = "certmanagerconfigs.operators.opdev.io"
"""API group of the configuration objects."""

VERSION = "v1"
"""API version of the configuration objects within their group."""

API_VERSION = f"{GROUP}/{VERSION}"
"""The apiVersion value the configuration objects are written with."""


def _type_error(key, expected, value):
    return TypeError(f"{key!r} expects {expected}, got {type(value).__name__}: {value!r}")


def _as_bool(key, value):
    if not isinstance(value, bool):
        raise _type_error(key, "a boolean", value)
    return value


def _as_str(key, value):
    if not isinstance(value, str):
        raise _type_error(key, "a string", value)
    return value


def _ranged(low, high):
    def check(key, value):
        if isinstance(value, bool) or not isinstance(value, int):
            raise _type_error(key, "an integer", value)
        if not low <= value <= high:
            raise ValueError(f"{key!r} value {value} is outside [{low}, {high}]")
        return value

    return check


_as_int32 = _ranged(-(2**31), 2**31 - 1)
_as_int64 = _ranged(-(2**63), 2**63 - 1)
_as_uint64 = _ranged(0, 2**64 - 1)


def _as_float(key, value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _type_error(key, "a number", value)
    return float(value)


def _as_strings(key, value):
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise _type_error(key, "a list of strings", value)
    return list(value)


def _flag(key, check, default):
    return field(default=default, metadata={"key": key, "check": check})


def _string(key):
    return _flag(key, _as_str, "")


def _boolean(key):
    return _flag(key, _as_bool, False)


def _int32(key):
    return _flag(key, _as_int32, 0)


def _integer(key):
    return _flag(key, _as_int64, 0)


def _unsigned(key):
    return _flag(key, _as_uint64, 0)


def _duration(key):
    return _flag(key, _as_int64, 0)


def _number(key):
    return _flag(key, _as_float, 0.0)


def _strings(key):
    return _flag(key, _as_strings, None)


def _mapping(data, what):
    if not isinstance(data, Mapping):
        raise TypeError(f"{what} expects a mapping, got {type(data).__name__}")
    return data


def _resolve(targets, key):
    """Find the target for ``key``: exact match first, then case-insensitive."""
    key = key if isinstance(key, str) else str(key)
    if key in targets:
        return targets[key]
    folded = key.casefold()
    return next(
        (target for candidate, target in targets.items() if candidate.casefold() == folded),
        None,
    )


class _FlagSet:
    """Mapping conversion shared by every flag dataclass."""

    @classmethod
    def from_dict(cls, data):
        """Build the flags from a mapping of flag names to values."""
        values = {}
        if data is not None:
            targets = {f.metadata["key"]: f for f in fields(cls)}
            for key, value in _mapping(data, cls.__name__).items():
                target = _resolve(targets, key)
                if target is None or value is None:
                    continue
                values[target.name] = target.metadata["check"](target.metadata["key"], value)
        return cls(**values)

    def to_dict(self):
        """Return every flag keyed by its command-line name."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.metadata["key"]] = list(value) if isinstance(value, list) else value
        return result


_CONFIG_KEYS = {"apiVersion": "api_version", "kind": "kind", "flags": "flags"}


def _config_from_dict(cls, flags_type, data):
    values = {}
    if data is not None:
        for key, value in _mapping(data, cls.__name__).items():
            name = _resolve(_CONFIG_KEYS, key)
            if name is None or value is None:
                continue
            if name == "flags":
                values[name] = flags_type.from_dict(value)
            else:
                values[name] = _as_str(key, value)
    return cls(**values)


def _config_to_dict(config):
    result = {}
    if config.api_version:
        result["apiVersion"] = config.api_version
    if config.kind:
        result["kind"] = config.kind
    result["flags"] = config.flags.to_dict()
    return result


@dataclass
class LoggingFlags(_FlagSet):
    """Logging flags common to every component."""

    add_directory_headers: bool = _boolean("add_dir_header")
    also_log_to_stderr: bool = _boolean("alsologtostderr")
    log_flush_frequency: int = _duration("log-flush-frequency")
    log_backtrace_at: str = _string("log_backtrace_at")
    log_dir: str = _string("log_dir")
    log_file: str = _string("log_file")
    log_file_max_size: int = _unsigned("log_file_max_size")
    log_to_stderr: bool = _boolean("logtostderr")
    skip_headers: bool = _boolean("skip_headers")
    skip_log_headers: bool = _boolean("skip_log_headers")
    stderr_threshold: int = _int32("stderrthreshold")
    verbosity_level: int = _int32("v")
    vmodule: str = _string("vmodule")


@dataclass
class CertManagerControllerFlags(LoggingFlags):
    """Flags of the cert-manager controller binary."""

    kubeconfig: str = _string("kubeconfig")
    master: str = _string("master")
    acme_http01_solver_image: str = _string("acme-http01-solver-image")
    acme_http01_solver_cpu_limits: str = _string("acme-http01-solver-resource-limits-cpu")
    acme_http01_solver_memory_limits: str = _string("acme-http01-solver-resource-limits-memory")
    acme_http01_solver_cpu_requests: str = _string("acme-http01-solver-resource-request-cpu")
    acme_http01_solver_memory_requests: str = _string("acme-http01-solver-resource-request-memory")
    auto_certificate_annotations: list | None = _strings("auto-certificate-annotations")
    cluster_issuer_ambient_credentials: bool = _boolean("cluster-issuer-ambient-credentials")
    cluster_resource_namespace: str = _string("cluster-resource-namespace")
    controllers: list | None = _strings("controllers")
    default_issuer_group: str = _string("default-issuer-group")
    default_issuer_kind: str = _string("default-issuer-kind")
    default_issuer_name: str = _string("default-issuer-name")
    dns01_check_retry_period: int = _duration("dns01-check-retry-period")
    dns01_recursive_nameservers: list | None = _strings("dns01-recursive-nameservers")
    dns01_recursive_nameservers_only: bool = _boolean("dns01-recursive-nameservers-only")
    enable_certificate_owner_refs: bool = _boolean("enable-certificate-owner-ref")
    enable_profiling: bool = _boolean("enable-profiling")
    feature_gates: list | None = _strings("feature-gates")
    issuer_ambient_credentials: bool = _boolean("issuer-ambient-credentials")
    kube_api_burst: float = _number("kube-api-burst")
    kube_api_qps: float = _number("kube-api-qps")
    leader_elect: bool = _boolean("leader-elect")
    leader_elect_lease_duration: int = _duration("leader-election-lease-duration")
    leader_election_namespace: str = _string("leader-election-namespace")
    leader_elect_renew_deadline: int = _duration("leader-election-renew-deadline")
    leader_election_retry_period: int = _duration("leader-election-retry-period")
    max_concurrent_challenges: float = _number("max-concurrent-challenges")
    metrics_listen_address: str = _string("metrics-listen-address")
    namespace: str = _string("namespace")


@dataclass
class CertManagerControllerConfig:
    """Configuration of the cert-manager controller."""

    api_version: str = ""
    kind: str = ""
    flags: CertManagerControllerFlags = field(default_factory=CertManagerControllerFlags)

    @classmethod
    def from_dict(cls, data):
        """Build a configuration from a mapping; None gives the empty configuration."""
        return _config_from_dict(cls, CertManagerControllerFlags, data)

    @classmethod
    def from_yaml(cls, text):
        """Build a configuration from a YAML document given as str or bytes."""
        return cls.from_dict(yaml.safe_load(text))

    def to_dict(self):
        """Return the configuration as a mapping; empty type fields are left out."""
        return _config_to_dict(self)


@dataclass
class CertManagerCAInjectorFlags(LoggingFlags):
    """Flags of the cert-manager cainjector binary."""

    kubeconfig: str = _string("kubeconfig")
    master: str = _string("master")
    namespace: str = _string("namespace")
    leader_elect: bool = _boolean("leader-elect")
    leader_elect_lease_duration: int = _duration("leader-election-lease-duration")
    leader_election_namespace: str = _string("leader-election-namespace")
    leader_elect_renew_deadline: int = _duration("leader-election-renew-deadline")
    leader_election_retry_period: int = _duration("leader-election-retry-period")


@dataclass
class CertManagerCAInjectorConfig:
    """Configuration of the cert-manager cainjector."""

    api_version: str = ""
    kind: str = ""
    flags: CertManagerCAInjectorFlags = field(default_factory=CertManagerCAInjectorFlags)

    @classmethod
    def from_dict(cls, data):
        """Build a configuration from a mapping; None gives the empty configuration."""
        return _config_from_dict(cls, CertManagerCAInjectorFlags, data)

    @classmethod
    def from_yaml(cls, text):
        """Build a configuration from a YAML document given as str or bytes."""
        return cls.from_dict(yaml.safe_load(text))

    def to_dict(self):
        """Return the configuration as a mapping; empty type fields are left out."""
        return _config_to_dict(self)


@dataclass
class CertManagerWebhookFlags(LoggingFlags):
    """Flags of the cert-manager webhook binary."""

    listen_port: int = _integer("secure-port")
    healthz_port: int = _integer("healthz-port")
    tls_cert_file: str = _string("tls-cert-file")
    tls_key_file: str = _string("tls-private-key-file")
    dynamic_serving_ca_secret_namespace: str = _string("dynamic-serving-ca-secret-namespace")
    dynamic_serving_ca_secret_name: str = _string("dynamic-serving-ca-secret-name")
    dynamic_serving_dns_names: list | None = _strings("dynamic-serving-dns-names")
    kubeconfig: str = _string("kubeconfig")
    tls_cipher_suites: list | None = _strings("tls-cipher-suites")
    min_tls_version: str = _string("tls-min-version")


@dataclass
class CertManagerWebhookConfig:
    """Configuration of the cert-manager webhook."""

    api_version: str = ""
    kind: str = ""
    flags: CertManagerWebhookFlags = field(default_factory=CertManagerWebhookFlags)

    @classmethod
    def from_dict(cls, data):
        """Build a configuration from a mapping; None gives the empty configuration."""
        return _config_from_dict(cls, CertManagerWebhookFlags, data)

    @classmethod
    def from_yaml(cls, text):
        """Build a configuration from a YAML document given as str or bytes."""
        return cls.from_dict(yaml.safe_load(text))

    def to_dict(self):
        """Return the configuration as a mapping; empty type fields are left out."""
        return _config_to_dict(self)