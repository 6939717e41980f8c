"""Command-line configuration of the cert-manager v1.3.x components.

Each configuration object reads its flags from a mapping or a YAML document,
checks every value against the flag's type and writes them back out. The
webhook accepts ``api-server-host`` in addition to the v1.2.0 flags.
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

_INT32 = (-(2**31), 2**31 - 1)
_INT64 = (-(2**63), 2**63 - 1)
_UINT64 = (0, 2**64 - 1)


def _flag(key, kind, default):
    return field(default=default, metadata={"flag": key, "kind": kind})


def _boolean(key):
    return _flag(key, "bool", False)


def _string(key):
    return _flag(key, "string", "")


def _integer(key):
    return _flag(key, "int", 0)


def _int32(key):
    return _flag(key, "int32", 0)


def _unsigned(key):
    return _flag(key, "uint", 0)


def _duration(key):
    return _flag(key, "duration", 0)


def _number(key):
    return _flag(key, "number", 0.0)


def _strings(key):
    return _flag(key, "strings", None)


def _check_int(key, value, bounds):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"flag {key!r} expects an integer, got {value!r}")
    low, high = bounds
    if not low <= value <= high:
        raise ValueError(f"flag {key!r} value {value} is out of range")
    return value


def _convert(kind, key, value):
    if kind == "bool":
        if not isinstance(value, bool):
            raise ValueError(f"flag {key!r} expects a boolean, got {value!r}")
        return value
    if kind == "string":
        if not isinstance(value, str):
            raise ValueError(f"flag {key!r} expects a string, got {value!r}")
        return value
    if kind in ("int", "duration"):
        return _check_int(key, value, _INT64)
    if kind == "int32":
        return _check_int(key, value, _INT32)
    if kind == "uint":
        return _check_int(key, value, _UINT64)
    if kind == "number":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"flag {key!r} expects a number, got {value!r}")
        return float(value)
    if kind == "strings":
        if value is None:
            return None
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ValueError(f"flag {key!r} expects a list of strings, got {value!r}")
        return list(value)
    raise ValueError(f"unknown flag kind {kind!r}")


class _FlagSet:
    """Mixin reading and writing a dataclass of flags by their flag names."""

    @classmethod
    def from_dict(cls, data):
        """Build the flags from a mapping of flag names to values."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError(f"flags must be a mapping, got {type(data).__name__}")
        by_key = {f.metadata["flag"]: f for f in fields(cls)}
        unknown = sorted(set(data) - set(by_key))
        if unknown:
            raise ValueError(f"unknown flags: {', '.join(map(str, unknown))}")
        values = {
            by_key[key].name: _convert(by_key[key].metadata["kind"], key, value)
            for key, value in data.items()
        }
        return cls(**values)

    def to_dict(self):
        """Return every flag keyed by its flag name."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.metadata["flag"]] = list(value) if isinstance(value, list) else value
        return result


def _config_from_dict(cls, data):
    if not isinstance(data, Mapping):
        raise ValueError(f"configuration must be a mapping, got {type(data).__name__}")
    unknown = sorted(set(data) - {"apiVersion", "kind", "flags"})
    if unknown:
        raise ValueError(f"unknown configuration keys: {', '.join(map(str, unknown))}")
    api_version = data.get("apiVersion", "")
    kind = data.get("kind", "")
    for key, value in (("apiVersion", api_version), ("kind", kind)):
        if not isinstance(value, str):
            raise ValueError(f"{key} must be a string, got {value!r}")
    return cls(
        api_version=api_version,
        kind=kind,
        flags=cls._flags_type.from_dict(data.get("flags")),
    )


def _config_from_yaml(cls, text):
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid configuration document: {exc}") from exc
    return _config_from_dict(cls, {} if data is None else data)


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

    _flags_type = CertManagerControllerFlags

    api_version: str = ""
    kind: str = ""
    flags: CertManagerControllerFlags = field(default_factory=CertManagerControllerFlags)

    @classmethod
    def from_dict(cls, data):
        """Build the configuration from a mapping."""
        return _config_from_dict(cls, data)

    @classmethod
    def from_yaml(cls, text):
        """Build the configuration from a YAML document given as text or bytes."""
        return _config_from_yaml(cls, text)

    def to_dict(self):
        """Return the configuration as a mapping."""
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

    _flags_type = CertManagerCAInjectorFlags

    api_version: str = ""
    kind: str = ""
    flags: CertManagerCAInjectorFlags = field(default_factory=CertManagerCAInjectorFlags)

    @classmethod
    def from_dict(cls, data):
        """Build the configuration from a mapping."""
        return _config_from_dict(cls, data)

    @classmethod
    def from_yaml(cls, text):
        """Build the configuration from a YAML document given as text or bytes."""
        return _config_from_yaml(cls, text)

    def to_dict(self):
        """Return the configuration as a mapping."""
        return _config_to_dict(self)


@dataclass
class CertManagerWebhookFlags(LoggingFlags):
    """Flags of the cert-manager webhook binary."""

    api_server_host: str = _string("api-server-host")
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

    _flags_type = CertManagerWebhookFlags

    api_version: str = ""
    kind: str = ""
    flags: CertManagerWebhookFlags = field(default_factory=CertManagerWebhookFlags)

    @classmethod
    def from_dict(cls, data):
        """Build the configuration from a mapping."""
        return _config_from_dict(cls, data)

    @classmethod
    def from_yaml(cls, text):
        """Build the configuration from a YAML document given as text or bytes."""
        return _config_from_yaml(cls, text)

    def to_dict(self):
        """Return the configuration as a mapping."""
        return _config_to_dict(self)