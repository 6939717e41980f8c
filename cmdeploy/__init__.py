"""Component metadata and versioned flag configuration for deploying cert-manager."""

__version__ = "0.1.0"

__all__ = [
    "constants",
    "rbac",
    "webhook",
    "componentry",
    "config_types_v1_2_0",
    "config_types_v1_3_1",
    "config_defaults",
    "getter",
]