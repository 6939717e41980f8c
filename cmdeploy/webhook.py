"""Webhook configuration data belonging to a cert-manager component."""

from dataclasses import dataclass, field


@dataclass
class WebhookData:
    """Mutating and validating webhooks of one component, as manifest dicts."""

    name: str = ""
    annotations: dict = field(default_factory=dict)
    mutating_webhooks: list = field(default_factory=list)
    validating_webhooks: list = field(default_factory=list)

    def copy_annotations(self):
        """Return an independent copy of the annotations."""
        return dict(self.annotations)

    def is_empty(self):
        """Return True if there is no name and no webhook of either kind."""
        return not self.name and not self.mutating_webhooks and not self.validating_webhooks