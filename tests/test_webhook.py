import pytest

from cmdeploy.webhook import WebhookData


@pytest.fixture
def webhook_data():
    mutating = [
        {
            "name": "foo",
            "admissionReviewVersions": ["v1", "v1beta1"],
            "clientConfig": {"service": {"name": "some-service", "path": "/mutate"}},
            "failurePolicy": "Fail",
            "sideEffects": "None",
            "timeoutSeconds": 10,
            "rules": [
                {
                    "operations": ["CREATE", "UPDATE"],
                    "resources": ["*/*"],
                    "apiGroups": ["example.com"],
                    "apiVersions": ["*"],
                }
            ],
        }
    ]
    return WebhookData(
        name="foo",
        annotations={"foo": "bar"},
        mutating_webhooks=mutating,
        validating_webhooks=[],
    )


def test_name(webhook_data):
    assert webhook_data.name == "foo"


def test_annotations(webhook_data):
    assert webhook_data.copy_annotations()["foo"] == "bar"


def test_copy_annotations_is_independent(webhook_data):
    copied = webhook_data.copy_annotations()
    copied["foo"] = "changed"
    copied["new"] = "value"
    assert webhook_data.annotations == {"foo": "bar"}


def test_mutating_webhooks(webhook_data):
    assert webhook_data.mutating_webhooks[0]["name"] == "foo"


def test_validating_webhooks(webhook_data):
    assert len(webhook_data.validating_webhooks) == 0


def test_populated_instance_is_not_empty(webhook_data):
    assert webhook_data.is_empty() is False


def test_default_instance_is_empty():
    assert WebhookData().is_empty() is True


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "only-name"},
        {"mutating_webhooks": [{"name": "m"}]},
        {"validating_webhooks": [{"name": "v"}]},
    ],
)
def test_any_content_makes_it_non_empty(kwargs):
    assert WebhookData(**kwargs).is_empty() is False


def test_annotations_alone_do_not_count():
    assert WebhookData(annotations={"a": "b"}).is_empty() is True