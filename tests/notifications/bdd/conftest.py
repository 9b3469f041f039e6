"""Shared BDD fixtures and step definitions for the Notifications domain."""

import pytest
from notifications.notification.management import CreateNotification
from notifications.notification.notification import Notification
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def inbox():
    """Notification ids keyed by title, in creation order."""
    return {}


@pytest.fixture()
def error():
    return {"exc": None}


@given(parsers.cfparse('"{recipient_id}" has a notification titled "{title}"'))
def _(inbox, recipient_id, title):
    inbox[title] = current_domain.process(
        CreateNotification(recipient_id=recipient_id, title=title, message=f"{title}.", category="order"),
        asynchronous=False,
    )


@then(parsers.cfparse('the notification "{title}" is read'))
def _(inbox, title):
    assert current_domain.repository_for(Notification).get(inbox[title]).is_read is True


@then(parsers.cfparse('the notification "{title}" is unread'))
def _(inbox, title):
    assert current_domain.repository_for(Notification).get(inbox[title]).is_read is False


@then(parsers.cfparse('the request is refused with "{error_name}"'))
def _(error, error_name):
    assert error["exc"] is not None, "Expected the request to be refused"
    assert type(error["exc"]).__name__ == error_name
