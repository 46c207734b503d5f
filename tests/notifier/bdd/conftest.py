"""Shared BDD fixtures and step definitions for report-viewed alerts."""

import pytest
from pytest_bdd import given, parsers, then


@pytest.fixture()
def scenario_config():
    """Settings overrides collected by Given steps."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the notify result or the raised error."""
    return {"outcomes": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the administrators "{emails}"'))
def administrators(scenario_config, emails):
    scenario_config["admin_emails"] = tuple(e.strip() for e in emails.split(","))


@given("no administrators are configured")
def no_administrators(scenario_config):
    scenario_config["admin_emails"] = ()


@given("email notifications are enabled")
def email_enabled(scenario_config):
    scenario_config["email_enabled"] = True


@given("email notifications are disabled")
def email_disabled(scenario_config):
    scenario_config["email_enabled"] = False


@given(parsers.cfparse('the mailbox "{email}" is unreachable'))
def unreachable_mailbox(fake_email, email):
    fake_email.configure(raising_recipients=[email])


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("{count:d} emails are sent"))
def emails_sent(fake_email, count):
    assert len(fake_email.sent_emails) == count


@then(parsers.cfparse("{count:d} send attempts are made"))
def send_attempts(fake_email, count):
    assert len(fake_email.attempts) == count


@then(parsers.cfparse('every email has the subject "{subject}"'))
def every_subject(fake_email, subject):
    assert fake_email.sent_emails
    assert all(e["subject"] == subject for e in fake_email.sent_emails)


@then(parsers.cfparse('every email body mentions "{text}"'))
def every_body_mentions(fake_email, text):
    assert fake_email.sent_emails
    assert all(text in e["html_body"] and text in e["body"] for e in fake_email.sent_emails)


@then(parsers.cfparse('the delivery to "{email}" is recorded as failed'))
def delivery_failed(outcome, email):
    failed = [o.recipient for o in outcome["outcomes"] if not o.delivered]
    assert failed == [email]


@then("the notification completes without error")
def completes_without_error(outcome):
    assert outcome["exc"] is None
