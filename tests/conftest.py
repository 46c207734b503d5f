import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Pins the environment so logging stays quiet and settings never pick up a
    developer's broker or SMTP relay.
    """
    os.environ["ENVIRONMENT"] = session.config.option.env
    os.environ["NOTIFIER_EMAIL_BACKEND"] = "fake"
    os.environ["NOTIFIER_SUBSCRIBE_ON_STARTUP"] = "false"


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to reset channel singletons after every test"""
    yield

    from notifier.channel import reset_channels

    reset_channels()
