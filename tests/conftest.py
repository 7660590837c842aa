from unittest.mock import MagicMock

import pytest


@pytest.fixture
def session():
    """A driver session whose execute() returns no rows unless told otherwise."""
    session = MagicMock()
    session.execute.return_value = []
    return session
