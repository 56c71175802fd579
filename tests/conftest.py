"""Test configuration and fixtures.

Settings are read from the environment whenever the app or a DI container
is built, so test values are set here before any test module loads.
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__JWT_SECRET", "test-access-secret-0123456789abcdef")
os.environ.setdefault(
    "AUTH__JWT_REFRESH_SECRET", "test-refresh-secret-0123456789abcdef"
)
os.environ.setdefault("AUTH__GITHUB__CLIENT_ID", "test-github-client")
os.environ.setdefault("AUTH__GITHUB__CLIENT_SECRET", "test-github-secret")
os.environ.setdefault("AUTH__GOOGLE__CLIENT_ID", "test-google-client")
os.environ.setdefault("AUTH__GOOGLE__CLIENT_SECRET", "test-google-secret")
