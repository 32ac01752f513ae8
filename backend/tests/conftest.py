"""
Central pytest configuration for the clinic CRM tests.

Environment variables are set before any application module is imported so
module-level configuration (timezone, bcrypt cost, limiter storage) picks up
the test values.
"""

import os

# Test configuration (set early so import-time settings use it)
os.environ["TESTING"] = "true"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum bcrypt cost keeps hashing fast
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["LOG_TO_FILE"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-for-the-clinic-suite")

# Markers, collection hooks and shared fixtures
from tests.config.markers import *  # noqa: E402,F401,F403
from tests.fixtures.app_fixtures import *  # noqa: E402,F401,F403
from tests.fixtures.database_fixtures import *  # noqa: E402,F401,F403
from tests.fixtures.domain_fixtures import *  # noqa: E402,F401,F403
