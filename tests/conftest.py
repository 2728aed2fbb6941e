"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest before any tests run.
"""

import os

# Set test environment variables BEFORE any app imports
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_TO_FILE"] = "false"
os.environ.pop("DOMAIN", None)
