"""Pytest configuration for submission-metadata tests.

This file is automatically loaded by pytest and sets up configuration
shared across all test modules.
"""

from dotenv import load_dotenv

# Load .env file so settings overrides apply to the tests
# This runs before any tests are collected
load_dotenv()
