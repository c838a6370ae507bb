"""Test suite for covid-preprints.

Test organization:
- tests/unit/: Unit tests for individual components, HTTP mocked
"""
