# coding: utf-8

"""
Tests Package

Test suite for the face login flows.

Test Structure:
- fakes.py: In-memory Face provider used by the unit tests
- test_enrollment.py, test_verification.py, test_removal.py: Orchestrator behaviour
- test_activity.py: Activity indicator counting and notifications
- test_provider.py: Azure SDK wrapper against mocked clients
- test_live_service.py: End-to-end run against a real Face resource (opt-in)

Usage:
    pytest tests -v
"""
