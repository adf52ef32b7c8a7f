"""
Test suite for recurrence

Contains:
- tests/unit/          : Unit tests for individual modules
"""
