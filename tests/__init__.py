"""
Test suite for exprvec

Contains:
- tests/unit/          : Unit tests for individual modules
"""
