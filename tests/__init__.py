"""
Test suite for launchpad core

Contains:
- tests/unit/          : Unit tests for individual modules and the engine
"""
