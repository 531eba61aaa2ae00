"""
Test suite for the vending automaton

Contains:
- tests/unit/          : Unit tests for individual modules and run scenarios
"""
