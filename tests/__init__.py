"""
Test suite for polyroots

Contains:
- tests/unit/          : Unit tests for solvers, domain models and contracts
"""
