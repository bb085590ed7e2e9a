"""
Roster Admin Backend Test Suite

This package contains all tests for the roster admin API.
Tests are organized into:
- unit/: Tests for the engine functions, store, repositories and clients
- integration/: Tests for API endpoints over a mocked database
- fixtures/: Reusable test data and an in-memory repository
"""
