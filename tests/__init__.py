"""
Test Suite for the Local Library Catalog

Test Organization:
- conftest.py: Shared fixtures (per-test database, store, client, sample data)
- test_authors.py, test_genres.py, test_books.py, test_bookinstances.py:
  page tests for /catalog/... routes
- test_home.py: home page counts and health check
- test_store.py: entity store queries and writes
- test_aggregation.py: parallel fetch and checked-state annotation
- test_validation.py: form validation and sanitization

Running Tests:
    # Install test dependencies
    pip install -e ".[test]"

    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
