"""
Test Suite for the Library API

Test Organization:
- conftest.py: Shared fixtures (per-test database, client, sample data)
- test_authors.py: /authors endpoints and author lifecycle
- test_books.py: /books endpoints
- test_services.py: service rules called directly on a session
- test_errors.py: error envelope and exception classification
- test_pagination.py: pagination helpers
- test_health.py: health/root endpoints and middleware
- test_config.py: settings validation

Running Tests:
    # Install with test dependencies
    pip install -e ".[test]"

    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py -v
"""
