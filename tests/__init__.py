"""
Stormtrooper Test Suite
=======================

Test Organization:
-----------------
- conftest.py: Pytest fixtures (in-memory database, FastAPI client, auth)
- factories.py: Test data factories using factory_boy
- test_api.py: End-to-end HTTP API tests
- test_accounts.py / test_streams.py: Service level tests

Running Tests:
--------------
    # Run all tests
    pytest

    # Run specific markers
    pytest -m unit           # Unit tests only
    pytest -m integration    # HTTP API tests only

Dependencies:
-------------
    pip install -e ".[test]"
"""
