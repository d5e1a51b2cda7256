"""
Test Suite for Books API

Test Organization:
- conftest.py: Shared fixtures (test database, gateways, clients, sample data)
- test_books.py: /api/v1/books endpoint behaviour
- test_query.py: list query normalization
- test_validation.py: book payload validation
- test_book_store.py: gateways and BookService
- test_main.py: supplementary endpoints, CORS, settings, envelope builder
- test_seed_data.py: development seed script

Running Tests:
    pip install -e ".[test]"
    pytest
    pytest tests/test_books.py -v
"""
