"""
Services Package

Business logic kept separate from HTTP handling (routers):

- query.py: list query normalization (take/page clamping, filters)
- validation.py: book payload validation
- book_store.py: book store gateway (SQLAlchemy)
- bulk_reset.py: bulk reset gateway (stored procedure)
- books.py: BookService, the per-operation logic
"""
