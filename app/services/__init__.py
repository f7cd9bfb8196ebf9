"""
Services Package

Business logic separated from HTTP handling:
- authors.py: AuthorService (CRUD, delete guard for authors with books)
- books.py: BookService (CRUD, author existence and ISBN checks)
- base.py: query helpers shared by the services
- rate_limiter.py: Rate limiting with slowapi
"""
