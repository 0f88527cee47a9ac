"""Infrastructure layer — database, record store, cache, mail, and the Hub.

This layer depends on stdlib and third-party libs (SQLAlchemy, httpx).
The service layer bridges between the core components and infrastructure.
"""
