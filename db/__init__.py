"""
db/ - Database Layer
====================
Storage backends: the PostgreSQL connection pool and schema, and the
in-process dataset used by the memory repositories.
This layer sits below the repositories. It depends on models and on the
shared error types in repositories.errors, which import nothing but models.
"""
