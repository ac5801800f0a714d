"""
repositories/postgres/ - PostgreSQL backend
===========================================
Repositories over the psycopg2 pool in db.connection. Each public operation
runs in one transaction; cascades come from ON DELETE CASCADE in the schema.
"""
