"""
repositories/ - Data Access Layer
==================================
Each repository owns one entity kind and enforces the relational rules
around it: referential checks, cascading deletes, vote uniqueness and the
tag reverse index. Use repositories.factory.create_repositories() to get
all four wired to one backend.
"""
