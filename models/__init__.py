"""
models/ - Domain Models
=======================
Immutable value records passed across the data-access boundary.
Repositories hand out copies; mutating a store always goes through a repository.
"""
