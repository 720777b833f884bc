"""
role_assignment: standard role assignment workflow (catalog, retry,
result aggregation, transactional commit/rollback).
"""

__version__ = "1.0.0"
