"""Internal modules for Gobath SDK.

WARNING: This package contains system-level modules used by GobathClient.
These are not intended for direct use in application code.

Modules:
    dispatch - Call dispatch pipeline
    endpoints - Known endpoint table
    http - Shared HTTP client configuration
"""
