"""
Shared configuration, error types, value objects and request schemas.
"""
