"""
Infrastructure Package
======================

Provides abstraction layers for external dependencies following the Dependency Inversion Principle.

Modules:
    - storage: Product image storage abstraction (local filesystem)

This package enables:
    - Easy testing with temporary or mock storage
    - Loose coupling between business logic and infrastructure
"""
