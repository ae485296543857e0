"""
Feature modules for the iPurpose backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- service.py: Business logic implementation
- exceptions.py: Module-specific exceptions

Modules:
- sessions: session cookie -> Identity
- entitlements: Identity -> tier, roles, founder flag; role and tier gates
- ratelimit: fixed-window request counting

Modules communicate through interfaces, not concrete implementations.
Routes live in api/routes and reach the modules through api/dependencies.
"""
