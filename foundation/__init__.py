"""
Foundation: backend application skeleton.

Application package root. No business logic, just the contract every
feature module builds on.

Layers:
    - core: Process-wide collaborators (configuration, database).
    - application: Use cases (health).
    - interfaces: FastAPI routers and dependency wiring.
    - shared: Cross-cutting concerns (errors, responses, validation,
      security, logging).
"""

__version__ = "1.0.0"
