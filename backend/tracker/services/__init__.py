"""Service Layer — mutation operations and account handling.

Invariants:
    - Services depend on core/ protocols, never on concrete clients
    - Every state-changing operation goes through MutationHandler.run()
      (account signup is the exception: it has no cache key and no event)

Design Decisions:
    - Routes stay thin: they build services via api/dependencies.py and return
      whatever the service returns
"""
