"""
Application layer for the boxes bounded context.

Use cases deciding when registrations are written and evicted.
"""
