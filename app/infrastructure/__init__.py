"""
Infrastructure layer package.

Concrete adapters for the ports defined in the domain layer.
The record store lives here.
"""
