"""
Infrastructure adapters for the boxes bounded context.
"""
