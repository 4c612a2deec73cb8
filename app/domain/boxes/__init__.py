"""
Boxes bounded context: domain layer.

Records, lookup filters, errors and the record store port.
"""
