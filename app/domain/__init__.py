"""
Domain layer package.

Records, lookup filters, domain errors and the record store port.
No framework imports and no IO.
"""
