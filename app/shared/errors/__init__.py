"""
Shared error handling package.

Centralizes error-to-HTTP mapping so that domain errors and request
decoding failures are consistently translated into the
{code, errno, error} wire format.
"""
