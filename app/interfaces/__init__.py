"""
Interfaces layer package.

FastAPI routers and Pydantic schemas. Routes resolve the client
address, call a use case and serialize its result.
"""
