"""
Application layer package.

Use cases orchestrating the record store. Each use case is a
single class with one execute() method and depends on domain
ports only.
"""
