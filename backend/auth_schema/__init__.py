"""
Auth schema bootstrap - creates the MongoDB collections and indexes
used by the authentication service.
"""

__version__ = "0.1.0"
