"""users/ -- User records and the in-memory store that owns them.

Layer rule: users/ imports only core/, stdlib and third-party libraries.
It does NOT import from api/, auth/, or ratings/.
"""
