"""ratings/ -- Peer ratings between registered users.

Layer rule: ratings/ imports from core/, users/ and auth/models only.
It does NOT import from api/.
"""
