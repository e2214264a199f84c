"""auth/ -- Credentials, bearer tokens and the FastAPI auth dependency for PeerRate.

Layer rule: auth/ imports only core/, users/, stdlib + third-party libraries.
It does NOT import from api/ or ratings/.
api/ imports from auth/, not the other way around.
"""
