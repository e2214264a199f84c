"""core/ -- Configuration and error taxonomy shared by every layer of PeerRate.

Layer rule: core/ imports only stdlib + third-party libraries.
"""
