"""comments/ -- Per-post comment lists for the comments service.

Layer rule: comments/ imports only stdlib, third-party libraries, and core/.
It does NOT import from api/ or auth/.
"""
