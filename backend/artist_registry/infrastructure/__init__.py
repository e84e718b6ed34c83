"""Infrastructure Layer — database access, schema provisioning, credentials, logging.

Invariants:
    - Infrastructure never imports from api/
    - Driver failures it cannot classify propagate unchanged
"""
