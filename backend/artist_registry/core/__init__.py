"""Core Layer — domain types, error hierarchy, and the access decision. No IO, no DB.

Invariants:
    - No module in core/ imports from repositories/, api/, infrastructure/, or db/
    - All functions are pure and deterministic
"""
