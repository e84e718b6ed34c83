"""Artist Registry — admin-authenticated HTTP API for users, artists, and their songs.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
