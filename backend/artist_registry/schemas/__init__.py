"""Request Schemas — Pydantic models validating bodies before they reach a repository."""
