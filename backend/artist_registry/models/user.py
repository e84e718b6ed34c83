"""User ORM — regular users managed by administrators."""

from artist_registry.models.account import Account


class User(Account):
    __tablename__ = "users"
