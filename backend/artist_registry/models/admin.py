"""Admin ORM — administrators who log in and receive bearer tokens."""

from artist_registry.models.account import Account


class Admin(Account):
    __tablename__ = "admins"
