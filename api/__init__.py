"""HTTP API for account age checks."""

from api.app import create_app

__all__ = ["create_app"]
