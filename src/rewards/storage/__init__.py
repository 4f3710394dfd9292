"""Access to the hosted backend."""

from rewards.storage.client import BackendClient

__all__ = ["BackendClient"]
