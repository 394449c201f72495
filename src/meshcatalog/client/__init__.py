"""Orchestration server client."""

from meshcatalog.client.registration import RegistrationClient, RegistrationError

__all__ = ["RegistrationClient", "RegistrationError"]
