"""Harmonic Integration for company and people intelligence."""

from .client import HarmonicClient, RequestDescriptor
from .credentials import Credential, CredentialStore

__all__ = ["HarmonicClient", "RequestDescriptor", "Credential", "CredentialStore"]
