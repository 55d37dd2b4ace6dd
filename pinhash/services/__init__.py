"""Services package exports."""

from pinhash.services.credential_service import CredentialService

__all__ = ["CredentialService"]
