"""Public façade for the songqueue.identity package."""

from .gate import AccessGate, require
from .verifiers import (
    AppwriteIdentityVerifier,
    IdentityVerifier,
    JsonFileIdentityVerifier,
    build_identity_verifier,
)

__all__ = [
    "AccessGate",
    "require",
    "IdentityVerifier",
    "AppwriteIdentityVerifier",
    "JsonFileIdentityVerifier",
    "build_identity_verifier",
]
