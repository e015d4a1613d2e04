from songqueue.core import (
    Capability,
    Identity,
    InvalidCode,
    InvalidInput,
    NotAuthorized,
    log_info,
    log_warning,
)

from .verifiers import IdentityVerifier


class AccessGate:
    """
    Maps a submitted code to an Identity and enforces capabilities.

    Admin codes are looked up before team codes, so a code that exists in
    both collections logs in as admin.
    """

    def __init__(self, verifier: IdentityVerifier) -> None:
        self.verifier = verifier

    def verify(self, code: str) -> Identity:
        code = (code or "").strip()
        if not code:
            raise InvalidInput("A team or admin code is required.")

        identity = self.verifier.lookup_admin(code) or self.verifier.lookup_team(code)
        if identity is None:
            log_warning("Rejected login with an unknown code.")
            raise InvalidCode("Invalid team code")

        log_info(f"Verified {identity.kind.value} {identity.name}.")
        return identity


def require(identity: Identity, capability: Capability) -> None:
    if not identity.can(capability):
        raise NotAuthorized(
            f"{identity.kind.value.capitalize()} {identity.name!r} "
            f"is not allowed to {capability.value.replace('_', ' ')}."
        )
