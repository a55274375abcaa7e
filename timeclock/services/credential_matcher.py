"""
Credential Matcher - resolve a bare PIN to the identity it belongs to
"""
from typing import Sequence, Tuple, TypeVar, Optional

from timeclock.core.security import PinHasher
from timeclock.core.exceptions import CredentialMismatchException

Identity = TypeVar("Identity")


class CredentialMatcher:
    """
    Linear scan with hash verification over every candidate

    PINs are only stored as salted hashes, so there is no index to look
    them up by. Every candidate is verified even after a match so the
    response time does not depend on where the match sits in the roster.
    The first match wins; colliding credentials are not disambiguated.
    """

    def __init__(self, hasher: PinHasher = None) -> None:
        self.hasher = hasher or PinHasher()

    def match(self, pin: str, candidates: Sequence[Tuple[Identity, str]]) -> Identity:
        """
        Args:
            pin: Plaintext PIN from the kiosk
            candidates: (identity, hashed credential) pairs in a stable order

        Returns:
            The first identity whose credential verifies

        Raises:
            CredentialMismatchException: If no candidate matches
        """
        matched: Optional[Identity] = None
        found = False
        for identity, hashed in candidates:
            if self.hasher.verify(pin, hashed) and not found:
                matched = identity
                found = True

        if not found:
            raise CredentialMismatchException()
        return matched

    def is_in_use(self, pin: str, hashes: Sequence[str]) -> bool:
        """True when pin verifies against any of the given hashes"""
        in_use = False
        for hashed in hashes:
            if self.hasher.verify(pin, hashed):
                in_use = True
        return in_use
