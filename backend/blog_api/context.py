"""
Identity context - the "who is calling" value for protected requests.

Produced once by the Authorization Guard (`blog_api.dependencies`) and passed
to route handlers and services as an explicit argument. Nothing is attached
to the request object.
"""

from __future__ import annotations

from dataclasses import dataclass

from blog_api.services.tokens import TokenClaim


@dataclass(frozen=True)
class Identity:
    """
    The authenticated caller.

    Usage in routes:
        async def create_post(..., identity: Identity = Depends(require_identity)):
            ...
    """

    id: int
    email: str

    @classmethod
    def from_claim(cls, claim: TokenClaim) -> Identity:
        return cls(id=claim.id, email=claim.email)
