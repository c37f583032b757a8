from typing import Protocol


class OwnershipOracle(Protocol):
    """Read-only view of which identity holds a token.

    ``owner_of`` raises (for example ``UnknownToken``) when the token was
    never minted; callers let that failure propagate.
    """

    async def owner_of(self, token_id: int) -> str: ...
