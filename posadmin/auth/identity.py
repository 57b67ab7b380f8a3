from dataclasses import dataclass
from urllib.parse import quote
from posadmin.models.user import ROLE_ADMIN
from posadmin.utils.security import TokenClaims

IDENTITY_HEADERS = ("x-user-id", "x-user-email", "x-user-name", "x-user-role")


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, built only from a verified session token.

    Handlers read ``request.state.identity``; the forwarded ``x-user-*`` headers
    carry the same values percent-encoded so non-ascii names survive latin-1.
    """

    id: int
    email: str
    name: str
    role: str

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "Identity":
        return cls(id=claims.id, email=claims.email, name=claims.name, role=claims.role)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def as_headers(self) -> list[tuple[bytes, bytes]]:
        values = (str(self.id), self.email, self.name, self.role)
        return [(k.encode("latin-1"), quote(v, safe="@.+ ").encode("latin-1")) for k, v in zip(IDENTITY_HEADERS, values)]
