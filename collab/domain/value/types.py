"""Domain value objects for delegate access.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and normalization.
"""

from enum import Enum

from pydantic import field_validator

from collab.domain.value.common import RootValueObject, ValueObject
from collab.domain.value.identifiers import ProfileId, UserId


class AccountType(str, Enum):
    """Kind of profile a delegation grants access to."""

    BRAND = "brand"
    CREATOR = "creator"


class DelegateStatus(str, Enum):
    """Lifecycle status of a delegate record.

    pending -> active -> revoked. Nothing ever returns to pending.
    """

    PENDING = "pending"
    ACTIVE = "active"
    REVOKED = "revoked"


class DelegateEmail(RootValueObject[str]):
    """Email address an invitation was issued to.

    Always stored lower-cased and stripped so that matching is
    case-insensitive on both the read and the write side.
    """

    @field_validator("root")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Lower-case and validate the address."""
        v = v.strip().lower()
        if len(v) < 3 or len(v) > 320:
            raise ValueError("Email must be 3-320 characters")
        if "@" not in v:
            raise ValueError("Email must contain '@'")
        return v


class SessionIdentity(ValueObject):
    """Authenticated identity of the current session.

    Supplied by the identity provider and passed explicitly to every
    delegate access operation. Either field may be missing.
    """

    user_id: UserId | None = None
    email: DelegateEmail | None = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v):
        """Treat an empty email as no email."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


class DelegatedAccess(ValueObject):
    """One entry of a user's authorization set."""

    profile_id: ProfileId
    account_type: AccountType
