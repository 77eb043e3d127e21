"""Mappers between database rows and domain models."""

from typing import Any, Dict
from uuid import UUID

from collab.domain.model import Delegate
from collab.domain.value import (
    AccountType,
    DelegateEmail,
    DelegateId,
    DelegateStatus,
    ProfileId,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_delegate(row: Dict[str, Any]) -> Delegate:
    """Convert database row to Delegate domain model.

    Args:
        row: Database row as dict

    Returns:
        Delegate domain model
    """
    delegate_user_id = row.get("delegate_user_id")
    return Delegate(
        id=DelegateId(_uuid(row["id"])),
        owner_user_id=UserId(_uuid(row["owner_user_id"])),
        profile_id=ProfileId(_uuid(row["profile_id"])),
        account_type=AccountType(row["account_type"]),
        delegate_email=DelegateEmail(row["delegate_email"]),
        delegate_user_id=UserId(_uuid(delegate_user_id)) if delegate_user_id else None,
        status=DelegateStatus(row["status"]),
        invited_at=row["invited_at"],
        accepted_at=row.get("accepted_at"),
    )


def delegate_to_dict(delegate: Delegate) -> Dict[str, Any]:
    """Convert Delegate domain model to database dict.

    Args:
        delegate: Delegate domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": delegate.id,
        "owner_user_id": delegate.owner_user_id,
        "profile_id": delegate.profile_id,
        "account_type": delegate.account_type.value,
        "delegate_email": delegate.delegate_email.root,
        "delegate_user_id": delegate.delegate_user_id,
        "status": delegate.status.value,
        "invited_at": delegate.invited_at,
        "accepted_at": delegate.accepted_at,
    }
