"""Requester identity taken from headers set by the upstream auth layer."""

from dataclasses import dataclass

from fastapi import Header

from shared.errors import Unauthorized

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Requester:
    user_id: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def get_requester(
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default="user"),
) -> Requester:
    if not x_user_id:
        raise Unauthorized("Not authorized, no user identity")
    return Requester(user_id=x_user_id, role=(x_user_role or "user").lower())


def require_admin(
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default="user"),
) -> Requester:
    requester = get_requester(x_user_id=x_user_id, x_user_role=x_user_role)
    if not requester.is_admin:
        raise Unauthorized("Not authorized as an admin")
    return requester
