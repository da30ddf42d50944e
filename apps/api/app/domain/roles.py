"""Role membership predicates over a resolved principal."""

from collections.abc import Iterable

from app.schemas.auth import Principal, Role


def has_any_role(principal: Principal, allowed_roles: Iterable[Role | str]) -> bool:
    allowed = {Role(role) for role in allowed_roles}
    return principal.role in allowed


def is_admin(principal: Principal) -> bool:
    return principal.role is Role.ADMIN


def is_creator(principal: Principal) -> bool:
    return principal.role is Role.CREATOR


def is_business(principal: Principal) -> bool:
    return principal.role is Role.BUSINESS


__all__ = ["has_any_role", "is_admin", "is_business", "is_creator"]
