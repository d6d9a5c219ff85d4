"""IAM identity (member) value type."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .exceptions import InvalidArgumentError


class IdentityType(Enum):
    """Kinds of principals that can be granted a role."""

    ALL_USERS = "allUsers"
    ALL_AUTHENTICATED_USERS = "allAuthenticatedUsers"
    USER = "user"
    SERVICE_ACCOUNT = "serviceAccount"
    GROUP = "group"
    DOMAIN = "domain"


_WILDCARDS = (IdentityType.ALL_USERS, IdentityType.ALL_AUTHENTICATED_USERS)


@dataclass(frozen=True)
class Identity:
    """A principal that can be bound to a role.

    Attributes
    ----------
    type : IdentityType
        The kind of principal.
    value : str, optional
        Email address (users, service accounts, groups) or domain name.
        ``None`` for the ``allUsers`` and ``allAuthenticatedUsers`` wildcards.
    """

    type: IdentityType
    value: Optional[str] = None

    @classmethod
    def all_users(cls) -> Identity:
        """Anyone on the internet, with or without a Google account."""
        return cls(IdentityType.ALL_USERS)

    @classmethod
    def all_authenticated_users(cls) -> Identity:
        """Anyone authenticated with a Google account or a service account."""
        return cls(IdentityType.ALL_AUTHENTICATED_USERS)

    @classmethod
    def user(cls, email: str) -> Identity:
        return cls(IdentityType.USER, _require_value(email, "email"))

    @classmethod
    def service_account(cls, email: str) -> Identity:
        return cls(IdentityType.SERVICE_ACCOUNT, _require_value(email, "email"))

    @classmethod
    def group(cls, email: str) -> Identity:
        return cls(IdentityType.GROUP, _require_value(email, "email"))

    @classmethod
    def domain(cls, domain: str) -> Identity:
        """All users of a Google Apps domain, e.g. ``"example.com"``."""
        return cls(IdentityType.DOMAIN, _require_value(domain, "domain"))

    def str_value(self) -> str:
        """Return the member string used by the IAM API (e.g. ``"user:a@b.com"``)."""
        if self.type in _WILDCARDS:
            return self.type.value
        return f"{self.type.value}:{self.value}"

    @classmethod
    def from_str(cls, member: str) -> Identity:
        """Parse an IAM member string.

        Parameters
        ----------
        member : str
            Member string such as ``"allUsers"``, ``"group:admins@example.com"``
            or ``"domain:example.com"``.

        Returns
        -------
        Identity
            The parsed identity.

        Raises
        ------
        InvalidArgumentError
            If ``member`` is ``None``, malformed, or uses an unsupported prefix.
        """
        if member is None:
            raise InvalidArgumentError("The member string cannot be None.")
        if not isinstance(member, str):
            raise InvalidArgumentError(f"IAM members must be strings, got {member!r}")

        for wildcard in _WILDCARDS:
            if member == wildcard.value:
                return cls(wildcard)

        prefix, sep, value = member.partition(":")
        if not sep or not value:
            raise InvalidArgumentError(f"Malformed IAM member: '{member}'")

        try:
            identity_type = IdentityType(prefix)
        except ValueError:
            raise InvalidArgumentError(f"Unsupported IAM member type '{prefix}' in '{member}'") from None
        if identity_type in _WILDCARDS:
            raise InvalidArgumentError(f"Malformed IAM member: '{member}'")
        return cls(identity_type, value)

    def __str__(self) -> str:
        return self.str_value()


def _require_value(value: Optional[str], what: str) -> str:
    if value is None:
        raise InvalidArgumentError(f"The {what} cannot be None.")
    return value


__all__ = ["Identity", "IdentityType"]
