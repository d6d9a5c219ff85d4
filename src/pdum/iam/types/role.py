"""IAM role dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field

from .exceptions import InvalidArgumentError

ROLE_PREFIX = "roles/"


@dataclass(frozen=True)
class Role:
    """An IAM role, usable as a binding key.

    Attributes
    ----------
    name : str
        Role resource name (e.g., ``"roles/owner"`` or
        ``"projects/my-project/roles/deployer"``).
    title : str
        Human-readable title for the role. Not part of equality.
    description : str
        Short description of what the role grants. Not part of equality.
    """

    name: str
    title: str = field(default="", compare=False)
    description: str = field(default="", compare=False)

    @classmethod
    def of(cls, value: str) -> Role:
        """Return a role for ``value``, prefixing ``roles/`` on bare names like ``"viewer"``."""
        if value is None:
            raise InvalidArgumentError("The role cannot be None.")
        if "/" not in value:
            value = ROLE_PREFIX + value
        return cls(name=value)

    @classmethod
    def owner(cls) -> Role:
        return cls.of("owner")

    @classmethod
    def editor(cls) -> Role:
        return cls.of("editor")

    @classmethod
    def viewer(cls) -> Role:
        return cls.of("viewer")

    def __str__(self) -> str:
        return self.name


__all__ = ["Role", "ROLE_PREFIX"]
