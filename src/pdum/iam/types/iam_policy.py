"""Generic role-to-identities access policy and its builder.

``IamPolicy`` holds the binding semantics shared by every resource that
exposes IAM-style access control. Concrete policies subclass it together with
``IamPolicy.Builder`` and only add marshalling to and from their service's
wire format (see :mod:`pdum.iam.types.policy`).

Example
-------
>>> policy = (
...     Policy.builder()
...     .add_identity(Role.viewer(), Identity.user("abc@example.com"), Identity.all_users())
...     .add_identity(Role.editor(), Identity.group("admins@example.com"))
...     .build()
... )
>>> viewers_only = policy.to_builder().remove_role(Role.editor()).build()
>>> list(viewers_only.bindings)
[Role(name='roles/viewer')]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Generic, Hashable, Mapping, Optional, TypeVar

from .exceptions import InvalidArgumentError
from .identity import Identity

R = TypeVar("R", bound=Hashable)
B = TypeVar("B", bound="IamPolicy.Builder")

_NULL_ROLE = "The role cannot be None."
_NULL_IDENTITY = "None identities are not permitted."
_NULL_BINDINGS = "The provided map of bindings cannot be None."
_NULL_IDENTITY_SET = "A role cannot be assigned to a None set of identities."


def _checked_identities(identities) -> set[Identity]:
    checked = set(identities)
    if None in checked:
        raise InvalidArgumentError(_NULL_IDENTITY)
    return checked


class IamPolicy(ABC, Generic[R]):
    """Immutable mapping of roles to the identities that hold them.

    Attributes
    ----------
    bindings : Mapping[R, frozenset[Identity]]
        Read-only snapshot; every identity set is non-empty.
    etag : str, optional
        Optimistic-concurrency token, set on policies fetched from a service.
    version : int, optional
        Policy schema version, set only when given explicitly.
    """

    __slots__ = ("_bindings", "_etag", "_version")

    class Builder(ABC, Generic[R, B]):
        """Mutable accumulator for an :class:`IamPolicy`.

        Every mutator validates its arguments before touching state and
        returns the builder so calls can be chained. Builders are not
        thread-safe.
        """

        def __init__(
            self,
            bindings: Optional[Mapping[R, "set[Identity] | frozenset[Identity]"]] = None,
            etag: Optional[str] = None,
            version: Optional[int] = None,
        ) -> None:
            self._bindings: dict[R, set[Identity]] = {}
            self._etag = etag
            self._version = version
            if bindings is not None:
                self.set_bindings(bindings)

        def set_bindings(self: B, bindings: Mapping[R, "set[Identity] | frozenset[Identity]"]) -> B:
            """Replace all bindings with a copy of ``bindings``.

            The whole mapping is validated before anything is replaced. Roles
            mapped to an empty set are dropped.

            Raises
            ------
            InvalidArgumentError
                If the mapping, a role, an identity set or an identity is ``None``.
            """
            if bindings is None:
                raise InvalidArgumentError(_NULL_BINDINGS)

            replacement: dict[R, set[Identity]] = {}
            for role, identities in bindings.items():
                if role is None:
                    raise InvalidArgumentError(_NULL_ROLE)
                if identities is None:
                    raise InvalidArgumentError(_NULL_IDENTITY_SET)
                checked = _checked_identities(identities)
                if checked:
                    replacement[role] = checked

            self._bindings = replacement
            return self

        def remove_role(self: B, role: R) -> B:
            """Remove every binding of ``role``. Unknown roles are ignored."""
            self._bindings.pop(role, None)
            return self

        def add_identity(self: B, role: R, first: Identity, *others: Identity) -> B:
            """Grant ``role`` to one or more identities.

            Adding an identity that already holds the role has no effect.

            Raises
            ------
            InvalidArgumentError
                If ``role`` or any identity is ``None``; nothing is added then.
            """
            if role is None:
                raise InvalidArgumentError(_NULL_ROLE)
            added = _checked_identities((first, *others))
            self._bindings.setdefault(role, set()).update(added)
            return self

        def remove_identity(self: B, role: R, first: Identity, *others: Identity) -> B:
            """Revoke ``role`` from one or more identities.

            The role disappears once its last identity is removed. Identities
            or roles that are not bound are ignored.
            """
            identities = self._bindings.get(role)
            if identities is None:
                return self
            identities.difference_update((first, *others))
            if not identities:
                del self._bindings[role]
            return self

        def set_etag(self: B, etag: Optional[str]) -> B:
            self._etag = etag
            return self

        def set_version(self: B, version: Optional[int]) -> B:
            self._version = version
            return self

        @abstractmethod
        def build(self) -> "IamPolicy[R]":
            """Return an immutable policy reflecting the builder's current state."""

    def __init__(self, builder: "IamPolicy.Builder[R, B]") -> None:
        self._bindings: Mapping[R, frozenset[Identity]] = MappingProxyType(
            {role: frozenset(identities) for role, identities in builder._bindings.items()}
        )
        self._etag: Optional[str] = builder._etag
        self._version: Optional[int] = builder._version

    @property
    def bindings(self) -> Mapping[R, frozenset[Identity]]:
        return self._bindings

    @property
    def etag(self) -> Optional[str]:
        return self._etag

    @property
    def version(self) -> Optional[int]:
        return self._version

    @abstractmethod
    def to_builder(self) -> "IamPolicy.Builder[R, B]":
        """Return a builder seeded with a copy of this policy."""

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return (
            dict(self._bindings) == dict(other._bindings)  # type: ignore[attr-defined]
            and self._etag == other._etag  # type: ignore[attr-defined]
            and self._version == other._version  # type: ignore[attr-defined]
        )

    def __hash__(self) -> int:
        return hash((type(self), frozenset(self._bindings.items()), self._etag, self._version))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(bindings={dict(self._bindings)!r}, "
            f"etag={self._etag!r}, version={self._version!r})"
        )


__all__ = ["IamPolicy"]
