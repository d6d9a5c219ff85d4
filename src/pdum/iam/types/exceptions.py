"""Custom exceptions for pdum.iam types."""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised when a policy builder receives ``None`` where a value is required.

    Each violated precondition carries its own message so the role, the
    identity, the identity set and the bindings map can be told apart.
    """

    __slots__ = ()


__all__ = ["InvalidArgumentError"]
