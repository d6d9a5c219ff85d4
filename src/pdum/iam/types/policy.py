"""IAM policy for Cloud Resource Manager resources (projects, folders, organizations)."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .exceptions import InvalidArgumentError
from .iam_policy import IamPolicy
from .identity import Identity
from .role import Role


class Policy(IamPolicy[Role]):
    """Role-keyed policy that marshals to the REST ``Policy`` resource.

    The REST representation looks like::

        {
            "bindings": [{"role": "roles/viewer", "members": ["user:abc@example.com"]}],
            "etag": "BwXhqDZ3nE8=",
            "version": 1,
        }
    """

    __slots__ = ()

    class Builder(IamPolicy.Builder[Role, "Policy.Builder"]):
        def build(self) -> Policy:
            return Policy(self)

    @classmethod
    def builder(cls) -> Policy.Builder:
        return cls.Builder()

    def to_builder(self) -> Policy.Builder:
        return Policy.Builder(self.bindings, self.etag, self.version)

    def to_api_repr(self) -> dict[str, Any]:
        """Encode as a REST ``Policy`` resource, sorted by role then member."""
        bindings = []
        for role in sorted(self.bindings, key=lambda r: r.name):
            members = sorted(identity.str_value() for identity in self.bindings[role])
            bindings.append({"role": role.name, "members": members})

        resource: dict[str, Any] = {"bindings": bindings}
        if self.etag is not None:
            resource["etag"] = self.etag
        if self.version is not None:
            resource["version"] = self.version
        return resource

    @classmethod
    def from_api_repr(cls, resource: Optional[Mapping[str, Any]]) -> Policy:
        """Decode a REST ``Policy`` resource.

        Parameters
        ----------
        resource : Mapping
            Response body of ``getIamPolicy``/``setIamPolicy`` (or a policy file).

        Returns
        -------
        Policy
            The decoded policy. Bindings listed more than once for the same
            role are merged; bindings without members are skipped.

        Raises
        ------
        InvalidArgumentError
            If ``resource`` is ``None``, bindings or members are not lists, a
            binding is not a mapping or has no role, a member string cannot be
            parsed, or a binding carries a condition.
        """
        if resource is None:
            raise InvalidArgumentError("The policy resource cannot be None.")

        raw_bindings = resource.get("bindings") or []
        if not isinstance(raw_bindings, list):
            raise InvalidArgumentError("Policy bindings must be a list.")

        bindings: dict[Role, set[Identity]] = {}
        for binding in raw_bindings:
            if not isinstance(binding, Mapping):
                raise InvalidArgumentError(f"A policy binding must be a mapping, got {binding!r}.")
            if "condition" in binding:
                raise InvalidArgumentError(
                    f"Conditional role bindings are not supported (role {binding.get('role')!r})."
                )
            role_name = binding.get("role")
            if not role_name:
                raise InvalidArgumentError("A policy binding must name a role.")
            raw_members = binding.get("members") or []
            if not isinstance(raw_members, list):
                raise InvalidArgumentError(f"Members of role {role_name!r} must be a list.")
            members = [Identity.from_str(member) for member in raw_members]
            if members:
                bindings.setdefault(Role.of(role_name), set()).update(members)

        version = resource.get("version")
        return cls.Builder(
            bindings,
            etag=resource.get("etag"),
            version=int(version) if version is not None else None,
        ).build()


__all__ = ["Policy"]
