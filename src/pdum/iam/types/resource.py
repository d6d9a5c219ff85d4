"""Shared resource base classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, Optional

import google.auth
from google.auth.credentials import Credentials

from .identity import Identity
from .role import Role

if TYPE_CHECKING:
    from .policy import Policy


class Resource(ABC):
    """Abstract base for CRM-addressable resources that carry an IAM policy."""

    _credentials: Optional[Credentials]

    @abstractmethod
    def full_resource_name(self) -> str:
        """Return the fully qualified resource name (``projects/{id}``, ``folders/{id}``, ``organizations/{id}``)."""

    def _get_credentials(self, *, credentials: Optional[Credentials] = None) -> Credentials:
        """Get credentials for API calls (explicit > stored > ADC)."""
        if credentials is not None:
            return credentials
        if getattr(self, "_credentials", None) is not None:
            return self._credentials  # type: ignore[attr-defined]
        creds, _ = google.auth.default()
        return creds

    def policy(self, *, credentials: Optional[Credentials] = None, requested_policy_version: Optional[int] = None) -> Policy:
        """Fetch this resource's IAM policy."""
        from pdum.iam._helpers import _get_iam_policy

        creds = self._get_credentials(credentials=credentials)
        return _get_iam_policy(
            credentials=creds,
            resource_name=self.full_resource_name(),
            requested_policy_version=requested_policy_version,
        )

    def replace_policy(self, policy: Policy, *, credentials: Optional[Credentials] = None) -> Policy:
        """Replace this resource's IAM policy and return the stored policy.

        Pass a policy obtained from :meth:`policy` (or its ``to_builder()``) so
        the etag guards against overwriting concurrent changes.
        """
        from pdum.iam._helpers import _set_iam_policy

        creds = self._get_credentials(credentials=credentials)
        return _set_iam_policy(credentials=creds, resource_name=self.full_resource_name(), policy=policy)

    def test_permissions(self, permissions: Iterable[str], *, credentials: Optional[Credentials] = None) -> list[str]:
        """Return the permissions from ``permissions`` that the caller holds here."""
        from pdum.iam._helpers import _test_iam_permissions

        creds = self._get_credentials(credentials=credentials)
        return _test_iam_permissions(
            credentials=creds,
            resource_name=self.full_resource_name(),
            permissions=permissions,
        )

    def add_binding(
        self,
        role: Role | str,
        member: Identity | str,
        *members: Identity | str,
        credentials: Optional[Credentials] = None,
    ) -> Policy:
        """Grant ``role`` to the given members, retrying on concurrent edits.

        Parameters
        ----------
        role : Role or str
            Role, or a role name such as ``"viewer"`` or ``"roles/viewer"``.
        member, *members : Identity or str
            Identities, or member strings such as ``"user:abc@example.com"``.
        credentials : Credentials, optional
            Explicit credentials to use. When omitted, stored credentials or ADC are used.

        Returns
        -------
        Policy
            The policy after the update.
        """
        from pdum.iam._helpers import _modify_iam_policy

        role = _as_role(role)
        identities = [_as_identity(m) for m in (member, *members)]
        creds = self._get_credentials(credentials=credentials)
        return _modify_iam_policy(
            credentials=creds,
            resource_name=self.full_resource_name(),
            mutate=lambda builder: builder.add_identity(role, *identities),
        )

    def remove_binding(
        self,
        role: Role | str,
        member: Identity | str,
        *members: Identity | str,
        credentials: Optional[Credentials] = None,
    ) -> Policy:
        """Revoke ``role`` from the given members. Unbound members are ignored."""
        from pdum.iam._helpers import _modify_iam_policy

        role = _as_role(role)
        identities = [_as_identity(m) for m in (member, *members)]
        creds = self._get_credentials(credentials=credentials)
        return _modify_iam_policy(
            credentials=creds,
            resource_name=self.full_resource_name(),
            mutate=lambda builder: builder.remove_identity(role, *identities),
        )


def _as_role(role: Role | str) -> Role:
    return role if isinstance(role, Role) else Role.of(role)


def _as_identity(member: Identity | str) -> Identity:
    return member if isinstance(member, Identity) else Identity.from_str(member)


def resource_from_name(resource_name: str, *, credentials: Optional[Credentials] = None) -> Resource:
    """Build a Project, Folder or Organization from its full resource name.

    Raises
    ------
    ValueError
        If ``resource_name`` is not ``projects/{id}``, ``folders/{id}`` or ``organizations/{id}``.
    """
    from .folder import Folder
    from .organization import Organization
    from .project import Project

    kind, sep, resource_id = resource_name.strip("/").partition("/")
    if not sep or not resource_id or "/" in resource_id:
        raise ValueError(f"Unsupported resource_name: {resource_name}")

    if kind == "projects":
        return Project(id=resource_id, _credentials=credentials)
    if kind == "folders":
        return Folder(id=resource_id, _credentials=credentials)
    if kind == "organizations":
        return Organization(id=resource_id, _credentials=credentials)
    raise ValueError(f"Unsupported resource_name: {resource_name}")


__all__ = ["Resource", "resource_from_name"]
