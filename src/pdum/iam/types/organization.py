"""Organization resource implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from google.auth.credentials import Credentials

from .resource import Resource


@dataclass
class Organization(Resource):
    """A GCP organization addressed by its numeric id."""

    id: str
    _credentials: Optional[Credentials] = field(default=None, repr=False, compare=False)

    ORGANIZATION_ADMIN_ROLES = (
        "roles/resourcemanager.organizationAdmin",
        "roles/iam.securityAdmin",
        "roles/resourcemanager.projectIamAdmin",
    )

    def full_resource_name(self) -> str:
        return f"organizations/{self.id}"

    def admins(self, *, credentials: Optional[Credentials] = None) -> dict[str, list[str]]:
        """Map each administrative role to the members currently holding it."""
        policy = self.policy(credentials=credentials)
        admins: dict[str, list[str]] = {}
        for role, identities in policy.bindings.items():
            if role.name in self.ORGANIZATION_ADMIN_ROLES:
                admins[role.name] = sorted(identity.str_value() for identity in identities)
        return admins


__all__ = ["Organization"]
