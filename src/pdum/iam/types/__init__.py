"""Public exports for pdum.iam types."""

from __future__ import annotations

from .exceptions import InvalidArgumentError
from .folder import Folder
from .iam_policy import IamPolicy
from .identity import Identity, IdentityType
from .organization import Organization
from .policy import Policy
from .project import Project
from .resource import Resource, resource_from_name
from .role import Role

__all__ = [
    "Folder",
    "IamPolicy",
    "Identity",
    "IdentityType",
    "InvalidArgumentError",
    "Organization",
    "Policy",
    "Project",
    "Resource",
    "Role",
    "resource_from_name",
]
