"""Typed Google Cloud IAM policies"""

from pdum.iam.admin import (
    add_iam_binding,
    get_iam_policy,
    remove_iam_binding,
    set_iam_policy,
    test_iam_permissions,
)
from pdum.iam.types import (
    Folder,
    IamPolicy,
    Identity,
    IdentityType,
    InvalidArgumentError,
    Organization,
    Policy,
    Project,
    Resource,
    Role,
    resource_from_name,
)

__version__ = "0.1.0-alpha"


__all__ = [
    "__version__",
    "add_iam_binding",
    "get_iam_policy",
    "remove_iam_binding",
    "set_iam_policy",
    "test_iam_permissions",
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
