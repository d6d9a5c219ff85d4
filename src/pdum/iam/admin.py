"""IAM policy operations addressed by full resource name.

These are thin conveniences over :class:`pdum.iam.types.Resource` for callers
that hold a resource name string (``projects/{id}``, ``folders/{id}`` or
``organizations/{id}``) rather than a resource object. Credentials default to
Google Cloud Application Default Credentials (ADC).
"""

from __future__ import annotations

from typing import Iterable, Optional

from google.auth.credentials import Credentials

from pdum.iam.types import Identity, Policy, Role, resource_from_name


def get_iam_policy(
    resource_name: str,
    *,
    credentials: Optional[Credentials] = None,
    requested_policy_version: Optional[int] = None,
) -> Policy:
    """Fetch the IAM policy of a resource.

    Args:
        resource_name: Full resource name, e.g. ``"projects/my-project"``.
        credentials: Google Cloud credentials to use. If None, uses Application Default Credentials.
        requested_policy_version: Policy schema version to request from the server.

    Returns:
        The decoded policy, including the etag needed for a safe update.

    Raises:
        ValueError: If the resource name is not supported
        googleapiclient.errors.HttpError: If the API call fails

    Example:
        >>> from pdum.iam.admin import get_iam_policy
        >>> policy = get_iam_policy("projects/my-project")
        >>> for role, identities in policy.bindings.items():
        ...     print(role, sorted(str(i) for i in identities))
        roles/owner ['user:me@example.com']
    """
    resource = resource_from_name(resource_name, credentials=credentials)
    return resource.policy(requested_policy_version=requested_policy_version)


def set_iam_policy(resource_name: str, policy: Policy, *, credentials: Optional[Credentials] = None) -> Policy:
    """Replace the IAM policy of a resource.

    Args:
        resource_name: Full resource name.
        policy: The complete new policy. Its etag, if any, is sent along so a
            concurrent modification makes the call fail instead of being lost.
        credentials: Google Cloud credentials to use. If None, uses Application Default Credentials.

    Returns:
        The policy as stored by the server (with a fresh etag).
    """
    resource = resource_from_name(resource_name, credentials=credentials)
    return resource.replace_policy(policy)


def test_iam_permissions(
    resource_name: str,
    permissions: Iterable[str],
    *,
    credentials: Optional[Credentials] = None,
) -> list[str]:
    """Return the subset of ``permissions`` the caller holds on a resource."""
    resource = resource_from_name(resource_name, credentials=credentials)
    return resource.test_permissions(permissions)


def add_iam_binding(
    resource_name: str,
    role: Role | str,
    *members: Identity | str,
    credentials: Optional[Credentials] = None,
) -> Policy:
    """Grant ``role`` to ``members`` on a resource and return the updated policy."""
    if not members:
        raise ValueError("At least one member is required")
    resource = resource_from_name(resource_name, credentials=credentials)
    return resource.add_binding(role, *members)


def remove_iam_binding(
    resource_name: str,
    role: Role | str,
    *members: Identity | str,
    credentials: Optional[Credentials] = None,
) -> Policy:
    """Revoke ``role`` from ``members`` on a resource and return the updated policy."""
    if not members:
        raise ValueError("At least one member is required")
    resource = resource_from_name(resource_name, credentials=credentials)
    return resource.remove_binding(role, *members)

