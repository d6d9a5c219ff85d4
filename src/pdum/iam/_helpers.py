"""Internal helper functions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable, Optional

import backoff
from googleapiclient.errors import HttpError

if TYPE_CHECKING:
    from google.auth.credentials import Credentials

    from pdum.iam.types import Policy

logger = logging.getLogger(__name__)

# HTTP statuses returned when the etag sent with setIamPolicy is stale.
_CONFLICT_STATUSES = (409, 412)


def _collection(crm, resource_name: str):
    """Return the CRM v3 collection that owns ``resource_name``."""
    if resource_name.startswith("projects/"):
        return crm.projects()
    if resource_name.startswith("folders/"):
        return crm.folders()
    if resource_name.startswith("organizations/"):
        return crm.organizations()
    raise ValueError(f"Unsupported resource_name: {resource_name}")


def _get_iam_policy(
    *,
    credentials: "Credentials",
    resource_name: str,
    requested_policy_version: Optional[int] = None,
) -> "Policy":
    """Fetch the IAM policy for a resource using Cloud Resource Manager v3.

    Parameters
    ----------
    credentials : Credentials
        Materialized credentials to authenticate the request.
    resource_name : str
        Full resource name, e.g., ``projects/{id}``, ``folders/{id}``,
        or ``organizations/{id}``.
    requested_policy_version : int, optional
        Value for ``options.requestedPolicyVersion``. Omitted when ``None``.

    Returns
    -------
    Policy
        The decoded policy, carrying the server's etag.
    """
    from pdum.iam._clients import crm_v3
    from pdum.iam.types import Policy

    body: dict = {}
    if requested_policy_version is not None:
        body["options"] = {"requestedPolicyVersion": requested_policy_version}

    collection = _collection(crm_v3(credentials), resource_name)
    logger.debug("getIamPolicy %s", resource_name)
    response = collection.getIamPolicy(resource=resource_name, body=body).execute()
    return Policy.from_api_repr(response)


def _set_iam_policy(*, credentials: "Credentials", resource_name: str, policy: "Policy") -> "Policy":
    """Replace the IAM policy of a resource and return the server's copy.

    If ``policy`` carries an etag the server rejects the write when the
    policy changed since it was read.
    """
    from pdum.iam._clients import crm_v3
    from pdum.iam.types import Policy

    collection = _collection(crm_v3(credentials), resource_name)
    logger.debug("setIamPolicy %s (etag=%s)", resource_name, policy.etag)
    response = collection.setIamPolicy(resource=resource_name, body={"policy": policy.to_api_repr()}).execute()
    return Policy.from_api_repr(response)


def _test_iam_permissions(
    *,
    credentials: "Credentials",
    resource_name: str,
    permissions: Iterable[str],
) -> list[str]:
    """Return the subset of ``permissions`` the caller holds on the resource."""
    from pdum.iam._clients import crm_v3

    if isinstance(permissions, str):
        permissions = [permissions]

    collection = _collection(crm_v3(credentials), resource_name)
    body = {"permissions": list(permissions)}
    response = collection.testIamPermissions(resource=resource_name, body=body).execute()
    return list(response.get("permissions", []))


def _is_stale_etag(exc: Exception) -> bool:
    return isinstance(exc, HttpError) and exc.resp.status in _CONFLICT_STATUSES


def _log_conflict(details: dict) -> None:
    logger.info(
        "IAM policy changed concurrently; retrying in %.1fs (attempt %d)",
        details.get("wait", 0.0),
        details["tries"],
    )


@backoff.on_exception(
    backoff.expo,
    HttpError,
    max_tries=5,
    giveup=lambda exc: not _is_stale_etag(exc),
    on_backoff=_log_conflict,
)
def _modify_iam_policy(
    *,
    credentials: "Credentials",
    resource_name: str,
    mutate: Callable[["Policy.Builder"], object],
) -> "Policy":
    """Read-modify-write a resource's policy.

    ``mutate`` receives a builder seeded with the current policy (including its
    etag) and edits it in place. The write is retried from a fresh read when
    the server reports a stale etag.
    """
    current = _get_iam_policy(credentials=credentials, resource_name=resource_name)
    builder = current.to_builder()
    mutate(builder)
    updated = builder.build()
    if updated == current:
        logger.debug("IAM policy for %s unchanged; skipping write", resource_name)
        return current
    return _set_iam_policy(credentials=credentials, resource_name=resource_name, policy=updated)
