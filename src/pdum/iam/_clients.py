"""Internal helpers to construct Google API service clients.

These helpers centralize `googleapiclient.discovery.build` usage to keep
options consistent across the codebase. They are intentionally private; the
public API surface remains in `_helpers.py` and `types`.
"""

from __future__ import annotations

from google.auth.credentials import Credentials
from googleapiclient import discovery


def crm_v3(credentials: Credentials):
    """Cloud Resource Manager v3 service client."""
    return discovery.build("cloudresourcemanager", "v3", credentials=credentials, cache_discovery=False)
