"""Project resource implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from google.auth.credentials import Credentials

from .resource import Resource


@dataclass
class Project(Resource):
    """A GCP project addressed by its project id."""

    id: str
    _credentials: Optional[Credentials] = field(default=None, repr=False, compare=False)

    def full_resource_name(self) -> str:
        return f"projects/{self.id}"


__all__ = ["Project"]
