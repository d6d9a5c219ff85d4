"""Folder resource implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from google.auth.credentials import Credentials

from .resource import Resource


@dataclass
class Folder(Resource):
    """A GCP folder addressed by its numeric id."""

    id: str
    _credentials: Optional[Credentials] = field(default=None, repr=False, compare=False)

    def full_resource_name(self) -> str:
        return f"folders/{self.id}"


__all__ = ["Folder"]
