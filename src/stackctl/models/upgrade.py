"""Version and upgrade state models."""

from __future__ import annotations

from pydantic import BaseModel

FLAG_ON = "1"
FLAG_OFF = "0"


class VersionInfo(BaseModel):
    """Release versions. Strings are opaque; they are never parsed."""

    current: str = ""
    latest: str = ""
    stable: str = ""


class UpgradeState(BaseModel):
    """Upgrade guard stored in the upgrade namespace."""

    upgrading: bool = False
    desc: str = ""

    @classmethod
    def from_fields(cls, fields: dict[str, str]) -> UpgradeState:
        return cls(
            upgrading=fields.get("upgrading") == FLAG_ON,
            desc=fields.get("desc", ""),
        )


class UpgradeStatus(BaseModel):
    """Read-only upgrade view for operators."""

    version: str
    upgrading: bool = False
    desc: str = ""
    strategy: str = "manual"
