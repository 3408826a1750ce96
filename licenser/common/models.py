"""
Pydantic models for license content, signed licenses and validation results.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from pathlib import Path  # noqa: TC003
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

STATUS_ACTIVE = "active"
STATUS_EXPIRED = "expired"
LICENSE_EXPIRED = "License expired"
LICENSE_NEVER_EXPIRES = "License never expired"


def _sorted_map(mapping: dict[str, Any]) -> dict[str, Any]:
    return {key: mapping[key] for key in sorted(mapping)}


class Service(BaseModel):
    id: str = ""
    name: str = ""
    description: str = ""
    metadata: dict[str, str] = Field(default_factory=dict)

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("metadata", mode="before")
    @classmethod
    def _null_metadata(cls, value: Any) -> Any:
        return {} if value is None else value

    def wire_dict(self) -> dict[str, Any]:
        """Ordered representation with empty optional fields omitted."""
        data: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.description:
            data["description"] = self.description
        if self.metadata:
            data["metadata"] = _sorted_map(self.metadata)
        return data


class License(BaseModel):
    """The signable content of a license."""

    customer: str = ""
    app_id: str = ""
    services: list[Service] = Field(default_factory=list)
    limits: dict[str, int] = Field(default_factory=dict)
    features: dict[str, bool] = Field(default_factory=dict)
    issued_at: int = 0
    expires_at: int = 0
    metadata: dict[str, str] = Field(default_factory=dict)
    version: str = ""
    environment: str = ""

    @field_validator("services", "limits", "features", "metadata", mode="before")
    @classmethod
    def _null_collection(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "services" else {}
        return value

    @field_validator("issued_at", "expires_at", mode="before")
    @classmethod
    def _null_timestamp(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("customer", "app_id", "version", "environment", mode="before")
    @classmethod
    def _null_string(cls, value: Any) -> Any:
        return "" if value is None else value

    def wire_dict(self) -> dict[str, Any]:
        """
        Ordered representation used both on the wire and for signing.

        Field order is fixed, map keys are sorted and empty optional fields
        are omitted, so equal content always produces equal bytes.
        """
        data: dict[str, Any] = {
            "customer": self.customer,
            "app_id": self.app_id,
            "services": [service.wire_dict() for service in self.services],
        }
        if self.limits:
            data["limits"] = _sorted_map(self.limits)
        if self.features:
            data["features"] = _sorted_map(self.features)
        data["issued_at"] = self.issued_at
        if self.expires_at:
            data["expires_at"] = self.expires_at
        if self.metadata:
            data["metadata"] = _sorted_map(self.metadata)
        if self.version:
            data["version"] = self.version
        if self.environment:
            data["environment"] = self.environment
        return data


class SignedLicense(BaseModel):
    """License content plus the signature envelope.

    Only ``data`` is covered by the signature.
    """

    data: License
    signature: str = ""
    key_id: str = ""
    algorithm: str = ""
    created_at: int = 0

    @field_validator("signature", "key_id", "algorithm", mode="before")
    @classmethod
    def _null_string(cls, value: Any) -> Any:
        return "" if value is None else value

    def wire_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "data": self.data.wire_dict(),
            "signature": self.signature,
        }
        if self.key_id:
            data["key_id"] = self.key_id
        if self.algorithm:
            data["algorithm"] = self.algorithm
        data["created_at"] = self.created_at
        return data


class ValidationResult(BaseModel):
    valid: bool = True
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.valid = False
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)


class LicenseInfo(BaseModel):
    """Display-oriented projection of a license."""

    customer: str
    app_id: str
    issued_at: datetime
    expires_at: datetime | None = None
    status: str
    time_until_expiry: str
    services: list[Service] = Field(default_factory=list)
    limits: dict[str, int] = Field(default_factory=dict)
    features: dict[str, bool] = Field(default_factory=dict)
    metadata: dict[str, str] = Field(default_factory=dict)
    version: str = ""
    environment: str = ""


class ManagerConfig(BaseModel):
    private_key_path: Path | None = None
    private_key_pem: str | None = None
    public_key_path: Path | None = None
    public_key_pem: str | None = None
    key_size: int | None = Field(default=None, gt=0)
    generator_mode: bool = False
    log_level: int | None = None
