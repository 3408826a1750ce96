import json

import pytest
from pydantic import ValidationError

from licenser.common.models import (
    License,
    ManagerConfig,
    Service,
    SignedLicense,
    ValidationResult,
)


def test_license_defaults_allow_incomplete_content() -> None:
    lic = License()
    assert lic.customer == ""
    assert lic.services == []
    assert lic.limits == {}
    assert lic.expires_at == 0


def test_license_wire_dict_field_order() -> None:
    lic = License(
        customer="Acme",
        app_id="acme-app",
        services=[Service(id="api", name="API")],
        limits={"users": 5},
        features={"reports": True},
        issued_at=100,
        expires_at=200,
        metadata={"region": "eu"},
        version="1.0",
        environment="production",
    )
    assert list(lic.wire_dict()) == [
        "customer",
        "app_id",
        "services",
        "limits",
        "features",
        "issued_at",
        "expires_at",
        "metadata",
        "version",
        "environment",
    ]


def test_license_wire_dict_omits_empty_optional_fields() -> None:
    lic = License(customer="Acme", app_id="acme-app", services=[Service(id="api")])
    assert lic.wire_dict() == {
        "customer": "Acme",
        "app_id": "acme-app",
        "services": [{"id": "api", "name": ""}],
        "issued_at": 0,
    }


def test_license_wire_dict_sorts_maps() -> None:
    lic = License(limits={"b": 2, "a": 1}, features={"z": True, "m": False})
    data = lic.wire_dict()
    assert list(data["limits"]) == ["a", "b"]
    assert list(data["features"]) == ["m", "z"]


def test_service_wire_dict_optional_fields() -> None:
    service = Service(id="api", name="API", description="REST", metadata={"tier": "gold"})
    assert service.wire_dict() == {
        "id": "api",
        "name": "API",
        "description": "REST",
        "metadata": {"tier": "gold"},
    }


def test_signed_license_from_json_with_nulls() -> None:
    raw = json.dumps(
        {
            "data": {
                "customer": "Acme",
                "app_id": "acme-app",
                "services": None,
                "limits": None,
                "issued_at": 100,
            },
            "signature": "c2ln",
            "created_at": 101,
        }
    )
    signed = SignedLicense.model_validate_json(raw)
    assert signed.data.services == []
    assert signed.data.limits == {}
    assert signed.key_id == ""
    assert signed.algorithm == ""
    assert signed.created_at == 101  # noqa: PLR2004


def test_signed_license_wire_dict_envelope() -> None:
    signed = SignedLicense(
        data=License(customer="Acme"), signature="c2ln", algorithm="RS256", created_at=5
    )
    assert list(signed.wire_dict()) == ["data", "signature", "algorithm", "created_at"]


def test_signed_license_requires_data() -> None:
    with pytest.raises(ValidationError):
        SignedLicense.model_validate_json('{"signature": "abc"}')


def test_validation_result_add_error() -> None:
    result = ValidationResult()
    assert result.valid
    result.add_error("boom")
    result.add_warning("careful")
    assert not result.valid
    assert result.errors == ["boom"]
    assert result.warnings == ["careful"]


def test_manager_config_defaults() -> None:
    config = ManagerConfig()
    assert config.generator_mode is False
    assert config.key_size is None
    assert config.private_key_pem is None


def test_manager_config_key_size_validation() -> None:
    with pytest.raises(ValidationError):
        ManagerConfig(key_size=0)
