"""Tests for capability verification"""

import dataclasses

import pytest

from quorum_oracle.capabilities import verify_owner, verify_validator
from quorum_oracle.engine import create, list_validator
from quorum_oracle.errors import AuthError, OwnerMismatch, ValidatorMismatch
from quorum_oracle.models import CapabilityRole, OwnerCapability, ValidatorCapability


@pytest.fixture
def two_oracles():
    o1, owner1 = create(100, 3)
    o2, owner2 = create(100, 3)
    v1 = list_validator(o1, owner1, "alice")
    v2 = list_validator(o2, owner2, "bob")
    return (o1, owner1, v1), (o2, owner2, v2)


class TestCapabilityModels:
    def test_roles(self):
        assert OwnerCapability(id="c", oracle_id="o").role == CapabilityRole.OWNER
        assert ValidatorCapability(id="c", oracle_id="o").role == CapabilityRole.VALIDATOR

    def test_binding_immutable(self):
        cap = OwnerCapability(id="c", oracle_id="o")
        with pytest.raises(dataclasses.FrozenInstanceError):
            cap.oracle_id = "other"

    def test_to_dict(self):
        cap = ValidatorCapability(id="c", oracle_id="o", issued_to="alice")
        assert cap.to_dict() == {
            "id": "c",
            "oracle_id": "o",
            "role": "validator",
            "issued_to": "alice",
        }


class TestVerifyOwner:
    def test_own_oracle(self, two_oracles):
        (o1, owner1, _), (o2, owner2, _) = two_oracles
        verify_owner(o1, owner1)
        verify_owner(o2, owner2)

    def test_other_oracle(self, two_oracles):
        (o1, owner1, _), (o2, owner2, _) = two_oracles
        with pytest.raises(OwnerMismatch):
            verify_owner(o2, owner1)
        with pytest.raises(OwnerMismatch):
            verify_owner(o1, owner2)

    def test_validator_cap_is_not_owner(self, two_oracles):
        (o1, _, v1), _ = two_oracles
        with pytest.raises(OwnerMismatch):
            verify_owner(o1, v1)

    def test_bearer_token(self, two_oracles):
        # Any token with a matching binding is accepted, whoever holds it
        (o1, _, _), _ = two_oracles
        verify_owner(o1, OwnerCapability(id="copy", oracle_id=o1.id))

    def test_is_auth_error(self, two_oracles):
        (o1, owner1, _), (o2, _, _) = two_oracles
        with pytest.raises(AuthError):
            verify_owner(o2, owner1)


class TestVerifyValidator:
    def test_own_oracle(self, two_oracles):
        (o1, _, v1), (o2, _, v2) = two_oracles
        verify_validator(o1, v1)
        verify_validator(o2, v2)

    def test_other_oracle(self, two_oracles):
        (o1, _, v1), (o2, _, v2) = two_oracles
        with pytest.raises(ValidatorMismatch):
            verify_validator(o2, v1)
        with pytest.raises(ValidatorMismatch):
            verify_validator(o1, v2)

    def test_owner_cap_is_not_validator(self, two_oracles):
        (o1, owner1, _), _ = two_oracles
        with pytest.raises(ValidatorMismatch):
            verify_validator(o1, owner1)

    def test_error_names_oracle(self, two_oracles):
        (o1, _, v1), (o2, _, _) = two_oracles
        with pytest.raises(ValidatorMismatch) as exc_info:
            verify_validator(o2, v1)
        assert o2.id in str(exc_info.value)
