"""
Unit tests for request/response schemas.
"""
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from campushub.schemas import PROFILE_SCHEMAS, UserOut, UserUpdate
from campushub.db.models import RoleEnum


@pytest.mark.unit
class TestSchemaConfig:

    def test_user_update_forbids_role(self):
        with pytest.raises(ValidationError):
            UserUpdate(name="Asha", role="committee")

    def test_profile_inputs_forbid_other_variant_fields(self):
        with pytest.raises(ValidationError):
            PROFILE_SCHEMAS[RoleEnum.student](employee_id="T-1")

    def test_user_out_reads_attributes(self):
        row = SimpleNamespace(id="u1", email="asha@example.com", role="student", name="Asha")

        user = UserOut.model_validate(row)

        assert user.id == "u1"
        assert user.role == RoleEnum.student
