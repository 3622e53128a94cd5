import json

import pytest

from sspa.errors import DescriptorMissingError, FieldMissingError, MalformedDescriptorError
from sspa.extract import extract, extract_field


@pytest.fixture
def role_info(tmp_path):
    path = tmp_path / "role_info.json"
    path.write_text(json.dumps({
        "Role": {
            "RoleName": "learnjs_cognito_authenticated",
            "Arn": "arn:aws:iam::123456789012:role/learnjs_cognito_authenticated",
            "MaxSessionDuration": 3600,
        }
    }))
    return str(path)


def test_extract_nested_field(role_info):
    assert extract(role_info, "Role.Arn") == "arn:aws:iam::123456789012:role/learnjs_cognito_authenticated"


def test_extract_returns_plain_string_for_numbers(role_info):
    assert extract(role_info, "Role.MaxSessionDuration") == "3600"


def test_extract_missing_field(role_info):
    with pytest.raises(FieldMissingError) as e:
        extract(role_info, "Role.Path")
    assert e.value.field_path == "Role.Path"


def test_extract_object_is_not_a_field(role_info):
    with pytest.raises(FieldMissingError):
        extract(role_info, "Role")


def test_extract_missing_file(tmp_path):
    with pytest.raises(DescriptorMissingError):
        extract(str(tmp_path / "nope.json"), "Role.Arn")


def test_extract_empty_file(tmp_path):
    path = tmp_path / "pool_info.json"
    path.write_text("")
    with pytest.raises(MalformedDescriptorError):
        extract(str(path), "IdentityPoolId")


def test_extract_garbage(tmp_path):
    path = tmp_path / "pool_info.json"
    path.write_text("An error occurred (AccessDenied)")
    with pytest.raises(MalformedDescriptorError):
        extract(str(path), "IdentityPoolId")


def test_extract_field_through_scalar():
    with pytest.raises(FieldMissingError):
        extract_field({"IdentityPoolId": "us-east-1:abc"}, "IdentityPoolId.Name")


def test_extract_field_bool():
    assert extract_field({"AllowUnauthenticatedIdentities": False}, "AllowUnauthenticatedIdentities") == "false"
