import json

from sspa.policy import assume_role_policy, render_policy, role_name_for


def _expected(pool_id):
    return {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {"Federated": "cognito-identity.amazonaws.com"},
                "Action": "sts:AssumeRoleWithWebIdentity",
                "Condition": {
                    "StringEquals": {"cognito-identity.amazonaws.com:aud": pool_id},
                    "ForAnyValue:StringLike": {"cognito-identity.amazonaws.com:amr": "authenticated"},
                },
            }
        ],
    }


def _string_values(node):
    if isinstance(node, dict):
        for value in node.values():
            yield from _string_values(value)
    elif isinstance(node, list):
        for value in node:
            yield from _string_values(value)
    else:
        yield node


def test_role_name():
    assert role_name_for("learnjs") == "learnjs_cognito_authenticated"
    assert role_name_for("") == "_cognito_authenticated"


def test_policy_matches_template():
    pool_id = "us-east-1:0f6b9a52-1d2c-4b3e-9c1a-2f3e4d5c6b7a"
    assert json.loads(render_policy(pool_id)) == _expected(pool_id)


def test_pool_id_substituted_once():
    pool_id = "us-east-1:11111111-2222-3333-4444-555555555555"
    values = list(_string_values(assume_role_policy(pool_id)))
    assert values.count(pool_id) == 1


def test_pool_id_with_quotes_is_escaped():
    pool_id = 'us-east-1:"}, "Effect": "Deny\\'
    document = json.loads(render_policy(pool_id))
    assert document == _expected(pool_id)
    assert document["Statement"][0]["Condition"]["StringEquals"]["cognito-identity.amazonaws.com:aud"] == pool_id
