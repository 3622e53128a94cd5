# policy.py
"""Trust policy and role naming for identity pool authenticated roles."""

import json

ROLE_SUFFIX = "_cognito_authenticated"
COGNITO_PRINCIPAL = "cognito-identity.amazonaws.com"


def role_name_for(pool_name):
    return pool_name + ROLE_SUFFIX


def assume_role_policy(pool_id):
    """Allow authenticated identities of `pool_id` to assume the role via web identity."""
    return {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {"Federated": COGNITO_PRINCIPAL},
                "Action": "sts:AssumeRoleWithWebIdentity",
                "Condition": {
                    "StringEquals": {f"{COGNITO_PRINCIPAL}:aud": pool_id},
                    "ForAnyValue:StringLike": {f"{COGNITO_PRINCIPAL}:amr": "authenticated"},
                },
            }
        ],
    }


def render_policy(pool_id):
    return json.dumps(assume_role_policy(pool_id), indent=2) + "\n"
