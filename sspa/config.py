# config.py
"""
Explicit AWS settings for a run. Everything the flows need from the
environment (region, profile, endpoint) is carried here instead of being
read from ambient process state.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

import boto3
import botocore

from sspa.errors import CredentialsNotFoundError, RegionNotConfiguredError


@dataclass(frozen=True)
class ProvisionConfig:
    region: Optional[str] = None
    profile: Optional[str] = None
    endpoint_url: Optional[str] = None

    @staticmethod
    def from_env() -> "ProvisionConfig":
        profile = os.getenv("SSPA_PROFILE") or os.getenv("AWS_PROFILE")
        region = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
        endpoint_url = os.getenv("SSPA_ENDPOINT_URL")
        return ProvisionConfig(region=region, profile=profile, endpoint_url=endpoint_url)

    def override(self, **values) -> "ProvisionConfig":
        """Return a copy with every non-None value in `values` applied."""
        return replace(self, **{k: v for k, v in values.items() if v is not None})

    def session(self):
        try:
            return boto3.session.Session(profile_name=self.profile, region_name=self.region)
        except botocore.exceptions.ProfileNotFound as e:
            raise CredentialsNotFoundError(self.profile) from e

    def client(self, service, session=None):
        session = session or self.session()
        return session.client(service, endpoint_url=self.endpoint_url)


def resolve_region(session):
    """The region the session will talk to, or RegionNotConfiguredError."""
    if not session.region_name:
        raise RegionNotConfiguredError()
    return session.region_name


def check_environment(config):
    """Fail early when credentials or a default region are missing."""
    session = config.session()
    if session.get_credentials() is None:
        raise CredentialsNotFoundError(config.profile)
    return resolve_region(session)
