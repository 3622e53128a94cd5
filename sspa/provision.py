# provision.py
"""
Provisioning flows: S3 website bucket creation, bucket deployment, and the
identity pool + authenticated role sequence.

The identity pool flow is re-runnable. Pool and role creation are skipped
when their descriptor is already present in the pool directory; the trust
policy is regenerated and the role binding re-applied on every run.
"""

import logging
import os
from dataclasses import dataclass

from sspa import state
from sspa.errors import MissingPoolConfigError
from sspa.extract import extract
from sspa.policy import render_policy, role_name_for
from sspa.state import ResourceState, descriptor_present, write_text_atomic

logger = logging.getLogger(__name__)


def website_endpoint(bucket_name, region):
    return f"http://{bucket_name}.s3-website-{region}.amazonaws.com"


def create_bucket(runner, bucket_name):
    """Create the bucket, open it to public reads, enable website hosting and return the endpoint URL."""
    runner.create_bucket(bucket_name)
    runner.allow_public_access(bucket_name)
    runner.configure_website(bucket_name)
    return website_endpoint(bucket_name, runner.region())


def deploy_bucket(runner, bucket_name, source_dir):
    return runner.sync_directory(source_dir, bucket_name)


@dataclass
class PoolPaths:
    directory: str

    def _path(self, name):
        return os.path.join(self.directory, name)

    @property
    def config(self):
        return self._path(state.CONFIG_FILE)

    @property
    def pool_info(self):
        return self._path(state.POOL_INFO_FILE)

    @property
    def role_info(self):
        return self._path(state.ROLE_INFO_FILE)

    @property
    def policy(self):
        return self._path(state.POLICY_FILE)


@dataclass
class PoolResult:
    pool_id: str
    pool_name: str
    role_name: str
    role_arn: str
    pool_created: bool
    role_created: bool


def pool_name_for(pool_dir):
    return os.path.basename(os.path.normpath(pool_dir))


def create_pool(runner, pool_dir):
    paths = PoolPaths(pool_dir)
    if not os.path.isfile(paths.config):
        raise MissingPoolConfigError(paths.config)

    progress = state.load_state(pool_dir)
    logger.info(f"Provisioning identity pool in {pool_dir} (pool: {progress['pool'].value}, "
                f"role: {progress['role'].value})")

    pool_created = False
    if descriptor_present(paths.pool_info):
        logger.info(f"Identity pool already created ({paths.pool_info}), skipping.")
    else:
        runner.create_identity_pool(pool_name_for(pool_dir), paths.config, paths.pool_info)
        pool_created = True
        progress["pool"] = ResourceState.CREATED
        state.save_state(pool_dir, progress)

    pool_id = extract(paths.pool_info, "IdentityPoolId")
    pool_name = extract(paths.pool_info, "IdentityPoolName")
    role_name = role_name_for(pool_name)

    write_text_atomic(paths.policy, render_policy(pool_id))

    role_created = False
    if descriptor_present(paths.role_info):
        logger.info(f"Role already created ({paths.role_info}), skipping.")
    else:
        runner.create_role(role_name, paths.policy, paths.role_info)
        role_created = True
        progress["role"] = ResourceState.CREATED
        state.save_state(pool_dir, progress)

    # Binding replaces the pool's role map, so it is always re-applied.
    pool_id = extract(paths.pool_info, "IdentityPoolId")
    role_arn = extract(paths.role_info, "Role.Arn")
    runner.set_identity_pool_roles(pool_id, role_arn)
    progress["pool"] = ResourceState.BOUND
    progress["role"] = ResourceState.BOUND
    state.save_state(pool_dir, progress)

    return PoolResult(
        pool_id=pool_id,
        pool_name=pool_name,
        role_name=role_name,
        role_arn=role_arn,
        pool_created=pool_created,
        role_created=role_created,
    )
