# runner.py
"""
Thin wrapper over the boto3 clients the flows need. One blocking API call per
method, no retries. Creation responses are written to descriptor files.
"""

import json
import logging
import mimetypes
import os
from dataclasses import dataclass
from datetime import datetime, timezone

import boto3
import botocore

from sspa.config import resolve_region
from sspa.errors import CloudCallError, MalformedDescriptorError, SourceDirectoryMissingError
from sspa.state import write_json_atomic

logger = logging.getLogger(__name__)

INDEX_DOCUMENT = "index.html"
ERROR_DOCUMENT = "error.html"


@dataclass
class SyncResult:
    uploaded: list
    skipped: list


def _without_metadata(response):
    return {k: v for k, v in response.items() if k != "ResponseMetadata"}


def _error_code(exc):
    return exc.response.get("Error", {}).get("Code", "Unknown")


class CloudRunner:
    def __init__(self, config):
        self.config = config
        self._session = config.session()
        self._region = resolve_region(self._session)
        self.s3 = config.client("s3", self._session)
        self.iam = config.client("iam", self._session)
        self.cognito = config.client("cognito-identity", self._session)

    def region(self):
        return self._region

    def _call(self, operation, method, **kwargs):
        try:
            return method(**kwargs)
        except botocore.exceptions.ClientError as e:
            raise CloudCallError(operation, _error_code(e), str(e)) from e

    # --- S3 ---

    def create_bucket(self, bucket_name):
        region = self.region()
        params = {"Bucket": bucket_name}
        if region != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": region}
        logger.info(f"Creating bucket: {bucket_name} in region {region}")
        try:
            self.s3.create_bucket(**params)
        except botocore.exceptions.ClientError as e:
            if _error_code(e) == "BucketAlreadyOwnedByYou":
                logger.info(f"Bucket '{bucket_name}' already exists and is owned by you.")
                return
            raise CloudCallError("create_bucket", _error_code(e), str(e)) from e
        logger.info(f"Bucket created: {bucket_name}")

    def allow_public_access(self, bucket_name):
        """
        Lift Block Public Access and re-enable object ACLs. New buckets default
        to BucketOwnerEnforced, which rejects the public-read ACL used by sync.
        """
        self._call(
            "put_public_access_block",
            self.s3.put_public_access_block,
            Bucket=bucket_name,
            PublicAccessBlockConfiguration={
                "BlockPublicAcls": False,
                "IgnorePublicAcls": False,
                "BlockPublicPolicy": False,
                "RestrictPublicBuckets": False,
            },
        )
        self._call(
            "put_bucket_ownership_controls",
            self.s3.put_bucket_ownership_controls,
            Bucket=bucket_name,
            OwnershipControls={"Rules": [{"ObjectOwnership": "ObjectWriter"}]},
        )
        logger.info(f"Enabled public ACLs for bucket: {bucket_name}")

    def configure_website(self, bucket_name, index_document=INDEX_DOCUMENT,
                          error_document=ERROR_DOCUMENT):
        self._call(
            "put_bucket_website",
            self.s3.put_bucket_website,
            Bucket=bucket_name,
            WebsiteConfiguration={
                "IndexDocument": {"Suffix": index_document},
                "ErrorDocument": {"Key": error_document},
            },
        )
        logger.info(f"Configured bucket '{bucket_name}' for static website hosting.")

    def _remote_objects(self, bucket_name):
        objects = {}
        paginator = self.s3.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(Bucket=bucket_name):
                for obj in page.get("Contents", []):
                    objects[obj["Key"]] = obj
        except botocore.exceptions.ClientError as e:
            raise CloudCallError("list_objects_v2", _error_code(e), str(e)) from e
        return objects

    def sync_directory(self, source_dir, bucket_name):
        """
        Upload new or changed files under `source_dir` to the bucket, publicly
        readable. Remote objects without a local counterpart are left alone.
        """
        if not os.path.isdir(source_dir):
            raise SourceDirectoryMissingError(source_dir)
        source_abs = os.path.abspath(source_dir)
        remote = self._remote_objects(bucket_name)
        result = SyncResult(uploaded=[], skipped=[])

        for root, dirs, files in os.walk(source_abs):
            dirs.sort()
            for filename in sorted(files):
                local_path = os.path.join(root, filename)
                key = os.path.relpath(local_path, source_abs).replace(os.sep, "/")
                if not _needs_upload(local_path, remote.get(key)):
                    result.skipped.append(key)
                    continue
                content_type, _ = mimetypes.guess_type(local_path)
                extra_args = {
                    "ACL": "public-read",
                    "ContentType": content_type or "application/octet-stream",
                }
                logger.info(f"upload: {local_path} to s3://{bucket_name}/{key}")
                try:
                    self.s3.upload_file(local_path, bucket_name, key, ExtraArgs=extra_args)
                except boto3.exceptions.S3UploadFailedError as e:
                    raise CloudCallError("upload_file", "S3UploadFailed", str(e)) from e
                except botocore.exceptions.ClientError as e:
                    raise CloudCallError("upload_file", _error_code(e), str(e)) from e
                result.uploaded.append(key)

        logger.info(
            f"Sync to '{bucket_name}' finished: {len(result.uploaded)} uploaded, "
            f"{len(result.skipped)} unchanged."
        )
        return result

    # --- IAM / Cognito ---

    def create_identity_pool(self, pool_name, config_path, output_path):
        with open(config_path) as f:
            try:
                request = json.load(f)
            except json.JSONDecodeError as e:
                raise MalformedDescriptorError(config_path, str(e)) from e
        if not isinstance(request, dict):
            raise MalformedDescriptorError(config_path, "top level is not a JSON object")
        request["IdentityPoolName"] = pool_name
        request.setdefault("AllowUnauthenticatedIdentities", False)

        logger.info(f"Creating identity pool '{pool_name}' from {config_path}")
        response = self._call(
            "create_identity_pool", self.cognito.create_identity_pool, **request
        )
        descriptor = _without_metadata(response)
        write_json_atomic(output_path, descriptor)
        logger.info(f"Identity pool created: {descriptor.get('IdentityPoolId')}")
        return descriptor

    def create_role(self, role_name, policy_path, output_path):
        with open(policy_path) as f:
            policy_document = f.read()
        logger.info(f"Creating role '{role_name}'")
        response = self._call(
            "create_role",
            self.iam.create_role,
            RoleName=role_name,
            AssumeRolePolicyDocument=policy_document,
        )
        descriptor = _without_metadata(response)
        write_json_atomic(output_path, descriptor)
        logger.info(f"Role created: {descriptor['Role']['Arn']}")
        return descriptor

    def set_identity_pool_roles(self, pool_id, role_arn):
        self._call(
            "set_identity_pool_roles",
            self.cognito.set_identity_pool_roles,
            IdentityPoolId=pool_id,
            Roles={"authenticated": role_arn},
        )
        logger.info(f"Bound {role_arn} to identity pool {pool_id} as authenticated role")


def _needs_upload(local_path, remote_obj):
    if remote_obj is None:
        return True
    stat = os.stat(local_path)
    if stat.st_size != remote_obj["Size"]:
        return True
    # S3 timestamps have whole-second precision.
    local_mtime = datetime.fromtimestamp(int(stat.st_mtime), tz=timezone.utc)
    return local_mtime > remote_obj["LastModified"]
