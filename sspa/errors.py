# errors.py
"""Exceptions raised by the provisioning flows. The CLI turns them into exit codes."""


class SspaError(Exception):
    """Base class for every failure the CLI reports."""


class MissingPoolConfigError(SspaError):
    def __init__(self, path):
        super().__init__(f"Identity pool config not found: {path}")
        self.path = path


class DescriptorMissingError(SspaError):
    def __init__(self, path):
        super().__init__(f"Descriptor not found: {path}")
        self.path = path


class MalformedDescriptorError(SspaError):
    def __init__(self, path, reason):
        super().__init__(f"Malformed descriptor {path}: {reason}")
        self.path = path


class FieldMissingError(SspaError):
    def __init__(self, field_path, source="document"):
        super().__init__(f"Field '{field_path}' not found in {source}")
        self.field_path = field_path


class CloudCallError(SspaError):
    """An AWS API call failed. `code` is the AWS error code when there is one."""

    def __init__(self, operation, code, message):
        super().__init__(f"{operation} failed ({code}): {message}")
        self.operation = operation
        self.code = code


class RegionNotConfiguredError(SspaError):
    def __init__(self):
        super().__init__(
            "No AWS region configured. Pass --region, set AWS_DEFAULT_REGION "
            "or run `aws configure`."
        )


class CredentialsNotFoundError(SspaError):
    def __init__(self, profile=None):
        where = f" for profile '{profile}'" if profile else ""
        super().__init__(f"No AWS credentials found{where}. Run `aws configure` first.")


class SourceDirectoryMissingError(SspaError):
    def __init__(self, path):
        super().__init__(f"Source directory not found: {path}")
        self.path = path
