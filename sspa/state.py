# state.py
"""
On-disk bookkeeping for an identity pool directory.

Descriptors (pool_info.json, role_info.json) hold the provider's creation
response and double as the "already created" marker. They are always written
through `write_json_atomic`, so a crash mid-write leaves either the old file
or nothing, never a truncated one.
"""

import enum
import json
import logging
import os
import tempfile

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.json"
POOL_INFO_FILE = "pool_info.json"
ROLE_INFO_FILE = "role_info.json"
POLICY_FILE = "assume_role_policy.json"
STATE_FILE = "state.json"


class ResourceState(str, enum.Enum):
    NOT_STARTED = "not_started"
    CREATED = "created"
    BOUND = "bound"


def write_text_atomic(path, text):
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", suffix=".json", dir=directory)
    try:
        with os.fdopen(fd, "w") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def write_json_atomic(path, document):
    # default=str renders the datetimes boto3 returns (Role.CreateDate) the way the CLI does.
    write_text_atomic(path, json.dumps(document, indent=2, default=str) + "\n")


def descriptor_present(path):
    """True when `path` exists and is non-empty."""
    return os.path.isfile(path) and os.path.getsize(path) > 0


def load_state(pool_dir):
    path = os.path.join(pool_dir, STATE_FILE)
    state = {"pool": ResourceState.NOT_STARTED, "role": ResourceState.NOT_STARTED}
    if not descriptor_present(path):
        return state
    with open(path) as f:
        try:
            saved = json.load(f)
        except ValueError:
            saved = None
    if not isinstance(saved, dict):
        logger.warning(f"Ignoring unreadable progress record {path}")
        return state
    loaded = dict(state)
    for key in state:
        if key not in saved:
            continue
        try:
            loaded[key] = ResourceState(saved[key])
        except (ValueError, TypeError):
            logger.warning(f"Ignoring unreadable progress record {path}")
            return state
    return loaded


def save_state(pool_dir, state):
    path = os.path.join(pool_dir, STATE_FILE)
    write_json_atomic(path, {key: ResourceState(value).value for key, value in state.items()})
    logger.debug(f"Progress saved to {path}: {state}")
