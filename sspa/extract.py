# extract.py
"""Pull string fields out of JSON descriptors by dotted path, e.g. ``Role.Arn``."""

import json
import os

from sspa.errors import DescriptorMissingError, FieldMissingError, MalformedDescriptorError


def load_document(document_path):
    if not os.path.isfile(document_path):
        raise DescriptorMissingError(document_path)
    with open(document_path) as f:
        text = f.read()
    if not text.strip():
        raise MalformedDescriptorError(document_path, "file is empty")
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDescriptorError(document_path, str(e)) from e
    if not isinstance(document, dict):
        raise MalformedDescriptorError(document_path, "top level is not a JSON object")
    return document


def extract_field(document, field_path, source="document"):
    """Walk `field_path` through nested mappings and return the value as a string."""
    value = document
    for part in field_path.split("."):
        if not isinstance(value, dict) or part not in value:
            raise FieldMissingError(field_path, source)
        value = value[part]
    # Only scalars make sense to interpolate into later requests.
    if value is None or isinstance(value, (dict, list)):
        raise FieldMissingError(field_path, source)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def extract(document_path, field_path):
    document = load_document(document_path)
    return extract_field(document, field_path, source=document_path)
