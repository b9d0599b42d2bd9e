"""Validation of secret identifiers and region extraction from ARNs."""

import re
from typing import Optional

ARN_PATTERN = re.compile(
    r"arn:aws:secretsmanager:[a-z]{2}-[a-z]+-\d{1,3}:\d{12}:secret:[\w/+=.@-]+",
    re.ASCII,
)
NAME_PATTERN = re.compile(r"[\w/+=.@-]{1,512}", re.ASCII)

# Secrets Manager appends "-" plus six random characters to every ARN. A bare
# name ending that way is ambiguous, so such secrets must be referenced by ARN.
RESERVED_SUFFIX_PATTERN = re.compile(r"-[A-Za-z0-9]{6}\Z")

REGION_PATTERN = re.compile(r"secretsmanager:([a-z]{2}-[a-z]+-\d{1,3})", re.ASCII)


def is_valid_identifier(identifier: str) -> bool:
    """
    Check whether a string can be used to look up a secret.

    Accepts a full Secrets Manager ARN, or a bare name of up to 512
    characters that does not end in a hyphen followed by six alphanumerics.

    Examples:
        is_valid_identifier("prod/db")  -> True
        is_valid_identifier("my-secret-AbC123")  -> False
        is_valid_identifier(
            "arn:aws:secretsmanager:us-east-1:123456789012:secret:my-secret-AbC123"
        )  -> True
    """
    if not identifier:
        return False
    if ARN_PATTERN.fullmatch(identifier):
        return True
    return bool(NAME_PATTERN.fullmatch(identifier)) and not RESERVED_SUFFIX_PATTERN.search(
        identifier
    )


def extract_region(identifier: str) -> Optional[str]:
    """Return the region embedded in an ARN, or None if there is none."""
    match = REGION_PATTERN.search(identifier)
    if match:
        return match.group(1)
    return None
