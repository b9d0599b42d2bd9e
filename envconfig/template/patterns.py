"""Placeholder patterns recognised in templates.

Comment lines:
    # ..., // ..., /* ..., * ...     (leading whitespace allowed)

Environment placeholders:
    ${NAME}  {$NAME}  $NAME

Secret placeholders:
    {identifier}  {{identifier}}  {identifier[key]}  {{identifier[key]}}
"""

import re
from dataclasses import dataclass
from typing import Optional

COMMENT_PATTERN = re.compile(r"^\s*[#/*]", re.ASCII)

ENV_VAR_PATTERN = re.compile(r"\{?\$\{?([A-Za-z_][A-Za-z0-9_]*)\}?")

SECRET_PATTERN = re.compile(r"\{\{?([\w/:+=.@-]+)(?:\[(\w+)\])?\}?\}", re.ASCII)


@dataclass(frozen=True)
class PlaceholderMatch:
    """A placeholder found in a line."""

    text: str
    name: str
    sub_key: Optional[str] = None

    @classmethod
    def from_match(cls, match: "re.Match") -> "PlaceholderMatch":
        groups = match.groups()
        sub_key = groups[1] if len(groups) > 1 else None
        return cls(text=match.group(0), name=groups[0], sub_key=sub_key)


def is_comment(line: str) -> bool:
    return bool(COMMENT_PATTERN.match(line))

