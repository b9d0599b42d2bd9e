"""Two-pass placeholder substitution over text templates."""

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Mapping, Optional

from envconfig.secrets.client import SecretsClient
from envconfig.secrets.exceptions import (
    SecretError,
    SubKeyMissingError,
    SubKeyParseError,
)
from envconfig.template.exceptions import (
    TemplateIOError,
    TemplateNotFoundError,
    UnresolvedPlaceholdersError,
)
from envconfig.template.patterns import (
    ENV_VAR_PATTERN,
    SECRET_PATTERN,
    PlaceholderMatch,
    is_comment,
)
from envconfig.utils.decorators import log_time
from envconfig.utils.logging import get_logger
from monitoring import Metrics, track_time

logger = get_logger(__name__)


@dataclass
class RenderResult:
    """Summary of one rendered template."""

    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    lines: int = 0
    substitutions: int = 0
    errors: List[SecretError] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.errors)

    @property
    def ok(self) -> bool:
        return not self.errors


def project_sub_key(secret_value: str, placeholder: PlaceholderMatch) -> str:
    """
    Extract one field from a secret holding a flat JSON object of strings.

    Raises:
        SubKeyParseError: If the value is not a JSON object of string values
        SubKeyMissingError: If the key is not in the object
    """
    try:
        mapping = json.loads(secret_value)
    except json.JSONDecodeError as e:
        raise SubKeyParseError(
            f"Secret '{placeholder.name}' is not valid JSON: {e}"
        ) from e

    if not isinstance(mapping, dict) or not all(
        isinstance(v, str) for v in mapping.values()
    ):
        raise SubKeyParseError(
            f"Secret '{placeholder.name}' is not a JSON object of strings"
        )

    if placeholder.sub_key not in mapping:
        raise SubKeyMissingError(
            f"Key '{placeholder.sub_key}' not found in secret '{placeholder.name}'"
        )
    return mapping[placeholder.sub_key]


class TemplateRenderer:
    """
    Replaces environment and secret placeholders in text, line by line.

    Each line goes through, in order:
        1. Comment check - lines starting with #, / or * are left alone
        2. Environment pass - ${NAME}, {$NAME}, $NAME from the environment
        3. Secret pass - {id}, {{id}}, {id[key]} through the secrets client

    A placeholder that cannot be resolved stays in the output as written and
    is counted as a failure; processing always continues to the end.

    Use one renderer per file. Renderers may share a SecretsClient.

    Usage:
        renderer = TemplateRenderer(client)
        result = renderer.render_file("app.conf.tpl", "app.conf")
    """

    def __init__(self, client: SecretsClient, environ: Optional[Mapping[str, str]] = None):
        self.client = client
        self.environ = os.environ if environ is None else environ
        self.errors: List[SecretError] = []
        self.substitutions = 0

    @property
    def failed(self) -> int:
        return len(self.errors)

    def reset(self) -> None:
        """Forget failures and counts from a previous render."""
        self.errors = []
        self.substitutions = 0

    def render_line(self, line: str) -> str:
        """Render a single line (without its line terminator)."""
        if is_comment(line):
            return line

        # The secret pass must see the output of the environment pass
        line = ENV_VAR_PATTERN.sub(self._replace_env, line)
        return SECRET_PATTERN.sub(self._replace_secret, line)

    def render_lines(self, lines: Iterable[str]) -> Iterator[str]:
        for line in lines:
            yield self.render_line(line)

    def _replace_env(self, match: "re.Match") -> str:
        placeholder = PlaceholderMatch.from_match(match)
        value = self.environ.get(placeholder.name)
        if value:
            self.substitutions += 1
            Metrics.placeholder("env", resolved=True)
            return value

        # Left for the secret pass, which may still resolve it
        Metrics.placeholder("env", resolved=False)
        return placeholder.text

    def _replace_secret(self, match: "re.Match") -> str:
        placeholder = PlaceholderMatch.from_match(match)
        try:
            value = self.client.get_secret(placeholder.name)
            if placeholder.sub_key is not None:
                value = project_sub_key(value, placeholder)
        except SecretError as e:
            self._record_failure(e)
            return placeholder.text

        self.substitutions += 1
        Metrics.placeholder("secret", resolved=True)
        return value

    def _record_failure(self, error: SecretError) -> None:
        self.errors.append(error)
        Metrics.placeholder("secret", resolved=False)
        logger.error(str(error))

    @log_time
    def render_file(self, input_path, output_path) -> RenderResult:
        """
        Render input_path into a newly created output_path.

        The output is always written in full, even when some placeholders
        fail, and is never removed here.

        Returns:
            RenderResult for a render with no unresolved placeholders

        Raises:
            TemplateNotFoundError: If the input file doesn't exist
            TemplateIOError: If reading the input or writing the output fails
            UnresolvedPlaceholdersError: If any placeholder was left
                unresolved; raised after the output file is closed
        """
        input_path = Path(input_path)
        output_path = Path(output_path)

        if not input_path.exists():
            raise TemplateNotFoundError(f"Input file '{input_path}' not found")

        self.reset()
        result = RenderResult(input_path=input_path, output_path=output_path)

        with track_time() as t:
            self._render_to(input_path, output_path, result)

        result.substitutions = self.substitutions
        result.errors = list(self.errors)
        Metrics.render_finished(t["duration"], result.failed)

        if not result.ok:
            raise UnresolvedPlaceholdersError(result.failed, result)

        logger.info(
            f"Rendered {result.lines} lines with {result.substitutions} "
            f"substitutions into {output_path}"
        )
        return result

    def _render_to(self, input_path: Path, output_path: Path, result: RenderResult) -> None:
        try:
            src = open(input_path, encoding="utf-8", newline="\n")
        except OSError as e:
            raise TemplateIOError(f"Could not open file '{input_path}': {e}") from e

        with src:
            try:
                dst = open(output_path, "w", encoding="utf-8", newline="\n")
            except OSError as e:
                raise TemplateIOError(f"Could not create file '{output_path}': {e}") from e

            with dst:
                try:
                    for line in src:
                        if line.endswith("\r\n"):
                            line = line[:-2]
                        elif line.endswith("\n"):
                            line = line[:-1]
                        dst.write(self.render_line(line))
                        dst.write("\n")
                        result.lines += 1
                except UnicodeDecodeError as e:
                    raise TemplateIOError(
                        f"Error reading input file '{input_path}': {e}"
                    ) from e
                except OSError as e:
                    raise TemplateIOError(
                        f"Error rendering '{input_path}' into '{output_path}': {e}"
                    ) from e
