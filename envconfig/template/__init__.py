"""Template rendering - environment and secret placeholder substitution."""

from envconfig.template.engine import RenderResult, TemplateRenderer, project_sub_key
from envconfig.template.exceptions import (
    TemplateError,
    TemplateIOError,
    TemplateNotFoundError,
    UnresolvedPlaceholdersError,
)
from envconfig.template.patterns import PlaceholderMatch

__all__ = [
    "TemplateRenderer",
    "RenderResult",
    "PlaceholderMatch",
    "project_sub_key",
    "TemplateError",
    "TemplateIOError",
    "TemplateNotFoundError",
    "UnresolvedPlaceholdersError",
]
