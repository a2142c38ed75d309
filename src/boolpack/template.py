"""template.py – Accessor name templates.

A template is written ``[prefix]%[suffix]``: the single ``%`` marks where the
field name is substituted, and each fragment is either empty or a piece of an
identifier.  ``get_%`` applied to ``verbose`` yields ``get_verbose``.
"""

import re
from dataclasses import dataclass

from boolpack.errors import MalformedTemplateError, SourceLocation

MARKER = "%"

# Fragments are identifier pieces; only the prefix can start a name.
_PREFIX_RE = re.compile(r"^(?:[A-Za-z_][A-Za-z0-9_]*)?$")
_SUFFIX_RE = re.compile(r"^[A-Za-z0-9_]*$")


@dataclass(frozen=True)
class Template:
    """A parsed ``prefix%suffix`` name template."""

    prefix: str = ""
    suffix: str = ""

    def format(self, field_name: str) -> str:
        return f"{self.prefix}{field_name}{self.suffix}"

    def __str__(self) -> str:
        return f"{self.prefix}{MARKER}{self.suffix}"


def parse_template(text: str, location: SourceLocation | None = None) -> Template:
    """Parse *text* into a :class:`Template`.

    Raises :class:`MalformedTemplateError` when the marker is missing or
    repeated, or when a fragment is not a valid identifier segment.
    """
    text = text.strip()
    count = text.count(MARKER)
    if count == 0:
        raise MalformedTemplateError(
            f"template {text!r} has no {MARKER!r} to substitute the field name", location
        )
    if count > 1:
        raise MalformedTemplateError(
            f"template {text!r} has more than one {MARKER!r} marker", location
        )

    prefix, suffix = text.split(MARKER)
    if not _PREFIX_RE.match(prefix):
        raise MalformedTemplateError(
            f"template prefix {prefix!r} is not a valid identifier segment", location
        )
    if not _SUFFIX_RE.match(suffix):
        raise MalformedTemplateError(
            f"template suffix {suffix!r} is not a valid identifier segment", location
        )
    return Template(prefix=prefix, suffix=suffix)


DEFAULT_GETTER_TEMPLATE = Template(prefix="get_")
DEFAULT_SETTER_TEMPLATE = Template(prefix="set_")
