"""Frontmatter extraction and parsing for template files.

A frontmatter block is a run of ``key: value`` lines at the very top of a
document, fenced by two lines that contain only ``---``. The block is loaded
as YAML with scalars kept as text, except booleans and nulls. Aliases are
refused. When the block is not valid YAML, or nests too deeply to compose,
the parser falls back to a line-by-line reading so one broken template still
yields whatever metadata it can, and nothing here ever raises.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

import yaml  # type: ignore[import-untyped]
from yaml.composer import ComposerError  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

_FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?$",
    re.DOTALL | re.MULTILINE,
)
_QUOTES = ("'", '"')

# Implicit scalar types kept as their source text ("1.10" must not become 1.1).
_TEXT_TAGS = frozenset(
    {
        "tag:yaml.org,2002:int",
        "tag:yaml.org,2002:float",
        "tag:yaml.org,2002:timestamp",
    }
)


class _FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps numbers and dates as strings and refuses aliases."""

    yaml_implicit_resolvers = {
        first: [(tag, regexp) for tag, regexp in resolvers if tag not in _TEXT_TAGS]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }

    def compose_node(self, parent: Any, index: Any) -> Any:
        if self.check_event(yaml.AliasEvent):
            event = self.peek_event()
            raise ComposerError(
                None, None, f"alias *{event.anchor} is not allowed in frontmatter", event.start_mark
            )
        return super().compose_node(parent, index)


class ParseStatus(str, Enum):
    """How much of a frontmatter block could be recovered."""

    OK = "ok"
    PARTIAL = "partial"
    ABSENT = "absent"


@dataclass(frozen=True)
class FrontmatterParseResult:
    """Tagged result of parsing a document's frontmatter."""

    status: ParseStatus
    data: dict[str, Any] | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_absent(self) -> bool:
        return self.status is ParseStatus.ABSENT


def extract_frontmatter(text: str) -> str | None:
    """Return the raw frontmatter body, or None when the document has none."""
    match = _FRONTMATTER_PATTERN.match(text.lstrip("\ufeff"))
    if not match:
        return None
    return match.group(1)


def strip_frontmatter(text: str) -> str:
    """Return ``text`` without its leading frontmatter block."""
    content = text.lstrip("\ufeff")
    match = _FRONTMATTER_PATTERN.match(content)
    if not match:
        return content
    return content[match.end():].lstrip("\r\n")


def parse_frontmatter(text: str) -> FrontmatterParseResult:
    """Parse the frontmatter of a full document."""
    block = extract_frontmatter(text)
    if block is None:
        return FrontmatterParseResult(status=ParseStatus.ABSENT)
    return parse_frontmatter_block(block)


def parse_frontmatter_block(block: str) -> FrontmatterParseResult:
    """Parse the body between the ``---`` fences."""
    if not block.strip():
        return FrontmatterParseResult(status=ParseStatus.OK, data={})
    try:
        loaded = yaml.load(block, Loader=_FrontmatterLoader)  # noqa: S506 - SafeLoader subclass
        data = _normalize(loaded) if isinstance(loaded, dict) else None
    except RecursionError:
        logger.debug("Frontmatter YAML nests too deeply")
        return FrontmatterParseResult(
            status=ParseStatus.PARTIAL,
            data=parse_simple_frontmatter(block),
            warnings=("Frontmatter is nested too deeply; parsed line by line",),
        )
    except (yaml.YAMLError, ValueError) as exc:
        # Explicitly tagged values (e.g. !!timestamp) can still raise ValueError.
        mark = getattr(exc, "problem_mark", None)
        where = f" at line {mark.line + 1}" if mark is not None else ""
        logger.debug("Frontmatter YAML error%s: %s", where, exc)
        return FrontmatterParseResult(
            status=ParseStatus.PARTIAL,
            data=parse_simple_frontmatter(block),
            warnings=(f"Frontmatter is not valid YAML{where}; parsed line by line",),
        )
    if loaded is None:
        return FrontmatterParseResult(status=ParseStatus.OK, data={})
    if data is None:
        logger.debug("Frontmatter is a %s, not a mapping", type(loaded).__name__)
        return FrontmatterParseResult(
            status=ParseStatus.PARTIAL,
            data=parse_simple_frontmatter(block),
            warnings=("Frontmatter is not a YAML mapping; parsed line by line",),
        )
    return FrontmatterParseResult(status=ParseStatus.OK, data=data)


def _normalize(value: Any) -> Any:
    """Stringify keys and turn explicitly tagged dates into ISO strings."""
    if isinstance(value, dict):
        return {str(k): _normalize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize(v) for v in value]
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def parse_simple_frontmatter(block: str) -> dict[str, Any]:
    """Best-effort ``key: value`` reader used when YAML loading fails.

    Lines are split at the first colon. Bracketed values become lists,
    indented ``key: value`` lines under an empty key become a nested map and
    indented ``- item`` lines become a list. Anything else is skipped.
    """
    data: dict[str, Any] = {}
    parent: str | None = None
    for raw_line in block.splitlines():
        stripped = raw_line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        line = _strip_comment(raw_line)
        indented = raw_line[:1] in (" ", "\t")

        if indented and parent is not None:
            item = line.strip()
            if item.startswith("- "):
                current = data.get(parent)
                if not isinstance(current, list):
                    current = []
                    data[parent] = current
                current.append(_unquote(item[2:].strip()))
                continue
            if ":" in item:
                key, _, value = item.partition(":")
                current = data.get(parent)
                if not isinstance(current, dict):
                    current = {}
                    data[parent] = current
                current[key.strip()] = _parse_value(value.strip())
            continue

        if ":" not in line:
            continue
        key, _, value = line.partition(":")
        key = key.strip()
        if not key:
            continue
        value = value.strip()
        data[key] = _parse_value(value)
        parent = key if value == "" else None
    return data


def _parse_value(value: str) -> Any:
    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1].strip()
        if not inner:
            return []
        return [_unquote(part.strip()) for part in inner.split(",") if part.strip()]
    unquoted = _unquote(value)
    if unquoted == value and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return unquoted


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def _strip_comment(line: str) -> str:
    """Drop a trailing ``# comment`` that is not inside quotes."""
    quote: str | None = None
    for idx, ch in enumerate(line):
        if quote:
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
        elif ch == "#" and idx > 0 and line[idx - 1] in (" ", "\t"):
            return line[:idx].rstrip()
    return line
