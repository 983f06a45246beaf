"""Markdown heading anchors and local link validation.

Only two Markdown constructs are understood: ATX headings (``#`` to ``######``
followed by whitespace) and inline links ``[text](target)``. Everything else in
a document is opaque text.

Anchor slugs follow the common renderer convention:

* the heading text is trimmed and lowercased;
* letters and digits are kept verbatim;
* a run of spaces, hyphens and underscores becomes a single hyphen, and
  characters dropped inside the run do not end it;
* every other character is dropped;
* leading and trailing hyphens are trimmed.

Repeated identical headings are not suffixed (``-1``, ``-2``) the way some
renderers do; both headings yield the same slug and a link to the suffixed form
is reported as unresolved.

Anchor sets are recomputed from the current file contents every time they are
needed, including when several links point into the same file.
"""

from __future__ import annotations

import errno
import re
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..core.fs import read_text, resolve_under
from .model import Finding, Severity

_HEADING_RE = re.compile(r"^#{1,6}[ \t]+(.+)$", re.MULTILINE)
_LINK_RE = re.compile(r"\[[^\]]+\]\(([^)]+)\)")
_EXTERNAL_PREFIXES = ("http://", "https://", "mailto:", "tel:")
_SEPARATORS = frozenset(" -_")
_MISSING_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR, errno.ENAMETOOLONG, errno.ELOOP})

MARKDOWN_SUFFIXES: tuple[str, ...] = (".md", ".markdown")


class LinkKind(str, Enum):
    EXTERNAL = "external"
    ANCHOR = "anchor"
    FILE = "file"


@dataclass(frozen=True)
class Link:
    raw_target: str
    kind: LinkKind
    path_part: str = ""
    fragment: str = ""


def slugify(heading: str) -> str:
    text = heading.strip().lower()
    out: list[str] = []
    in_run = False
    for ch in text:
        if ch.isalnum():
            out.append(ch)
            in_run = False
        elif ch in _SEPARATORS:
            if not in_run:
                out.append("-")
                in_run = True
    return "".join(out).strip("-")


def extract_headings(text: str) -> list[str]:
    return [match.group(1).strip() for match in _HEADING_RE.finditer(text)]


def anchors(text: str) -> frozenset[str]:
    return frozenset(slug for slug in (slugify(heading) for heading in extract_headings(text)) if slug)


def extract_links(text: str) -> list[str]:
    """Return link targets in document order, skipping image links."""
    targets: list[str] = []
    for match in _LINK_RE.finditer(text):
        start = match.start()
        if start > 0 and text[start - 1] == "!":
            continue
        targets.append(match.group(1).strip().strip("<>"))
    return targets


def classify(target: str) -> Link | None:
    if not target:
        return None
    if target.lower().startswith(_EXTERNAL_PREFIXES):
        return Link(target, LinkKind.EXTERNAL)
    if target.startswith("#"):
        return Link(target, LinkKind.ANCHOR, fragment=target[1:])
    path_part, _, fragment = target.partition("#")
    return Link(target, LinkKind.FILE, path_part=path_part, fragment=fragment)


def is_markdown(path: Path) -> bool:
    return path.suffix.lower() in MARKDOWN_SUFFIXES


def _stat_mode(path: Path) -> int | None:
    try:
        return path.stat().st_mode
    except ValueError:
        return None
    except OSError as exc:
        if exc.errno in _MISSING_ERRNOS:
            return None
        raise


def file_has_anchor(path: Path, anchor: str) -> bool:
    return anchor in anchors(read_text(path))


def validate_links(text: str, root: Path, document: str = "README.md", check: str = "readme_links") -> list[Finding]:
    """Validate every local link in ``text``.

    File references resolve relative to ``root``. A missing file or anchor is
    reported as a warning on ``document``; any other I/O failure propagates.
    """
    own_anchors = anchors(text)
    findings: list[Finding] = []

    def _warn(message: str) -> None:
        findings.append(Finding(check=check, severity=Severity.WARN, path=document, message=message))

    for target in extract_links(text):
        link = classify(target)
        if link is None or link.kind is LinkKind.EXTERNAL:
            continue
        if link.kind is LinkKind.ANCHOR:
            if link.fragment not in own_anchors:
                _warn(f"{document} link target not found: {target}")
            continue
        if not link.path_part:
            continue
        resolved = resolve_under(root, link.path_part)
        mode = _stat_mode(resolved)
        if mode is None:
            _warn(f"{document} link file not found: {target}")
            continue
        if link.fragment and not stat.S_ISDIR(mode) and is_markdown(resolved):
            if not file_has_anchor(resolved, link.fragment):
                _warn(f"{document} link anchor not found in {link.path_part}: #{link.fragment}")
    return findings


__all__ = [
    "Link",
    "LinkKind",
    "MARKDOWN_SUFFIXES",
    "anchors",
    "classify",
    "extract_headings",
    "extract_links",
    "file_has_anchor",
    "is_markdown",
    "slugify",
    "validate_links",
]
