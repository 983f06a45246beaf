from __future__ import annotations

from pathlib import Path

from ..core.fs import read_text_if_exists
from .markdown import validate_links
from .model import CheckOptions, Finding, Severity

README = "README.md"
REQUIRED_SECTIONS: tuple[str, ...] = ("## Overview", "## Installation", "## Usage", "## CI", "## License")


def missing_sections(text: str, required: tuple[str, ...] = REQUIRED_SECTIONS) -> list[str]:
    return [section for section in required if section not in text]


def check_readme_sections(root: Path, options: CheckOptions) -> list[Finding]:
    text = read_text_if_exists(root / README)
    if text is None:
        names = ", ".join(section.lstrip("# ") for section in REQUIRED_SECTIONS)
        return [Finding("readme", Severity.WARN, f"{README} missing. Create {README} with sections: {names}", path=README)]
    return [
        Finding("readme", Severity.WARN, f"Missing section: {section}", path=README)
        for section in missing_sections(text)
    ]


def check_readme_links(root: Path, options: CheckOptions) -> list[Finding]:
    text = read_text_if_exists(root / README)
    if text is None:
        return []
    return validate_links(text, root, document=README, check="readme_links")
