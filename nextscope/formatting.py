"""Rendering of plugin results as text, markdown, or JSON.

Plugins describe their report as a list of ``Section`` objects; the text and
markdown renderers lay out the same sections with different syntax, so both
carry identical content.
"""

import json
from dataclasses import dataclass, field
from typing import Any

FORMATS = ("text", "markdown", "json")


@dataclass
class Section:
    """One block of a rendered report.

    Attributes:
        title: Section heading.
        rows: ``(label, value)`` pairs rendered as key/value lines.
        items: Free-form lines rendered as a bullet list.
        empty: Line shown when both ``rows`` and ``items`` are empty.
    """

    title: str
    rows: list[tuple[str, Any]] = field(default_factory=list)
    items: list[str] = field(default_factory=list)
    empty: str = "None"


def to_json(data: Any) -> str:
    """Stable structural serialization; ``json.loads`` reproduces ``data``.

    Raises:
        TypeError: If ``data`` holds a value JSON cannot represent.
    """
    return json.dumps(data, indent=2, ensure_ascii=False)


def check_format(fmt: str) -> str:
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format: {fmt}. Expected one of: {', '.join(FORMATS)}")
    return fmt


def _render_text(title: str, sections: list[Section]) -> str:
    lines = [title, "=" * len(title)]
    for section in sections:
        lines.append("")
        lines.append(section.title)
        lines.append("-" * len(section.title))
        for label, value in section.rows:
            lines.append(f"{label}: {value}")
        for item in section.items:
            lines.append(f"  - {item}")
        if not section.rows and not section.items:
            lines.append(f"  {section.empty}")
    return "\n".join(lines) + "\n"


def _render_markdown(title: str, sections: list[Section]) -> str:
    lines = [f"# {title}"]
    for section in sections:
        lines.append("")
        lines.append(f"## {section.title}")
        lines.append("")
        if section.rows:
            lines.append("| Metric | Value |")
            lines.append("| --- | --- |")
            for label, value in section.rows:
                cell = str(value).replace("|", r"\|")
                lines.append(f"| {label} | {cell} |")
        if section.items:
            if section.rows:
                lines.append("")
            lines.extend(f"- {item}" for item in section.items)
        if not section.rows and not section.items:
            lines.append(f"_{section.empty}_")
    return "\n".join(lines) + "\n"


def render_sections(title: str, sections: list[Section], fmt: str) -> str:
    """Render report sections in ``text`` or ``markdown`` syntax.

    Raises:
        ValueError: If ``fmt`` is not a layout format.
    """
    if fmt == "text":
        return _render_text(title, sections)
    if fmt == "markdown":
        return _render_markdown(title, sections)
    raise ValueError(f"Cannot lay out sections as {fmt}")
