"""Block model of a Keep a Changelog document.

The text is tokenized once into three parts:

* ``preamble`` - everything before the first level-2 heading (title, intro);
* ``blocks`` - one :class:`Block` per ``## ...`` heading or ``---`` rule, each
  holding the heading line and the body text up to the next boundary;
* ``footer`` - the trailing run of ``[label]: url`` reference definitions.

``ChangelogDocument.parse(text).render() == text`` for any input, so callers
mutate the block list and render without disturbing untouched bytes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Pattern, Tuple

from .semver import escape_regexp

HEADING_RE = re.compile(r"^##(?!#)")
RULE_RE = re.compile(r"^\s*---\s*$")
LINK_DEFINITION_RE = re.compile(r"^\[([^\]]+)\]:")
UNRELEASED_HEADING_RE = re.compile(r"^##\s*\[?Unreleased\]?(?![\w-])", re.IGNORECASE)
BRACKET_LABEL_RE = re.compile(r"^##\s*\[([^\]]*)\]")

UNRELEASED_HEADING = "## [Unreleased]"


def version_heading_re(normalized: str) -> Pattern[str]:
    """Heading pattern matching ``normalized`` with or without brackets and ``v``."""
    return re.compile(
        rf"^##\s*\[?(v?{escape_regexp(normalized)})\]?(?![\w.+-])",
        re.IGNORECASE,
    )


def _line_ending(line: str) -> str:
    return line[len(line.rstrip("\r\n")):]


@dataclass
class Block:
    heading: str
    body: str = ""

    @property
    def is_rule(self) -> bool:
        return RULE_RE.match(self.heading) is not None

    @property
    def is_unreleased(self) -> bool:
        return not self.is_rule and UNRELEASED_HEADING_RE.match(self.heading) is not None

    @property
    def label(self) -> Optional[str]:
        """The bracketed label of the heading, if it has one."""
        if self.is_rule:
            return None
        match = BRACKET_LABEL_RE.match(self.heading)
        return match.group(1).strip() if match else None

    def set_body(self, body: str) -> None:
        if body and not _line_ending(self.heading):
            self.heading += "\n"
        self.body = body

    def render(self) -> str:
        return self.heading + self.body


@dataclass
class ChangelogDocument:
    preamble: str = ""
    blocks: List[Block] = field(default_factory=list)
    footer: str = ""

    @classmethod
    def parse(cls, text: str) -> "ChangelogDocument":
        lines = text.splitlines(keepends=True)

        # Trailing reference definitions, possibly interleaved with blank lines.
        start = len(lines)
        while start > 0 and (
            not lines[start - 1].strip() or LINK_DEFINITION_RE.match(lines[start - 1])
        ):
            start -= 1
        footer_start = len(lines)
        for index in range(start, len(lines)):
            if LINK_DEFINITION_RE.match(lines[index]):
                footer_start = index
                break

        preamble: List[str] = []
        blocks: List[Tuple[str, List[str]]] = []
        for line in lines[:footer_start]:
            if HEADING_RE.match(line) or RULE_RE.match(line):
                blocks.append((line, []))
            elif blocks:
                blocks[-1][1].append(line)
            else:
                preamble.append(line)

        return cls(
            preamble="".join(preamble),
            blocks=[Block(heading, "".join(body)) for heading, body in blocks],
            footer="".join(lines[footer_start:]),
        )

    def render(self) -> str:
        return self.preamble + "".join(block.render() for block in self.blocks) + self.footer

    def headings(self) -> Iterator[Tuple[int, Block]]:
        for index, block in enumerate(self.blocks):
            if not block.is_rule:
                yield index, block

    def find_unreleased(self) -> Optional[int]:
        for index, block in self.headings():
            if block.is_unreleased:
                return index
        return None

    def find_version(self, normalized: str) -> Optional[Tuple[int, str]]:
        """Index and heading label (``v1.2.3`` or ``1.2.3``) of a version block."""
        pattern = version_heading_re(normalized)
        for index, block in self.headings():
            match = pattern.match(block.heading)
            if match:
                return index, match.group(1)
        return None

    def first_version_label(self) -> Optional[str]:
        for _, block in self.headings():
            label = block.label
            if label and label.lower() != "unreleased":
                return label
        return None

    def insert_before_sections(self, block: Block) -> None:
        """Place ``block`` ahead of every existing section, after the preamble."""
        text = self.preamble.rstrip()
        self.preamble = f"{text}\n\n" if text else ""
        self.blocks.insert(0, block)
