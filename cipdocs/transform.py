#!/usr/bin/env python3
"""
transform.py

Text substitutions that turn a raw CIP README into a page the docs site can
render. Every function here is pure: markdown in, markdown out.

Usage:
  python -m cipdocs.transform INPUT.md CIP-0001 [-o OUTPUT.md]

The order matters and is fixed by `transform_cip`:
  1. strip HTML tags
  2. make `./` links absolute against the raw repository
  3. point `../CIP-XXXX` links at sibling pages
  4. drop empty `]()` link targets
  5. remove backslashes
  6. demote the well-known H1 sections to H2
  7. prepend the sidebar front matter
  8. append the "CIP Information" section
  9. patch known broken references
"""

from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path

from cipdocs import constants


def get_doc_tag(content: str, name: str) -> str:
    """Return the value of the first `Name: value` line, verbatim.

    The value runs to the end of the line. Returns "" when the tag is missing.
    """
    match = re.search(rf"{re.escape(name)}: (.*)", content)
    return match.group(1) if match else ""


def strip_html(content: str) -> str:
    # We expect markdown, anything that looks like a tag goes
    return re.sub(r"<[^>]+>", "", content)


def rewrite_relative_links(content: str, cip: str, raw_base: str = constants.RAW_BASE_URL) -> str:
    """`[Byron](./Byron.md)` -> `[Byron](<raw_base>/<cip>/Byron.md)`"""
    return content.replace("](./", f"]({raw_base.rstrip('/')}/{cip}/")


def fix_parent_links(content: str) -> str:
    """`](../CIP-0002/)` -> `](./CIP-0002/)`, pages are siblings in the docs tree."""
    return re.sub(r"\]\(\.\./CIP-", "](./CIP-", content)


def drop_empty_links(content: str) -> str:
    # "CIP-YET-TO-COME" style links without a target
    return content.replace("]()", "]")


def strip_backslashes(content: str) -> str:
    return content.replace("\\", "")


def prevent_h1_headline(content: str, keyword: str) -> str:
    """Demote `# <keyword>` headings to `## <keyword>`.

    Only level-1 headings at the start of a line are touched, so an existing
    `## Abstract` stays as it is.
    """
    return re.sub(rf"^# (?={re.escape(keyword)}\b)", "## ", content, flags=re.MULTILINE)


def inject_doc_tags(content: str) -> str:
    """Replace the opening `---` with front matter carrying a sidebar label."""
    if content.startswith("---"):
        content = content[3:]

    title = get_doc_tag(content, "Title")
    number = get_doc_tag(content, "CIP")
    content = f"--- \nsidebar_label: ({number}) {title}" + content

    return content.replace(constants.EMPTY_HEADER, "")


def inject_autogenerated_message(content: str, cip: str, repo_base: str = constants.REPO_BASE_URL) -> str:
    """Append a section saying where the page came from and what state the CIP is in."""
    status = get_doc_tag(content, "Status")
    kind = get_doc_tag(content, "Type")
    created = get_doc_tag(content, "Created")
    source = f"{repo_base.rstrip('/')}/{cip}/{constants.README}"

    return (
        content
        + "\n"
        + "## CIP Information  \n"
        + f"This [{kind}](CIP-0001#cip-format-and-structure) {cip} created on **{created}** "
        + f"has the status: [{status}](CIP-0001#cip-workflow).  \n"
        + f"This page was generated automatically from: [{constants.SOURCE_REPO}]({source})."
    )


# Every occurrence is replaced, here and in drop_empty_links and inject_doc_tags.
# Replacing only the first one would leave later copies broken.
def apply_link_fixes(content: str, fixes: dict[str, str] | None = None) -> str:
    for old, new in (constants.LINK_FIXES if fixes is None else fixes).items():
        content = content.replace(old, new)
    return content


def transform_cip(
    content: str,
    cip: str,
    *,
    raw_base: str = constants.RAW_BASE_URL,
    repo_base: str = constants.REPO_BASE_URL,
) -> str:
    content = strip_html(content)
    content = rewrite_relative_links(content, cip, raw_base)
    content = fix_parent_links(content)
    content = drop_empty_links(content)
    content = strip_backslashes(content)
    for keyword in constants.H1_KEYWORDS:
        content = prevent_h1_headline(content, keyword)
    content = inject_doc_tags(content)
    content = inject_autogenerated_message(content, cip, repo_base)
    return apply_link_fixes(content)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply the docs substitutions to one CIP README")
    parser.add_argument("input", type=Path, help="Input .md file path or '-' for stdin")
    parser.add_argument("cip", help="Item identifier, e.g. CIP-0001")
    parser.add_argument("-o", "--output", type=Path, help="Output .md file path (default: stdout)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    ns = parse_args(sys.argv[1:] if argv is None else argv)

    if str(ns.input) == "-":
        md_text = sys.stdin.read()
    else:
        if not ns.input.exists():
            print(f"Error: input file not found: {ns.input}", file=sys.stderr)
            return 2
        md_text = ns.input.read_text(encoding="utf-8")

    result = transform_cip(md_text, ns.cip)
    if ns.output:
        ns.output.write_text(result, encoding="utf-8", newline="\n")
        print(str(ns.output))
    else:
        sys.stdout.write(result)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
