"""Unit tests for the CIP text substitutions."""

from __future__ import annotations

from cipdocs import constants, transform

CIP_0001 = """---
CIP: 1
Title: CIP process
Status: Active
Category: Meta
Created: 2020-03-21
Type: Process
---

# Abstract

A CIP is a design document.<br/>

# Motivation: why bother

See [Byron](./Byron.md), [CIP-0030](../CIP-0030/) and [CIP-YET-TO-COME]().
Escaped \\_underscores\\_.
"""


def test_get_doc_tag_reproduces_value_verbatim() -> None:
    content = "CIP: 1\nTitle: Wallet: dApp bridge\nCreated: 2021-04-29 \n"
    assert transform.get_doc_tag(content, "Title") == "Wallet: dApp bridge"
    assert transform.get_doc_tag(content, "Created") == "2021-04-29 "
    assert transform.get_doc_tag(content, "CIP") == "1"


def test_get_doc_tag_missing_is_empty() -> None:
    assert transform.get_doc_tag("CIP: 1\n", "Status") == ""


def test_strip_html_removes_tags_only() -> None:
    assert transform.strip_html("a <br/> b <img src='x.png'>c") == "a  b c"


def test_rewrite_relative_links_points_at_raw_repo() -> None:
    out = transform.rewrite_relative_links("[Byron](./Byron.md)", "CIP-0001")
    assert out == f"[Byron]({constants.RAW_BASE_URL}/CIP-0001/Byron.md)"


def test_rewrite_relative_links_custom_base_trailing_slash() -> None:
    out = transform.rewrite_relative_links("[x](./x.md)", "CIP-0002", "https://raw.example/")
    assert out == "[x](https://raw.example/CIP-0002/x.md)"


def test_fix_parent_links() -> None:
    assert transform.fix_parent_links("[c](../CIP-0030/)") == "[c](./CIP-0030/)"
    assert transform.fix_parent_links("[c](../other/)") == "[c](../other/)"


def test_drop_empty_links_all_occurrences() -> None:
    assert transform.drop_empty_links("[A]() and [B]()") == "[A] and [B]"


def test_strip_backslashes() -> None:
    assert transform.strip_backslashes(r"a\_b\\c") == "a_bc"


def test_prevent_h1_headline_demotes_matching_level_one() -> None:
    content = "# Abstract\ntext\n# Motivation: why\n"
    out = transform.prevent_h1_headline(content, "Abstract")
    out = transform.prevent_h1_headline(out, "Motivation")
    assert out == "## Abstract\ntext\n## Motivation: why\n"


def test_prevent_h1_headline_leaves_other_headings() -> None:
    content = "## Abstract\n# Abstractions\n# Summary\n  # Abstract\n"
    assert transform.prevent_h1_headline(content, "Abstract") == content


def test_inject_doc_tags_adds_sidebar_label() -> None:
    content = "---\nCIP: 1\nTitle: CIP process\n---\n"
    assert transform.inject_doc_tags(content) == (
        "--- \nsidebar_label: (1) CIP process\nCIP: 1\nTitle: CIP process\n---\n"
    )


def test_inject_doc_tags_removes_empty_header_block() -> None:
    content = "---\nCIP: 49\nTitle: ECDSA\n" + constants.EMPTY_HEADER + "---\n"
    out = transform.inject_doc_tags(content)
    assert "License-Code" not in out
    assert out.startswith("--- \nsidebar_label: (49) ECDSA\n")


def test_inject_autogenerated_message() -> None:
    out = transform.inject_autogenerated_message(CIP_0001, "CIP-0001")
    assert out.startswith(CIP_0001)
    assert "\n## CIP Information  \n" in out
    assert (
        "This [Process](CIP-0001#cip-format-and-structure) CIP-0001 created on **2020-03-21** "
        "has the status: [Active](CIP-0001#cip-workflow).  \n"
    ) in out
    assert out.endswith(
        "[cardano-foundation/CIPs](https://github.com/cardano-foundation/CIPs/tree/master/CIP-0001/README.md)."
    )


def test_apply_link_fixes() -> None:
    out = transform.apply_link_fixes("[cddl](cddl/version-1.cddl)")
    assert out == (
        "[cddl](https://github.com/cardano-foundation/CIPs/blob/master/CIP-0060/cddl/version-1.cddl)"
    )
    assert transform.apply_link_fixes("a b", {"a": "c"}) == "c b"


def test_transform_cip_full_sequence() -> None:
    out = transform.transform_cip(CIP_0001, "CIP-0001", raw_base="https://raw.example")

    assert out.startswith("--- \nsidebar_label: (1) CIP process\nCIP: 1\n")
    assert "\n## Abstract\n" in out
    assert "\n## Motivation: why bother\n" in out
    assert "<br/>" not in out
    assert "[Byron](https://raw.example/CIP-0001/Byron.md)" in out
    assert "[CIP-0030](./CIP-0030/)" in out
    assert "[CIP-YET-TO-COME]." in out
    assert "Escaped _underscores_." in out
    assert "## CIP Information" in out


def test_main_writes_output(tmp_path) -> None:
    src = tmp_path / "in.md"
    dst = tmp_path / "out.md"
    src.write_text(CIP_0001, encoding="utf-8")

    assert transform.main([str(src), "CIP-0001", "-o", str(dst)]) == 0
    assert dst.read_text(encoding="utf-8").startswith("--- \nsidebar_label: (1) CIP process")


def test_main_missing_input(tmp_path) -> None:
    assert transform.main([str(tmp_path / "nope.md"), "CIP-0001"]) == 2


def test_apply_link_fixes_replaces_every_occurrence() -> None:
    out = transform.apply_link_fixes("cddl/version-1.cddl and cddl/version-1.cddl")
    assert out.count("https://github.com/cardano-foundation/CIPs/blob/master/CIP-0060/") == 2
