"""Tests for Markdown and text serialization of built trees."""

from __future__ import annotations

import unittest
from datetime import datetime, timezone
from pathlib import Path

from srctree.ansi import MATCH_END, MATCH_START, strip_ansi
from srctree.errors import ConfigError
from srctree.file_tree_model import EntryKind, EntryMeta, Node, SourceTree
from srctree.options import build_tree_options
from srctree.render.tree import TreeRenderer, code_fence, format_modified, format_size, mime_type_for, render_tree
from srctree.search import ContentExcerpt, MatchSpan
from srctree.search.types import REASON_OVERSIZED, ExcerptLine

NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
ROOT = Path("/proj")


def _entry(relative: str, kind: EntryKind = EntryKind.FILE, *, size: int = 0, mtime_ns: int = 0) -> EntryMeta:
    rel = Path(relative)
    return EntryMeta(path=ROOT / rel, relative_path=rel, name=rel.name, kind=kind, size=size, mtime_ns=mtime_ns)


def _tree(*children: Node) -> SourceTree:
    root = Node(
        entry=EntryMeta(path=ROOT, relative_path=Path("."), name="proj", kind=EntryKind.DIRECTORY),
        children=children,
    )
    return SourceTree(root=root)


def _lines(*pairs: tuple[int, str], matches: tuple[int, ...] = ()) -> tuple[ExcerptLine, ...]:
    return tuple(ExcerptLine(number=n, text=t, is_match=n in matches) for n, t in pairs)


def _sample_tree() -> SourceTree:
    whole = ContentExcerpt.whole_file(_lines((1, "hello"), (2, "world")))
    source = Node(entry=_entry("src/a.txt", size=12), content=whole)
    directory = Node(entry=_entry("src", EntryKind.DIRECTORY), children=(source,))
    notes = Node(entry=_entry("notes.txt", size=3))
    return _tree(directory, notes)


class TreeRendererTests(unittest.TestCase):
    def test_markdown_report_layout(self) -> None:
        output = render_tree(_sample_tree(), now=NOW)
        expected = "\n".join(
            [
                "# 📁 Project Source Tree: proj",
                "Generated on 2024-01-02T03:04:05+00:00",
                "",
                "📁 **src/**",
                "  📄 a.txt (12B, unknown) [text/plain].txt",
                "",
                "    Content:",
                "    ```text",
                "       ┌ Total lines: 2",
                "       │",
                "     1 │  hello",
                "     2 │  world",
                "       │",
                "    ```",
                "",
                "📄 notes.txt (3B, unknown) [text/plain].txt",
                "",
                "_End of source tree_",
                "",
            ]
        )
        self.assertEqual(output, expected)

    def test_text_report_layout(self) -> None:
        output = render_tree(_sample_tree(), output_format="text", now=NOW)
        lines = output.splitlines()
        self.assertEqual(lines[0], "Project Source Tree: proj")
        self.assertIn("[DIR] src/", lines)
        self.assertIn("  [FILE] a.txt (12B, unknown) [text/plain].txt", lines)
        self.assertIn("    --- Content Start ---", lines)
        self.assertIn("    --- Content End ---", lines)
        self.assertEqual(lines[-1], "End of source tree")
        self.assertNotIn("```", output)

    def test_match_spans_are_separated_by_gap_markers(self) -> None:
        spans = (
            MatchSpan(3, 3, _lines((3, "hit"), matches=(3,))),
            MatchSpan(7, 8, _lines((7, "hit"), (8, "after"), matches=(7,))),
        )
        node = Node(entry=_entry("f.txt", size=40), content=ContentExcerpt.matches(spans, 10))
        lines = render_tree(_tree(node), output_format="text", now=NOW).splitlines()

        start = lines.index("     ┌ Total lines: 10")
        self.assertEqual(
            lines[start + 1 : start + 14],
            [
                "     │",
                "     │",
                "   ⋯ │ ...",
                "     │",
                "   3 │> hit",
                "     │",
                "   ⋯ │ ...",
                "     │",
                "   7 │> hit",
                "   8 │  after",
                "     │",
                "  --- Content End ---",
                "",
            ],
        )

    def test_span_starting_at_first_line_has_no_leading_gap(self) -> None:
        spans = (MatchSpan(1, 1, _lines((1, "hit"), matches=(1,))),)
        node = Node(entry=_entry("f.txt"), content=ContentExcerpt.matches(spans, 1))
        output = render_tree(_tree(node), now=NOW)
        self.assertNotIn("⋯", output)

    def test_no_match_and_oversized_and_warning_rows(self) -> None:
        no_match = Node(entry=_entry("a.txt"), content=ContentExcerpt.no_match(4))
        big = Node(entry=_entry("big.txt", size=204_800), content=ContentExcerpt.none(REASON_OVERSIZED))
        locked = Node(entry=_entry("locked", EntryKind.DIRECTORY), warning="cannot read directory (Permission denied)")
        lines = render_tree(_tree(locked, no_match, big), now=NOW).splitlines()

        self.assertIn("    ! No matches found", lines)
        self.assertIn("  (File not displayed - 200K)", lines)
        self.assertIn("  ! cannot read directory (Permission denied)", lines)

    def test_header_lists_active_options(self) -> None:
        options = build_tree_options(
            "/proj",
            types=["ext:py", "group:web"],
            pattern="TODO",
            sort="size",
            direction="desc",
        )
        node = Node(entry=_entry("src", EntryKind.DIRECTORY))
        lines = render_tree(_tree(node), options=options, now=NOW).splitlines()

        self.assertEqual(lines[2:5], ["Filters: ext:py, group:web", "Content Pattern: TODO", "Sorting: size (desc)"])
        self.assertIn("📁 **src/** (0 items)", lines)

    def test_default_options_add_no_header_lines(self) -> None:
        options = build_tree_options("/proj")
        lines = render_tree(_sample_tree(), options=options, now=NOW).splitlines()
        self.assertEqual(lines[2], "")
        self.assertEqual(lines[3], "📁 **src/**")

    def test_date_sort_shows_directory_modification_time(self) -> None:
        options = build_tree_options("/proj", sort="date")
        node = Node(entry=_entry("src", EntryKind.DIRECTORY))
        output = render_tree(_tree(node), output_format="text", options=options, now=NOW)
        self.assertIn("[DIR] src/ (modified: unknown)", output.splitlines())

    def test_backtick_runs_lengthen_the_markdown_fence(self) -> None:
        whole = ContentExcerpt.whole_file(_lines((1, "```python"), (2, "print(1)"), (3, "```")))
        node = Node(entry=_entry("README.md"), content=whole)
        lines = render_tree(_tree(node), now=NOW).splitlines()

        self.assertIn("  ````markdown", lines)
        self.assertIn("   1 │  ```python", lines)
        self.assertEqual([line for line in lines if line.strip().startswith("````")], ["  ````markdown", "  ````"])

    def test_control_characters_are_escaped(self) -> None:
        whole = ContentExcerpt.whole_file(_lines((1, "ring\x07bell")))
        node = Node(entry=_entry("f.txt"), content=whole)
        output = render_tree(_tree(node), now=NOW)
        self.assertIn("ring\\x07bell", output)
        self.assertNotIn("\x07", output)

    def test_highlight_emphasis_requires_color(self) -> None:
        line = ExcerptLine(number=1, text="a TODO b", is_match=True, highlights=((2, 6),))
        node = Node(entry=_entry("f.txt"), content=ContentExcerpt.whole_file((line,)))

        plain = render_tree(_tree(node), now=NOW)
        self.assertNotIn(MATCH_START, plain)

        colored = render_tree(_tree(node), color=True, now=NOW)
        self.assertIn(f"a {MATCH_START}TODO{MATCH_END} b", colored)

    def test_colored_text_output_strips_back_to_plain_rows(self) -> None:
        line = ExcerptLine(number=1, text="x = 'TODO'", is_match=True, highlights=((5, 9),))
        node = Node(entry=_entry("f.py"), content=ContentExcerpt.whole_file((line,)))

        colored = render_tree(_tree(node), output_format="text", color=True, now=NOW)
        plain = render_tree(_tree(node), output_format="text", color=False, now=NOW)
        self.assertIn(MATCH_START, colored)
        self.assertEqual(strip_ansi(colored), plain)

    def test_unknown_format_is_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            TreeRenderer(output_format="html")


class FormattingHelperTests(unittest.TestCase):
    def test_code_fence(self) -> None:
        self.assertEqual(code_fence("plain"), "```")
        self.assertEqual(code_fence("inline `code` and ``more``"), "```")
        self.assertEqual(code_fence("```"), "````")
        self.assertEqual(code_fence("a ````` b"), "``````")

    def test_format_size(self) -> None:
        self.assertEqual(format_size(0), "0B")
        self.assertEqual(format_size(1023), "1023B")
        self.assertEqual(format_size(1024), "1K")
        self.assertEqual(format_size(1536), "1K")
        self.assertEqual(format_size(3 * 1_048_576), "3M")
        self.assertEqual(format_size(1_073_741_824), "1G")

    def test_format_modified(self) -> None:
        self.assertEqual(format_modified(_entry("a.txt")), "unknown")
        stamped = _entry("a.txt", mtime_ns=1_700_000_000 * 1_000_000_000)
        self.assertEqual(format_modified(stamped), "2023-11-14T22:13:20+00:00")

    def test_mime_type_for(self) -> None:
        self.assertEqual(mime_type_for(_entry("src", EntryKind.DIRECTORY)), "inode/directory")
        self.assertEqual(mime_type_for(_entry("link", EntryKind.SYMLINK)), "inode/symlink")
        self.assertEqual(mime_type_for(_entry("notes.txt")), "text/plain")
        self.assertEqual(mime_type_for(_entry("Makefile")), "application/octet-stream")


if __name__ == "__main__":
    unittest.main()
