"""Regex driven scanning of anchor and link tags in comment text."""

import re
from collections.abc import Callable

from ..core.diagnostics import Diagnostics
from .collection import ReferenceCollection

Pattern = str | re.Pattern[str]


def _compile(pattern: Pattern) -> re.Pattern[str]:
    return pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)


class TagScanner:
    """Finds anchor declarations and link references in a comment.

    Both patterns carry a single capture group holding the tag, e.g. '!api/connect'
    captures 'api/connect'.
    """

    def __init__(self, anchor_pattern: Pattern, link_pattern: Pattern):
        self.anchor_pattern = _compile(anchor_pattern)
        self.link_pattern = _compile(link_pattern)

    @classmethod
    def from_config(cls, config) -> "TagScanner":
        return cls(config.anchor_regexp, config.link_regexp)

    def anchor_tags(self, comment: str) -> list[str]:
        return [m.group(1) for m in self._matches(comment, self.anchor_pattern)]

    def link_tags(self, comment: str) -> list[str]:
        return [m.group(1) for m in self._matches(comment, self.link_pattern)]

    def collect_anchors(
        self,
        comment: str,
        file: str,
        line: int,
        collection: ReferenceCollection,
        diagnostics: Diagnostics | None = None,
    ) -> int:
        """Add every anchor declared in comment to the tree.

        Returns:
            Number of anchor tags found
        """
        tags = self.anchor_tags(comment)
        for tag in tags:
            collection.add_anchor_tag(tag.split("/"), file, line, diagnostics)
        return len(tags)

    def replace_anchors(self, comment: str, render: Callable[[str], str | None]) -> str:
        """Replace each anchor declaration with render(tag), unless it returns None."""
        return self.substitute(comment, self.anchor_pattern, lambda m: render(m.group(1)))

    def replace_links(self, comment: str, resolve: Callable[[str], str | None]) -> str:
        """Replace each link tag with resolve(tag); unresolved tags (None) are left as is."""
        return self.substitute(comment, self.link_pattern, lambda m: resolve(m.group(1)))

    @staticmethod
    def substitute(
        text: str,
        pattern: re.Pattern[str],
        replace: Callable[[re.Match[str]], str | None],
    ) -> str:
        """Replace matches left to right, scanning only the original text.

        The search resumes at the end of the original match, so text inserted
        by a replacement is never scanned again even if it matches the pattern.
        """
        pieces = []
        last = 0
        for match in TagScanner._matches(text, pattern):
            replacement = replace(match)
            if replacement is None:
                continue
            pieces.append(text[last:match.start()])
            pieces.append(replacement)
            last = match.end()
        pieces.append(text[last:])
        return "".join(pieces)

    @staticmethod
    def _matches(text: str, pattern: re.Pattern[str]):
        pos = 0
        while pos <= len(text):
            match = pattern.search(text, pos)
            if match is None:
                return
            yield match
            # Zero-width matches still move the scan forward
            pos = match.end() if match.end() > match.start() else match.start() + 1
