"""Line based comment extraction.

Splits source text into line records of code and comment text using the
configured regular expressions. This is deliberately not syntax aware: a
comment marker inside a string literal is treated as a comment.
"""

import re

from ..schemas.references import LineRecord


class CommentExtractor:
    """Turns source text into LineRecords.

    Args:
        comment_regexp: Single line comment, group 1 is the comment text
        long_comment_open_regexp: Start of a block comment
        long_comment_line_regexp: Line inside a block comment, group 1 is the text
        long_comment_close_regexp: End of a block comment
    """

    def __init__(
        self,
        comment_regexp: str,
        long_comment_open_regexp: str,
        long_comment_line_regexp: str,
        long_comment_close_regexp: str,
    ):
        self.comment_re = re.compile(comment_regexp)
        self.open_re = re.compile(long_comment_open_regexp)
        self.line_re = re.compile(long_comment_line_regexp)
        self.close_re = re.compile(long_comment_close_regexp)

    @classmethod
    def from_config(cls, config) -> "CommentExtractor":
        return cls(
            config.comment_regexp,
            config.long_comment_open_regexp,
            config.long_comment_line_regexp,
            config.long_comment_close_regexp,
        )

    def _long_line(self, text: str) -> str:
        match = self.line_re.match(text)
        return (match.group(1) if match else text).rstrip()

    def extract_lines(self, text: str) -> list[LineRecord]:
        """One record per line of text, in order."""
        records = []
        in_long_comment = False

        for raw in text.splitlines():
            if in_long_comment:
                close = self.close_re.search(raw)
                if close is None:
                    records.append(LineRecord(comment=self._long_line(raw), long_comment=True))
                    continue

                in_long_comment = False
                after = raw[close.end():]
                records.append(LineRecord(
                    comment=self._long_line(raw[:close.start()]),
                    code=after if after.strip() else None,
                    long_comment=True,
                ))
                continue

            opening = self.open_re.search(raw)
            single = self.comment_re.search(raw)

            if opening is not None and (single is None or opening.start() <= single.start()):
                before = raw[:opening.start()]
                rest = raw[opening.end():]
                close = self.close_re.search(rest)
                if close is None:
                    in_long_comment = True
                    inner = rest
                else:
                    inner = rest[:close.start()]
                records.append(LineRecord(
                    comment=inner.strip(),
                    code=before.rstrip() if before.strip() else None,
                    long_comment=True,
                ))
            elif single is not None:
                before = raw[:single.start()]
                records.append(LineRecord(
                    comment=single.group(1).rstrip(),
                    code=before.rstrip() if before.strip() else None,
                ))
            else:
                records.append(LineRecord(code=raw))

        return records
