"""
Parse issues: non-fatal (and fatal) problems reported alongside a result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from id3.enums.issue_kind import IssueKind
from id3.errors import ID3Error


@dataclass(frozen=True)
class ParseIssue:
    """
    One problem found while decoding.

    offset:
        Absolute byte position in the parsed buffer, if known.
    """
    kind: IssueKind
    message: str
    offset: Optional[int] = None
    frame_id: Optional[str] = None

    @staticmethod
    def from_error(error: ID3Error) -> ParseIssue:
        return ParseIssue(
            kind=error.kind,
            message=str(error),
            offset=error.offset,
            frame_id=error.frame_id,
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "offset": self.offset,
            "frame_id": self.frame_id,
        }
