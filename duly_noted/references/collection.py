"""Anchor/collection tree built from '/' separated anchor tags.

An anchor tag such as 'api/client/connect' declares the anchor 'connect'
inside the collection 'client', itself inside 'api'. The root collection has
the empty id. The tree is grown during the parse phase only, persisted as
internalReferences.json, and inflated read-only by the generators.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..constants import DiagnosticKind
from ..core.diagnostics import Diagnostics
from ..core.errors import ReferenceDataError
from ..schemas.references import Anchor, CollectionReport, CollectionSchema, QualifiedTag


def _join(*parts: str | None) -> str:
    return "/".join(p for p in parts if p)


class ReferenceCollection:
    """A named namespace of anchors and nested collections."""

    def __init__(self, id: str = ""):
        self.id = id
        self.anchors: list[Anchor] = []
        self.subcollections: list["ReferenceCollection"] = []

    def __repr__(self) -> str:
        return (
            f"ReferenceCollection(id={self.id!r}, anchors={len(self.anchors)}, "
            f"subcollections={len(self.subcollections)})"
        )

    def find_anchor(self, anchor_id: str) -> Anchor | None:
        """First direct anchor with this id."""
        return next((a for a in self.anchors if a.id == anchor_id), None)

    def find_subcollection(self, collection_id: str) -> "ReferenceCollection | None":
        return next((c for c in self.subcollections if c.id == collection_id), None)

    def add_anchor(self, anchor: Anchor, diagnostics: Diagnostics | None = None) -> bool:
        """Append an anchor to this collection.

        A duplicate id is reported but the anchor is still appended; lookups
        return the first one. An id already used by a subcollection is
        rejected.

        Returns:
            True if the anchor was appended
        """
        diagnostics = diagnostics if diagnostics is not None else Diagnostics()

        if self.find_subcollection(anchor.id) is not None:
            diagnostics.error(
                DiagnosticKind.COLLECTION_CONFLICT,
                f"Cannot add anchor '{anchor.id}' to '{self.id}' collection because "
                f"it is already defined as a subcollection",
                anchor.file, anchor.line,
            )
            return False

        existing = self.find_anchor(anchor.id)
        if existing is not None:
            diagnostics.error(
                DiagnosticKind.DUPLICATE_ANCHOR,
                f"Duplicate anchor '{anchor.id}' in '{self.id}' collection, "
                f"already defined at {existing.file}:{existing.line}",
                anchor.file, anchor.line,
            )

        self.anchors.append(anchor)
        return True

    def add_subcollection(
        self, collection: "ReferenceCollection", diagnostics: Diagnostics | None = None
    ) -> bool:
        """Append a subcollection unless its id is taken at this level.

        Returns:
            True if the collection was appended
        """
        diagnostics = diagnostics if diagnostics is not None else Diagnostics()

        existing_anchor = self.find_anchor(collection.id)
        if existing_anchor is not None:
            diagnostics.error(
                DiagnosticKind.COLLECTION_CONFLICT,
                f"Cannot add collection '{collection.id}' because it was already "
                f"defined as an anchor at {existing_anchor.file}:{existing_anchor.line}",
                existing_anchor.file, existing_anchor.line,
            )
            return False

        if self.find_subcollection(collection.id) is not None:
            diagnostics.error(
                DiagnosticKind.COLLECTION_CONFLICT,
                f"Cannot add collection '{collection.id}' because it is already "
                f"a subcollection of '{self.id}'",
            )
            return False

        self.subcollections.append(collection)
        return True

    def add_anchor_tag(
        self,
        segments: list[str],
        file: str,
        line: int,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        """Insert an anchor tag split on '/', creating collections as needed.

        The last segment becomes the anchor, every segment before it names a
        collection. Repeated calls with shared prefixes reuse the existing
        collections.
        """
        if not segments:
            return

        if len(segments) == 1:
            self.add_anchor(Anchor(id=segments[0], file=file, line=line), diagnostics)
            return

        collection_id, rest = segments[0], segments[1:]
        existing = self.find_subcollection(collection_id)
        if existing is not None:
            existing.add_anchor_tag(rest, file, line, diagnostics)
            return

        new_collection = ReferenceCollection(collection_id)
        new_collection.add_anchor_tag(rest, file, line, diagnostics)
        self.add_subcollection(new_collection, diagnostics)

    def get_all_tags(self, parent_path: str = "", top_level: bool = True) -> list[QualifiedTag]:
        """Flatten the tree into lookup tags, depth first, anchors before subcollections.

        In top-level mode every anchor is keyed by its bare id whatever its
        depth. Otherwise keys are the full '/' joined collection path plus the
        anchor id. link_stub is always the bare id.
        """
        qualified = _join(parent_path, self.id)
        tags = [
            QualifiedTag(
                anchor=anchor.id if top_level else _join(qualified, anchor.id),
                path=anchor.file,
                link_stub=anchor.id,
            )
            for anchor in self.anchors
        ]
        for subcollection in self.subcollections:
            tags.extend(subcollection.get_all_tags(qualified, top_level))
        return tags

    def get_tags_by_collection(self, parent_path: str = "") -> list[CollectionReport]:
        """One report entry per collection holding direct anchors, depth first."""
        qualified = _join(parent_path, self.id)
        reports = []
        if self.anchors:
            reports.append(CollectionReport(
                name=qualified,
                anchors=[
                    QualifiedTag(anchor=a.id, path=a.file, link_stub=a.id)
                    for a in self.anchors
                ],
            ))
        for subcollection in self.subcollections:
            reports.extend(subcollection.get_tags_by_collection(qualified))
        return reports

    def anchor_count(self) -> int:
        return len(self.anchors) + sum(c.anchor_count() for c in self.subcollections)

    def to_schema(self) -> CollectionSchema:
        return CollectionSchema(
            id=self.id,
            anchors=[a.model_copy() for a in self.anchors],
            subcollections=[c.to_schema() for c in self.subcollections],
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain nested record in the internalReferences.json shape."""
        return self.to_schema().model_dump(mode="json")

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def inflate(cls, data: dict[str, Any] | CollectionSchema) -> "ReferenceCollection":
        """Rebuild a tree from its serialized form.

        The data is trusted: no duplicate or conflict checks are run.

        Raises:
            ReferenceDataError: If the data does not have the tree shape
        """
        if not isinstance(data, CollectionSchema):
            try:
                data = CollectionSchema.model_validate(data)
            except ValidationError as e:
                raise ReferenceDataError(f"Invalid reference tree: {e}") from e

        collection = cls(data.id)
        collection.anchors = list(data.anchors)
        collection.subcollections = [cls.inflate(c) for c in data.subcollections]
        return collection

    @classmethod
    def load(cls, path: Path) -> "ReferenceCollection":
        """Inflate a tree from a persisted internalReferences.json.

        Raises:
            ReferenceDataError: If the file is missing or not valid JSON
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ReferenceDataError(
                f"Reference tree not found: {path.name}. Run the parse step first."
            ) from e
        except (OSError, json.JSONDecodeError) as e:
            raise ReferenceDataError(f"Failed to read {path.name}: {e}") from e
        return cls.inflate(data)
