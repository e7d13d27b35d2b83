"""Unit tests for the anchor/collection tree, flattening and collection reports."""

import json

import pytest

from duly_noted.constants import DiagnosticKind
from duly_noted.core import Diagnostics, ReferenceDataError
from duly_noted.references import ReferenceCollection
from duly_noted.schemas import Anchor


def _tree(*declarations):
    """Build a tree from (tag, file, line) declarations."""
    diagnostics = Diagnostics(quiet=True)
    tree = ReferenceCollection("")
    for tag, file, line in declarations:
        tree.add_anchor_tag(tag.split("/"), file, line, diagnostics)
    return tree, diagnostics


class TestAddAnchorTag:
    """Tests for building the tree from '/' separated tags."""

    def test_single_segment_adds_root_anchor(self):
        """A tag without '/' becomes an anchor of the root collection."""
        tree, diagnostics = _tree(("intro", "src/a.ts", 3))

        assert [a.id for a in tree.anchors] == ["intro"]
        assert tree.anchors[0].file == "src/a.ts"
        assert tree.anchors[0].line == 3
        assert tree.subcollections == []
        assert len(diagnostics) == 0

    def test_nested_tag_creates_collections(self):
        """'a/b/c' becomes Collection(a) -> Collection(b) -> Anchor(c)."""
        tree, _ = _tree(("a/b/c", "x.ts", 0))

        assert tree.anchors == []
        a = tree.find_subcollection("a")
        assert a is not None
        b = a.find_subcollection("b")
        assert b is not None
        assert [anchor.id for anchor in b.anchors] == ["c"]
        assert a.anchors == []

    def test_shared_prefixes_reuse_collections(self):
        """Repeated calls with the same prefix extend the existing collection."""
        tree, _ = _tree(
            ("api/client/connect", "client.ts", 1),
            ("api/client/close", "client.ts", 9),
            ("api/server", "server.ts", 2),
        )

        assert [c.id for c in tree.subcollections] == ["api"]
        api = tree.subcollections[0]
        assert [a.id for a in api.anchors] == ["server"]
        assert [c.id for c in api.subcollections] == ["client"]
        assert [a.id for a in api.subcollections[0].anchors] == ["connect", "close"]

    def test_does_not_consume_caller_segments(self):
        """The segment list passed in is left unchanged."""
        segments = ["a", "b", "c"]
        ReferenceCollection("").add_anchor_tag(segments, "f.ts", 0, Diagnostics(quiet=True))

        assert segments == ["a", "b", "c"]

    def test_empty_segments_are_ignored(self):
        tree = ReferenceCollection("")
        tree.add_anchor_tag([], "f.ts", 0, Diagnostics(quiet=True))

        assert tree.anchor_count() == 0


class TestConflicts:
    """Tests for duplicate anchors and anchor/collection name collisions."""

    def test_duplicate_anchor_is_reported_and_kept(self):
        """The second anchor is appended anyway and both locations are reported."""
        tree, diagnostics = _tree(("dup", "a.ts", 1), ("dup", "b.ts", 7))

        assert [(a.file, a.line) for a in tree.anchors] == [("a.ts", 1), ("b.ts", 7)]
        reports = diagnostics.of_kind(DiagnosticKind.DUPLICATE_ANCHOR)
        assert len(reports) == 1
        assert reports[0].file == "b.ts"
        assert reports[0].line == 7
        assert "a.ts:1" in reports[0].message

    def test_duplicate_lookup_returns_first(self):
        tree, _ = _tree(("dup", "a.ts", 1), ("dup", "b.ts", 7))

        tags = tree.get_all_tags()
        first = next(t for t in tags if t.anchor == "dup")
        assert first.path == "a.ts"

    def test_subcollection_rejected_when_anchor_exists(self):
        """A collection named like an existing anchor is not inserted."""
        diagnostics = Diagnostics(quiet=True)
        tree = ReferenceCollection("")
        tree.add_anchor_tag(["x"], "a.ts", 0, diagnostics)

        added = tree.add_subcollection(ReferenceCollection("x"), diagnostics)

        assert added is False
        assert tree.subcollections == []
        assert [a.id for a in tree.anchors] == ["x"]
        assert len(diagnostics.of_kind(DiagnosticKind.COLLECTION_CONFLICT)) == 1

    def test_nested_tag_under_anchor_name_is_dropped(self):
        """Declaring 'x/y' after anchor 'x' reports a conflict and keeps 'x' as the only occupant."""
        tree, diagnostics = _tree(("x", "a.ts", 0), ("x/y", "b.ts", 4))

        assert tree.subcollections == []
        assert [a.id for a in tree.anchors] == ["x"]
        assert len(diagnostics.of_kind(DiagnosticKind.COLLECTION_CONFLICT)) == 1

    def test_anchor_rejected_when_collection_exists(self):
        """An anchor named like an existing subcollection is not inserted."""
        tree, diagnostics = _tree(("x/y", "a.ts", 0), ("x", "b.ts", 4))

        assert tree.anchors == []
        assert [c.id for c in tree.subcollections] == ["x"]
        assert len(diagnostics.of_kind(DiagnosticKind.COLLECTION_CONFLICT)) == 1

    def test_duplicate_subcollection_rejected(self):
        diagnostics = Diagnostics(quiet=True)
        tree = ReferenceCollection("")
        assert tree.add_subcollection(ReferenceCollection("a"), diagnostics) is True
        assert tree.add_subcollection(ReferenceCollection("a"), diagnostics) is False

        assert len(tree.subcollections) == 1


class TestGetAllTags:
    """Tests for the flattened tag views."""

    def test_namespaced_view_uses_full_path(self):
        tree, _ = _tree(("a/b/c", "x.ts", 0))

        tags = tree.get_all_tags(top_level=False)

        assert len(tags) == 1
        assert tags[0].anchor == "a/b/c"
        assert tags[0].link_stub == "c"
        assert tags[0].path == "x.ts"

    def test_top_level_view_uses_bare_ids(self):
        tree, _ = _tree(("a/b/c", "x.ts", 0))

        tags = tree.get_all_tags()

        assert len(tags) == 1
        assert tags[0].anchor == "c"
        assert tags[0].link_stub == "c"

    def test_one_entry_per_distinct_path(self):
        """Distinct, non-colliding paths map 1:1 onto flattened tags."""
        declarations = [
            ("intro", "README.md", 0),
            ("api/connect", "client.ts", 3),
            ("api/close", "client.ts", 8),
            ("api/internal/retry", "retry.ts", 1),
            ("guides/setup", "setup.ts", 2),
        ]
        tree, diagnostics = _tree(*declarations)

        tags = tree.get_all_tags(top_level=False)

        assert len(diagnostics) == 0
        assert sorted(t.anchor for t in tags) == sorted(d[0] for d in declarations)
        by_anchor = {t.anchor: t.path for t in tags}
        for tag, file, _line in declarations:
            assert by_anchor[tag] == file

    def test_depth_first_anchors_before_subcollections(self):
        tree, _ = _tree(
            ("a/deep/one", "f.ts", 0),
            ("root1", "f.ts", 1),
            ("a/two", "f.ts", 2),
            ("b/three", "f.ts", 3),
            ("root2", "f.ts", 4),
        )

        assert [t.anchor for t in tree.get_all_tags(top_level=False)] == [
            "root1", "root2", "a/two", "a/deep/one", "b/three",
        ]
        assert [t.anchor for t in tree.get_all_tags()] == [
            "root1", "root2", "two", "one", "three",
        ]

    def test_parent_path_prefixes_namespaced_ids(self):
        tree, _ = _tree(("b/c", "f.ts", 0))

        tags = tree.get_all_tags(parent_path="a", top_level=False)

        assert tags[0].anchor == "a/b/c"


class TestGetTagsByCollection:
    """Tests for the grouped collection report."""

    def test_groups_direct_anchors_per_collection(self):
        tree, _ = _tree(
            ("intro", "README.md", 0),
            ("api/connect", "client.ts", 3),
            ("api/client/retry", "retry.ts", 1),
        )

        reports = tree.get_tags_by_collection()

        assert [r.name for r in reports] == ["", "api", "api/client"]
        assert [a.anchor for a in reports[1].anchors] == ["connect"]
        assert [a.anchor for a in reports[2].anchors] == ["retry"]
        assert reports[2].anchors[0].path == "retry.ts"

    def test_collections_without_anchors_are_skipped(self):
        tree, _ = _tree(("a/b/c", "f.ts", 0))

        reports = tree.get_tags_by_collection()

        assert [r.name for r in reports] == ["a/b"]


class TestSerialization:
    """Tests for to_dict / inflate round trips."""

    def test_to_dict_shape(self):
        tree, _ = _tree(("a/b", "f.ts", 2))

        data = tree.to_dict()

        assert data == {
            "id": "",
            "anchors": [],
            "subcollections": [
                {
                    "id": "a",
                    "anchors": [{"id": "b", "file": "f.ts", "line": 2}],
                    "subcollections": [],
                }
            ],
        }

    def test_reinflated_tree_flattens_identically(self):
        tree, _ = _tree(
            ("intro", "README.md", 0),
            ("api/connect", "client.ts", 3),
            ("api/client/retry", "retry.ts", 1),
            ("guides/setup", "setup.ts", 2),
        )

        restored = ReferenceCollection.inflate(json.loads(json.dumps(tree.to_dict())))

        assert restored.get_all_tags() == tree.get_all_tags()
        assert restored.get_all_tags(top_level=False) == tree.get_all_tags(top_level=False)
        assert restored.to_dict() == tree.to_dict()

    def test_inflate_keeps_duplicates_without_reporting(self):
        data = {
            "id": "",
            "anchors": [
                {"id": "dup", "file": "a.ts", "line": 0},
                {"id": "dup", "file": "b.ts", "line": 1},
            ],
            "subcollections": [],
        }

        tree = ReferenceCollection.inflate(data)

        assert len(tree.anchors) == 2
        assert isinstance(tree.anchors[0], Anchor)

    def test_inflate_rejects_malformed_data(self):
        with pytest.raises(ReferenceDataError):
            ReferenceCollection.inflate({"id": "", "anchors": [{"id": "x"}]})

    def test_save_and_load(self, tmp_path):
        tree, _ = _tree(("a/b", "f.ts", 2))
        path = tmp_path / "nested" / "internalReferences.json"

        tree.save(path)
        loaded = ReferenceCollection.load(path)

        assert loaded.to_dict() == tree.to_dict()

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ReferenceDataError, match="parse step"):
            ReferenceCollection.load(tmp_path / "internalReferences.json")

    def test_load_corrupt_file(self, tmp_path):
        path = tmp_path / "internalReferences.json"
        path.write_text("{not json")

        with pytest.raises(ReferenceDataError):
            ReferenceCollection.load(path)
