"""Unit tests for app.services.catalog: bucket CRUD, id assignment and JSON persistence."""

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from app.core.errors import (
    CategoryNotFoundError,
    ContentNotFoundError,
    ContentValidationError,
    InvalidCategoryError,
)
from app.models.content import Catalog
from app.schemas.content import ContentCreate, ContentUpdate
from app.services.catalog import ContentCatalog, validate_new_content
from app.services.storage import StoredFile


def _fields(**overrides: str | None) -> ContentCreate:
    values: dict[str, str | None] = {
        "title": "Intro",
        "description": "First lesson",
        "category": "Basic",
        "type": "pdf",
    }
    values.update(overrides)
    return ContentCreate(**values)


class CatalogTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "content-data.json"
        self.catalog = ContentCatalog(self.path)


class TestValidateNewContent(unittest.TestCase):
    def test_normalizes_category(self) -> None:
        self.assertEqual(validate_new_content(_fields(category=" ADVANCED ")), "advanced")

    def test_missing_required_fields(self) -> None:
        for missing in ("title", "category", "type"):
            with self.subTest(missing=missing):
                with self.assertRaises(ContentValidationError) as ctx:
                    validate_new_content(_fields(**{missing: None}))
                self.assertEqual(ctx.exception.message, "Missing required fields")

    def test_blank_title_counts_as_missing(self) -> None:
        with self.assertRaises(ContentValidationError):
            validate_new_content(_fields(title="   "))

    def test_unknown_category(self) -> None:
        with self.assertRaises(InvalidCategoryError) as ctx:
            validate_new_content(_fields(category="expert"))
        self.assertEqual(ctx.exception.status_code, 400)

    def test_description_is_optional(self) -> None:
        self.assertEqual(validate_new_content(_fields(description=None)), "basic")


class TestStartup(CatalogTestCase):
    def test_missing_file_starts_empty_and_is_not_written(self) -> None:
        self.assertEqual(self.catalog.list_all(), Catalog())
        self.assertFalse(self.path.exists())

    def test_existing_file_is_loaded(self) -> None:
        self.path.write_text(
            json.dumps(
                {
                    "basic": [
                        {
                            "id": 1700000000000,
                            "title": "Legacy",
                            "description": "from the old server",
                            "category": "basic",
                            "type": "video",
                            "filename": "1700000000000-123.mp4",
                            "originalName": "lesson.mp4",
                            "uploadDate": "2023-11-14T22:13:20.000Z",
                            "uploadedBy": "admin",
                        }
                    ],
                    "advanced": [],
                }
            ),
            encoding="utf-8",
        )
        catalog = ContentCatalog(self.path)
        items = catalog.list_by_category("basic")
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].original_name, "lesson.mp4")
        self.assertEqual(items[0].uploaded_by, "admin")
        self.assertIsNone(items[0].updated_at)


class TestCreate(CatalogTestCase):
    def test_item_lands_in_normalized_bucket(self) -> None:
        item = self.catalog.create(_fields(category="Basic"), actor="admin")
        self.assertEqual(item.category, "basic")
        self.assertEqual(item.uploaded_by, "admin")
        self.assertEqual([i.id for i in self.catalog.list_by_category("BASIC")], [item.id])
        self.assertEqual([i.id for i in self.catalog.list_all().basic], [item.id])
        self.assertEqual(self.catalog.list_all().advanced, [])

    def test_stored_file_is_attached(self) -> None:
        stored = StoredFile(filename="1-000000001.pdf", original_name="intro.pdf", size=10)
        item = self.catalog.create(_fields(), stored, actor="admin")
        self.assertEqual(item.filename, "1-000000001.pdf")
        self.assertEqual(item.original_name, "intro.pdf")

    def test_without_file(self) -> None:
        item = self.catalog.create(_fields())
        self.assertIsNone(item.filename)
        self.assertIsNone(item.original_name)
        self.assertIsNone(item.uploaded_by)

    def test_persists_before_returning(self) -> None:
        item = self.catalog.create(_fields(category="advanced"))
        on_disk = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(on_disk["basic"], [])
        self.assertEqual(on_disk["advanced"][0]["id"], item.id)
        self.assertIn("uploadDate", on_disk["advanced"][0])
        self.assertIn("originalName", on_disk["advanced"][0])

    def test_invalid_category_is_not_persisted(self) -> None:
        with self.assertRaises(InvalidCategoryError):
            self.catalog.create(_fields(category="general"))
        self.assertFalse(self.path.exists())

    def test_ids_strictly_increase_within_same_millisecond(self) -> None:
        with patch("app.services.catalog.time") as mock_time:
            mock_time.time.return_value = 1_700_000_000.0
            ids = [self.catalog.create(_fields()).id for _ in range(3)]
        self.assertEqual(ids, [1_700_000_000_000, 1_700_000_000_001, 1_700_000_000_002])

    def test_ids_continue_after_reload(self) -> None:
        with patch("app.services.catalog.time") as mock_time:
            mock_time.time.return_value = 2_000_000_000.0
            first = self.catalog.create(_fields())
        reloaded = ContentCatalog(self.path)
        with patch("app.services.catalog.time") as mock_time:
            mock_time.time.return_value = 1_000_000_000.0
            second = reloaded.create(_fields())
        self.assertEqual(second.id, first.id + 1)

    def test_failed_save_leaves_catalog_untouched(self) -> None:
        with patch(
            "app.services.catalog.write_json_atomic", side_effect=OSError("disk full")
        ):
            with self.assertRaises(OSError):
                self.catalog.create(_fields())
        self.assertEqual(self.catalog.list_all(), Catalog())

    def test_snapshot_is_detached(self) -> None:
        self.catalog.create(_fields())
        snapshot = self.catalog.list_all()
        snapshot.basic.clear()
        self.assertEqual(len(self.catalog.list_all().basic), 1)


class TestListByCategory(CatalogTestCase):
    def test_unknown_category(self) -> None:
        with self.assertRaises(CategoryNotFoundError) as ctx:
            self.catalog.list_by_category("unknown")
        self.assertEqual(ctx.exception.message, "Category not found")

    def test_case_insensitive(self) -> None:
        self.catalog.create(_fields(category="advanced"))
        self.assertEqual(len(self.catalog.list_by_category("Advanced")), 1)


class TestUpdate(CatalogTestCase):
    def test_partial_update_keeps_other_fields(self) -> None:
        item = self.catalog.create(_fields(), actor="admin")
        updated = self.catalog.update(item.id, ContentUpdate(title="Renamed"), actor="editor")
        self.assertEqual(updated.title, "Renamed")
        self.assertEqual(updated.description, "First lesson")
        self.assertEqual(updated.type, "pdf")
        self.assertEqual(updated.uploaded_by, "admin")
        self.assertEqual(updated.updated_by, "editor")
        self.assertIsNotNone(updated.updated_at)
        self.assertEqual(self.catalog.get(item.id).title, "Renamed")

    def test_empty_values_keep_current(self) -> None:
        item = self.catalog.create(_fields())
        updated = self.catalog.update(item.id, ContentUpdate(title="", type=""))
        self.assertEqual(updated.title, "Intro")
        self.assertEqual(updated.type, "pdf")

    def test_category_change_moves_bucket(self) -> None:
        item = self.catalog.create(_fields(category="basic"))
        updated = self.catalog.update(item.id, ContentUpdate(category="Advanced"))
        self.assertEqual(updated.category, "advanced")
        snapshot = self.catalog.list_all()
        self.assertEqual(snapshot.basic, [])
        self.assertEqual([i.id for i in snapshot.advanced], [item.id])

    def test_invalid_category(self) -> None:
        item = self.catalog.create(_fields())
        with self.assertRaises(InvalidCategoryError):
            self.catalog.update(item.id, ContentUpdate(category="expert"))

    def test_unknown_id_leaves_file_unchanged(self) -> None:
        self.catalog.create(_fields())
        before = self.path.read_bytes()
        with self.assertRaises(ContentNotFoundError):
            self.catalog.update(999999, ContentUpdate(title="x"))
        self.assertEqual(self.path.read_bytes(), before)

    def test_unknown_id_wins_over_invalid_category(self) -> None:
        self.catalog.create(_fields())
        before = self.path.read_bytes()
        with self.assertRaises(ContentNotFoundError):
            self.catalog.update(999999, ContentUpdate(category="general"))
        self.assertEqual(self.path.read_bytes(), before)


class TestDelete(CatalogTestCase):
    def test_removes_from_its_bucket(self) -> None:
        keep = self.catalog.create(_fields(title="Keep"))
        gone = self.catalog.create(_fields(title="Gone", category="advanced"))
        removed = self.catalog.delete(gone.id)
        self.assertEqual(removed.id, gone.id)
        removed.title = "mutated by caller"
        self.assertEqual(ContentCatalog(self.path).list_all(), self.catalog.list_all())
        snapshot = self.catalog.list_all()
        self.assertEqual([i.id for i in snapshot.basic], [keep.id])
        self.assertEqual(snapshot.advanced, [])
        self.assertEqual(ContentCatalog(self.path).list_all(), snapshot)

    def test_unknown_id_leaves_file_unchanged(self) -> None:
        self.catalog.create(_fields())
        before = self.path.read_bytes()
        with self.assertRaises(ContentNotFoundError):
            self.catalog.delete(999999)
        self.assertEqual(self.path.read_bytes(), before)


class TestPersistenceRoundTrip(CatalogTestCase):
    def test_reload_equals_in_memory_state(self) -> None:
        a = self.catalog.create(_fields(title="A"), actor="admin")
        self.catalog.create(
            _fields(title="B", category="advanced"),
            StoredFile(filename="2-000000002.mp4", original_name="b.mp4", size=3),
            actor="admin",
        )
        self.catalog.update(a.id, ContentUpdate(description="changed"), actor="admin")
        self.assertEqual(ContentCatalog(self.path).list_all(), self.catalog.list_all())

    def test_file_is_deterministic(self) -> None:
        self.catalog.create(_fields())
        text = self.path.read_text(encoding="utf-8")
        data = json.loads(text)
        self.assertEqual(text, json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False) + "\n")


if __name__ == "__main__":
    unittest.main()
