import unittest
from typing import Iterable, Sequence

from application.services.result_post_processor import backfill_document_names, filter_date_titles
from domain.entities import EntityKind, ResultRecord
from domain.interfaces import BlockRepository


def document(block_id: str, content: str, space_id: str = "s1") -> ResultRecord:
    return ResultRecord(id=block_id, space_id=space_id, content=content, entity_type=EntityKind.DOCUMENT)


def fragment(block_id: str, content: str, document_id: str, space_id: str = "s1") -> ResultRecord:
    return ResultRecord(
        id=block_id,
        space_id=space_id,
        content=content,
        entity_type=EntityKind.FRAGMENT,
        document_id=document_id,
    )


class StubTitleRepository(BlockRepository):
    def __init__(self, space_id: str, titles: dict[str, str]) -> None:
        self.space_id = space_id
        self._titles = titles
        self.lookups: list[list[str]] = []

    def search_fulltext(self, expression: str, limit: int) -> list[ResultRecord]:
        raise NotImplementedError

    def search_substring(self, terms: Sequence[str], limit: int) -> list[ResultRecord]:
        raise NotImplementedError

    def document_titles(self, document_ids: Iterable[str]) -> dict[str, str]:
        ids = list(document_ids)
        self.lookups.append(ids)
        return {doc_id: self._titles[doc_id] for doc_id in ids if doc_id in self._titles}


class TestFilterDateTitles(unittest.TestCase):
    def test_drops_daily_documents(self):
        records = [document("d1", "2024.03.01"), document("d2", "Project Plan")]

        filtered = filter_date_titles(records, daily=False, limit=40)

        self.assertEqual([item.id for item in filtered], ["d2"])

    def test_keeps_daily_documents_when_requested(self):
        records = [document("d1", "2024.03.01"), document("d2", "Project Plan")]

        filtered = filter_date_titles(records, daily=True, limit=40)

        self.assertEqual([item.id for item in filtered], ["d1", "d2"])

    def test_never_drops_blocks(self):
        records = [fragment("b1", "2024.03.01", "d9")]

        filtered = filter_date_titles(records, daily=False, limit=40)

        self.assertEqual(len(filtered), 1)

    def test_caps_after_filtering(self):
        records = [document("daily", "2024.03.01")] + [document(f"d{i}", f"note {i}") for i in range(50)]

        filtered = filter_date_titles(records, daily=False, limit=40)

        self.assertEqual(len(filtered), 40)
        self.assertEqual(filtered[0].id, "d0")
        self.assertEqual(filtered[-1].id, "d39")


class TestBackfillDocumentNames(unittest.TestCase):
    def test_labels_documents_and_blocks(self):
        records = [
            document("d1", "Project Plan"),
            fragment("b1", "first step", "d1"),
            fragment("b2", "orphan", "missing"),
            fragment("b3", "elsewhere", "d7", space_id="s2"),
        ]
        repositories = [
            StubTitleRepository("s1", {"d1": "Project Plan"}),
            StubTitleRepository("s2", {"d7": "Other Space"}),
        ]

        backfilled = backfill_document_names(records, repositories)

        self.assertEqual(
            [item.document_name for item in backfilled],
            ["[Document]", "[Block] Project Plan", "[Block] ", "[Block] Other Space"],
        )

    def test_does_not_mutate_input(self):
        records = [fragment("b1", "first step", "d1")]

        backfill_document_names(records, [StubTitleRepository("s1", {"d1": "Plan"})])

        self.assertIsNone(records[0].document_name)

    def test_one_lookup_per_space_and_none_without_blocks(self):
        with_blocks = StubTitleRepository("s1", {"d1": "Plan"})
        only_documents = StubTitleRepository("s2", {})
        records = [
            fragment("b1", "a", "d1"),
            fragment("b2", "b", "d1"),
            document("d5", "Doc", space_id="s2"),
        ]

        backfill_document_names(records, [with_blocks, only_documents])

        self.assertEqual(with_blocks.lookups, [["d1", "d1"]])
        self.assertEqual(only_documents.lookups, [])

    def test_keeps_existing_labels(self):
        labelled = ResultRecord(
            id="b1",
            space_id="s1",
            content="a",
            entity_type=EntityKind.FRAGMENT,
            document_id="d1",
            document_name="[Block] Known",
        )
        repository = StubTitleRepository("s1", {"d1": "Plan"})

        backfilled = backfill_document_names([labelled], [repository])

        self.assertEqual(backfilled[0].document_name, "[Block] Known")
        self.assertEqual(repository.lookups, [])


if __name__ == "__main__":
    unittest.main()
