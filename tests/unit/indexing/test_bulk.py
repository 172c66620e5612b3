"""Tests for the vector bulk indexer."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from opensearchpy.exceptions import ConnectionError as TransportConnectionError
from pydantic import ValidationError

from searchbridge.connection.resource import ConnectionResource
from searchbridge.indexing.bulk import VectorBulkIndexer, build_actions, build_payload
from searchbridge.models.vector import VectorDocument


@pytest.fixture
def indexer(resource: ConnectionResource) -> VectorBulkIndexer:
    return VectorBulkIndexer(resource)


class TestPayload:
    def test_vector_then_metadata(self) -> None:
        doc = VectorDocument(id="1", vector=[1, 2], metadata={"title": "lamp", "price": 9.5})
        assert build_payload("embedding", doc) == {"embedding": [1.0, 2.0], "title": "lamp", "price": 9.5}

    def test_metadata_cannot_overwrite_vector(self, caplog: pytest.LogCaptureFixture) -> None:
        doc = VectorDocument(id="1", vector=[0.5], metadata={"embedding": "oops", "title": "x"})
        with caplog.at_level("WARNING", logger="searchbridge.indexing.bulk"):
            payload = build_payload("embedding", doc)
        assert payload == {"embedding": [0.5], "title": "x"}
        assert "collides with the vector field" in caplog.text

    def test_engine_metadata_fields_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        doc = VectorDocument(id="1", vector=[1.0], metadata={"_id": "x", "_routing": "r", "title": "lamp"})
        with caplog.at_level("WARNING", logger="searchbridge.indexing.bulk"):
            payload = build_payload("vec", doc)
        assert payload == {"vec": [1.0], "title": "lamp"}
        assert "'_id' is an engine metadata field" in caplog.text
        assert "'_routing' is an engine metadata field" in caplog.text

    def test_underscore_keys_outside_reserved_set_kept(self) -> None:
        doc = VectorDocument(id="1", vector=[1.0], metadata={"_tag": "a"})
        assert build_payload("vec", doc) == {"vec": [1.0], "_tag": "a"}

    def test_no_metadata(self) -> None:
        assert build_payload("v", VectorDocument(vector=[0.1])) == {"v": [0.1]}

    def test_actions_omit_missing_id(self) -> None:
        actions = build_actions("idx", "v", [VectorDocument(vector=[0.1]), VectorDocument(id="b", vector=[0.2])])
        assert actions == [
            {"index": {"_index": "idx"}},
            {"v": [0.1]},
            {"index": {"_index": "idx", "_id": "b"}},
            {"v": [0.2]},
        ]

    def test_empty_vector_rejected(self) -> None:
        with pytest.raises(ValidationError):
            VectorDocument(id="1", vector=[])


class TestBulkIndex:
    def test_single_request_for_batch(self, indexer: VectorBulkIndexer, mock_client: MagicMock) -> None:
        mock_client.bulk.return_value = {
            "took": 12,
            "errors": False,
            "items": [{"index": {"_id": str(i), "status": 201}} for i in range(5)],
        }
        docs = [VectorDocument(id=str(i), vector=[float(i)] * 4, metadata={"n": i}) for i in range(5)]

        summary = indexer.bulk_index("products", "embedding", docs)

        mock_client.bulk.assert_called_once()
        body = mock_client.bulk.call_args.kwargs["body"]
        assert len(body) == 10
        assert body[0] == {"index": {"_index": "products", "_id": "0"}}
        assert body[9] == {"embedding": [4.0, 4.0, 4.0, 4.0], "n": 4}
        assert summary.submitted == 5
        assert summary.errors is False
        assert summary.failed == 0
        assert summary.took_ms == 12

    def test_empty_batch_completes_without_request(
        self, indexer: VectorBulkIndexer, mock_client: MagicMock
    ) -> None:
        summary = indexer.bulk_index("products", "embedding", [])
        assert summary.submitted == 0
        assert summary.errors is False
        mock_client.bulk.assert_not_called()

    def test_partial_failure_logged_not_raised(
        self, indexer: VectorBulkIndexer, mock_client: MagicMock, caplog: pytest.LogCaptureFixture
    ) -> None:
        mock_client.bulk.return_value = {
            "took": 3,
            "errors": True,
            "items": [
                {"index": {"_id": "1", "status": 201}},
                {"index": {"_id": "2", "status": 400, "error": {"type": "mapper_parsing_exception"}}},
            ],
        }
        docs = [VectorDocument(id="1", vector=[0.1]), VectorDocument(id="2", vector=[0.2])]

        with caplog.at_level("WARNING", logger="searchbridge.indexing.bulk"):
            summary = indexer.bulk_index("products", "embedding", docs)

        assert summary.errors is True
        assert summary.failed == 1
        assert summary.raw["items"][1]["index"]["error"]["type"] == "mapper_parsing_exception"
        assert "Errors: True" in caplog.text
        mock_client.bulk.assert_called_once()

    def test_accepts_tuples(self, indexer: VectorBulkIndexer, mock_client: MagicMock) -> None:
        mock_client.bulk.return_value = {"errors": False, "items": []}
        indexer.bulk_index("products", "embedding", [("t1", (0.1, 0.2), {"tag": "a"}), (None, [0.3, 0.4], None)])

        body = mock_client.bulk.call_args.kwargs["body"]
        assert body == [
            {"index": {"_index": "products", "_id": "t1"}},
            {"embedding": [0.1, 0.2], "tag": "a"},
            {"index": {"_index": "products"}},
            {"embedding": [0.3, 0.4]},
        ]

    def test_transport_error_propagates(self, indexer: VectorBulkIndexer, mock_client: MagicMock) -> None:
        mock_client.bulk.side_effect = TransportConnectionError("N/A", "refused", None)
        with pytest.raises(TransportConnectionError):
            indexer.bulk_index("products", "embedding", [VectorDocument(vector=[0.1])])
