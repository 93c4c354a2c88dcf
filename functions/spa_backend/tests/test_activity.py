import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

from google.cloud.firestore_v1 import SERVER_TIMESTAMP

from spa_backend.activity import (
    FirestoreActivityStore,
    InMemoryActivityStore,
    format_time_ago,
    list_recent_activities,
    log_activity,
)
from spa_shared.types import ActivityStatus, ActivityType


class LogActivityTests(unittest.TestCase):
    def test_writes_record_with_defaults(self):
        store = MagicMock()

        self.assertTrue(log_activity("Appointment booked", store=store))

        store.add.assert_called_once()
        document = store.add.call_args.args[0]
        self.assertEqual(
            document,
            {
                "message": "Appointment booked",
                "type": "appointment",
                "status": "success",
                "timestamp": SERVER_TIMESTAMP,
                "userId": None,
            },
        )
        self.assertIs(document["timestamp"], SERVER_TIMESTAMP)

    def test_writes_type_status_and_user(self):
        store = InMemoryActivityStore()

        ok = log_activity(
            "Gallery image removed",
            activity_type="gallery",
            status=ActivityStatus.WARNING,
            user_id="admin-1",
            store=store,
        )

        self.assertTrue(ok)
        (document,) = store.documents.values()
        self.assertEqual(document["type"], "gallery")
        self.assertEqual(document["status"], "warning")
        self.assertEqual(document["userId"], "admin-1")
        self.assertIsInstance(document["timestamp"], datetime)

    def test_store_failure_returns_false(self):
        store = MagicMock()
        store.add.side_effect = RuntimeError("permission denied")

        with self.assertLogs("spa_backend.activity", level="ERROR") as logs:
            result = log_activity("Settings saved", ActivityType.SETTINGS, store=store)

        self.assertFalse(result)
        self.assertIn("Error logging activity", logs.output[0])

    @patch("spa_backend.dependencies.get_activity_store")
    def test_default_store_failure_returns_false(self, mock_get_store):
        mock_get_store.side_effect = ValueError("no Firebase project")

        with self.assertLogs("spa_backend.activity", level="ERROR"):
            self.assertFalse(log_activity("Service added", "service"))

    def test_unknown_type_or_status_returns_false(self):
        store = MagicMock()
        with self.assertLogs("spa_backend.activity", level="ERROR"):
            self.assertFalse(log_activity("x", activity_type="billing", store=store))
        with self.assertLogs("spa_backend.activity", level="ERROR"):
            self.assertFalse(log_activity("x", status="pending", store=store))
        store.add.assert_not_called()


class FirestoreActivityStoreTests(unittest.TestCase):
    def test_add_uses_activities_collection(self):
        client = MagicMock()
        doc_ref = MagicMock()
        doc_ref.id = "abc"
        client.collection.return_value.add.return_value = (None, doc_ref)
        store = FirestoreActivityStore(client)

        doc_id = store.add({"message": "m"})

        self.assertEqual(doc_id, "abc")
        client.collection.assert_called_once_with("activities")
        client.collection.return_value.add.assert_called_once_with({"message": "m"})

    def test_list_since_queries_newest_first(self):
        client = MagicMock()
        query = client.collection.return_value.where.return_value
        query = query.order_by.return_value.limit.return_value
        snapshot = MagicMock()
        snapshot.id = "doc1"
        snapshot.to_dict.return_value = {"message": "m"}
        query.stream.return_value = [snapshot]
        store = FirestoreActivityStore(client)
        since = datetime(2026, 1, 1, tzinfo=timezone.utc)

        result = store.list_since(since, 10)

        self.assertEqual(result, [("doc1", {"message": "m"})])
        collection = client.collection.return_value
        field_filter = collection.where.call_args.kwargs["filter"]
        self.assertEqual(field_filter.field_path, "timestamp")
        self.assertEqual(field_filter.op_string, ">=")
        self.assertEqual(field_filter.value, since)
        ordered = collection.where.return_value.order_by
        ordered.assert_called_once_with("timestamp", direction="DESCENDING")
        ordered.return_value.limit.assert_called_once_with(10)

    @patch("spa_backend.activity.get_firestore_client")
    def test_client_is_created_lazily(self, mock_client):
        mock_client.return_value.collection.return_value.add.return_value = (
            None,
            MagicMock(),
        )
        store = FirestoreActivityStore()
        mock_client.assert_not_called()
        store.add({"message": "m"})
        mock_client.assert_called_once()


class RecentActivityTests(unittest.TestCase):
    def setUp(self):
        self.now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def test_format_time_ago(self):
        cases = [
            (timedelta(seconds=20), "just now"),
            (timedelta(seconds=40), "1 minute ago"),
            (timedelta(minutes=59), "59 minutes ago"),
            (timedelta(minutes=60), "1 hour ago"),
            (timedelta(hours=23, minutes=59), "23 hours ago"),
            (timedelta(hours=24), "1 day ago"),
            (timedelta(hours=47), "1 day ago"),
            (timedelta(days=3), "3 days ago"),
        ]
        for age, expected in cases:
            self.assertEqual(format_time_ago(self.now - age, self.now), expected)

    def test_limit_and_window(self):
        store = InMemoryActivityStore()
        for minutes in range(15):
            store.add(
                {
                    "message": f"m{minutes}",
                    "type": "service",
                    "status": "success",
                    "timestamp": self.now - timedelta(minutes=minutes),
                }
            )

        entries = list_recent_activities(store, now=self.now)

        self.assertEqual(len(entries), 10)
        self.assertEqual(entries[0].message, "m0")
        self.assertEqual(entries[-1].message, "m9")

        entries = list_recent_activities(
            store, now=self.now, window=timedelta(minutes=2)
        )
        self.assertEqual([e.message for e in entries], ["m0", "m1", "m2"])


if __name__ == "__main__":
    unittest.main()
