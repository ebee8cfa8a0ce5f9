import unittest
from datetime import datetime

from chat_checker.application.assembler import (
    fetch_result_record,
    groups_payload,
    search_all_payload,
    search_payload,
)
from chat_checker.application.demo import demo_payload
from chat_checker.domain import ErrorKind, FetchResult, Group, Message, SearchResult, TargetFailure

GROUP = Group(uuid="g1", name="Team", subject="Work", size=4, created_at=datetime(2024, 2, 20, 9, 15))


class TestAssembler(unittest.TestCase):

    def test_success_record(self):
        result = FetchResult.succeeded(GROUP, [Message(id="m1", text="hi", sender_display_name="Ann")], "+6580910054")

        record = fetch_result_record(result)

        self.assertEqual(record["phoneNumber"], "+6580910054")
        self.assertEqual(record["group"], {
            "uuid": "g1", "name": "Team", "subject": "Work", "size": 4,
            "createdAt": "2024-02-20T09:15:00",
        })
        self.assertEqual(record["messagesCount"], 1)
        self.assertEqual(record["messages"][0]["senderName"], "Ann")
        self.assertNotIn("error", record)

    def test_failure_record(self):
        result = FetchResult.failed(GROUP, ErrorKind.INVALID_REQUEST, "Invalid request (422)")

        record = fetch_result_record(result)

        self.assertNotIn("phoneNumber", record)
        self.assertNotIn("messages", record)
        self.assertEqual(record["error"], "Invalid request (422)")
        self.assertEqual(record["errorKind"], "INVALID_REQUEST")
        self.assertEqual(record["errorType"], "ACCESS_DENIED")

    def test_groups_payload(self):
        payload = groups_payload("+6580910054", [GROUP])
        self.assertEqual(payload["groupsCount"], 1)
        self.assertEqual(payload["groups"][0]["uuid"], "g1")

    def test_search_payload_without_matches(self):
        payload = search_payload("+6580910054", "zzz", [])
        self.assertEqual(payload["matchingGroupsCount"], 0)
        self.assertEqual(payload["message"], "No groups found matching the title")

    def test_search_all_payload(self):
        result = SearchResult(
            targets_searched=2,
            results=[FetchResult.succeeded(GROUP, [], "+6580910054")],
            failures=[TargetFailure("+6580261704", "Authentication failed (401)", ErrorKind.AUTH)],
        )

        payload = search_all_payload(result, None)

        self.assertEqual(payload["searchType"], "all_numbers")
        self.assertEqual(payload["numbersSearched"], 2)
        self.assertEqual(payload["numbersWithErrors"], 1)
        self.assertEqual(payload["groupTitle"], "all groups")
        self.assertEqual(payload["matchingGroupsCount"], 1)
        self.assertEqual(payload["errors"][0], {
            "phoneNumber": "+6580261704",
            "error": "Authentication failed (401)",
            "errorKind": "AUTH",
            "errorType": "AUTH",
        })

    def test_demo_payload_has_search_shape(self):
        payload = demo_payload()
        self.assertEqual(payload["matchingGroupsCount"], 2)
        self.assertEqual([r["messagesCount"] for r in payload["results"]], [3, 2])
        self.assertEqual(payload["results"][0]["group"]["name"], "Demo Family Group")


if __name__ == "__main__":
    unittest.main()
