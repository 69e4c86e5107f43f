import sys
import unittest

from masked_fastmail.models import AliasRecord, AliasState, is_known_state, state_priority


class TestAliasState(unittest.TestCase):
    def test_parse_known_and_unknown(self) -> None:
        self.assertIs(AliasState.parse("enabled"), AliasState.ENABLED)
        self.assertEqual(AliasState.parse("quarantined"), "quarantined")
        self.assertEqual(AliasState.parse(None), "")

    def test_priority_table(self) -> None:
        self.assertEqual(state_priority(AliasState.ENABLED), 0)
        self.assertEqual(state_priority("pending"), 1)
        self.assertEqual(state_priority(AliasState.DISABLED), 2)
        self.assertEqual(state_priority(AliasState.DELETED), 3)
        self.assertEqual(state_priority("mystery"), sys.maxsize)

    def test_known_state(self) -> None:
        self.assertTrue(is_known_state("deleted"))
        self.assertFalse(is_known_state("mystery"))

    def test_str_is_value(self) -> None:
        self.assertEqual(str(AliasState.DISABLED), "disabled")
        self.assertEqual(f"{AliasState.ENABLED}", "enabled")


class TestAliasRecord(unittest.TestCase):
    def test_from_payload_tolerates_missing_and_null(self) -> None:
        record = AliasRecord.from_payload({"email": "a@x.com", "forDomain": None, "state": "pending"})
        self.assertEqual(record.for_domain, "")
        self.assertEqual(record.description, "")
        self.assertEqual(record.id, "")
        self.assertIs(record.state, AliasState.PENDING)

    def test_domain_source_falls_back_to_description(self) -> None:
        self.assertEqual(AliasRecord(email="a", description="example.com").domain_source, "example.com")
        self.assertEqual(
            AliasRecord(email="a", for_domain="https://x.org", description="y").domain_source,
            "https://x.org",
        )

    def test_payload_keeps_unknown_state(self) -> None:
        record = AliasRecord.from_payload({"email": "a@x.com", "state": "mystery", "id": "m1"})
        self.assertEqual(record.to_payload()["state"], "mystery")
        self.assertEqual(record.state_label, "mystery")

    def test_records_are_immutable(self) -> None:
        record = AliasRecord(email="a@x.com")
        with self.assertRaises(AttributeError):
            record.email = "b@x.com"  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
