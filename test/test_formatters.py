#!/usr/bin/env python3
import unittest

from slack_relay.formatters import build_attachment_message, build_blocks_message, build_message
from slack_relay.models import decode_payload

from sample_payloads import SAMPLE_WEBHOOK, sample_webhook

TITLE = "[Alert] New error reported in service: checkout-api"
LINK = "https://errors.example.com/groups/42"


class TestAttachmentMessage(unittest.TestCase):
    def setUp(self):
        self.payload = decode_payload(SAMPLE_WEBHOOK)

    def test_payload_shape(self):
        body = build_attachment_message(self.payload, "C111").to_payload()
        self.assertEqual(body["channel"], "C111")
        self.assertEqual(body["text"], TITLE)

        attachment = body["attachments"][0]
        self.assertEqual(attachment["color"], "#ff0000")
        self.assertEqual(attachment["title"], TITLE)
        self.assertEqual(attachment["title_link"], LINK)
        self.assertEqual(attachment["fields"], [
            {"title": "Project ID", "value": "proj-a", "short": True},
            {"title": "Version", "value": "2024.05.1", "short": True},
            {"title": "Error Message", "value": "Cannot read field 'total' of null", "short": False},
        ])
        self.assertEqual(attachment["actions"], [
            {"type": "button", "text": "View Details", "url": LINK, "style": "danger"},
        ])

    def test_without_detail_link(self):
        data = sample_webhook(group_info={"project_id": "proj-a", "detail_link": ""})
        attachment = build_attachment_message(decode_payload(data), "C111").to_payload()["attachments"][0]
        self.assertNotIn("title_link", attachment)
        self.assertNotIn("actions", attachment)

    def test_custom_color(self):
        body = build_attachment_message(self.payload, "C111", color="#123456").to_payload()
        self.assertEqual(body["attachments"][0]["color"], "#123456")


class TestBlocksMessage(unittest.TestCase):
    def setUp(self):
        self.payload = decode_payload(SAMPLE_WEBHOOK)

    def test_blocks_carry_same_content(self):
        body = build_blocks_message(self.payload, "C222").to_payload()
        self.assertEqual(body["channel"], "C222")
        self.assertEqual(body["text"], TITLE)

        attachment = body["attachments"][0]
        self.assertEqual(attachment["color"], "#ff0000")
        blocks = attachment["blocks"]
        types = [b["type"] for b in blocks]
        self.assertEqual(types, ["header", "section", "section", "section", "actions"])

        self.assertEqual(blocks[0]["text"]["text"], TITLE)
        self.assertIn(LINK, blocks[1]["text"]["text"])
        field_texts = [f["text"] for f in blocks[2]["fields"]]
        self.assertEqual(field_texts, ["*Project ID*\nproj-a", "*Version*\n2024.05.1"])
        self.assertIn("Cannot read field 'total' of null", blocks[3]["text"]["text"])

        button = blocks[4]["elements"][0]
        self.assertEqual(button["url"], LINK)
        self.assertEqual(button["text"]["text"], "View Details")

    def test_escapes_message_markup(self):
        data = sample_webhook(exception_info={"type": "X", "message": "a < b && c > d"})
        blocks = build_blocks_message(decode_payload(data), "C1").to_payload()["attachments"][0]["blocks"]
        self.assertIn("a &lt; b &amp;&amp; c &gt; d", blocks[3]["text"]["text"])

    def test_long_service_name_truncated_in_header(self):
        data = sample_webhook(event_info={"service": "s" * 300})
        blocks = build_blocks_message(decode_payload(data), "C1").to_payload()["attachments"][0]["blocks"]
        self.assertLessEqual(len(blocks[0]["text"]["text"]), 150)

    def test_without_detail_link(self):
        data = sample_webhook(group_info={"project_id": "proj-a"})
        blocks = build_blocks_message(decode_payload(data), "C1").to_payload()["attachments"][0]["blocks"]
        self.assertEqual([b["type"] for b in blocks], ["header", "section", "section"])


class TestBuildMessage(unittest.TestCase):
    def test_selects_format(self):
        payload = decode_payload(SAMPLE_WEBHOOK)
        flat = build_message(payload, "C1").to_payload()["attachments"][0]
        rich = build_message(payload, "C1", "blocks").to_payload()["attachments"][0]
        self.assertIn("fields", flat)
        self.assertIn("blocks", rich)


if __name__ == '__main__':
    unittest.main()
