#!/usr/bin/env python3
import unittest

from slack_relay.config import RelayConfig
from slack_relay.errors import ConfigurationError
from slack_relay.routing import ChannelResolver


class TestChannelResolver(unittest.TestCase):
    def setUp(self):
        self.resolver = ChannelResolver({"proj-a": "C111", "proj-b": "C222"}, "C999")

    def test_mapped_project(self):
        self.assertEqual(self.resolver.resolve("proj-a"), "C111")
        self.assertEqual(self.resolver.resolve("proj-b"), "C222")

    def test_unmapped_project_uses_default(self):
        self.assertEqual(self.resolver.resolve("proj-x"), "C999")
        self.assertEqual(self.resolver.resolve(""), "C999")

    def test_empty_default_rejected(self):
        with self.assertRaises(ConfigurationError):
            ChannelResolver({"proj-a": "C111"}, "")

    def test_from_config(self):
        config = RelayConfig(slack_bot_token="t", default_channel="C999", channel_map={"proj-a": "C111"})
        resolver = ChannelResolver.from_config(config)
        self.assertEqual(resolver.resolve("proj-a"), "C111")
        self.assertEqual(resolver.resolve("other"), "C999")

    def test_source_mapping_changes_are_not_seen(self):
        source = {"proj-a": "C111"}
        resolver = ChannelResolver(source, "C999")
        source["proj-a"] = "C000"
        self.assertEqual(resolver.resolve("proj-a"), "C111")


if __name__ == '__main__':
    unittest.main()
