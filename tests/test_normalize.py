from __future__ import annotations

import unittest

from listening_blocks.config_schema import AppConfig, BlocksConfig
from listening_blocks.normalize import parsed_row_from_segment
from listening_blocks.post import RawSegment
from listening_blocks.run_log import RunLogger


class TestParsedRowFromSegment(unittest.TestCase):
    def test_builds_instagram_row(self) -> None:
        segment = RawSegment(
            url="https://www.instagram.com/reel/DAQV5Qv-H8/?utm_campaign=launch",
            copy_segment="Entelín aplicó la técnica Unagi de Ross para prepararse",
            date_token="22-09-24",
        )

        row = parsed_row_from_segment(segment)
        assert row is not None

        self.assertEqual(row.identifier, "DAQV5Qv-H8")
        self.assertEqual(row.identifier_operator, "url:")
        self.assertEqual(row.full_identifier, "url:DAQV5Qv-H8")
        self.assertEqual(row.abbreviated_platform, "IG")
        self.assertEqual(row.platform, "Instagram")
        self.assertEqual(row.title_words, "Entelín aplicó la técnica Unagi de Ross")
        self.assertEqual(row.title_operator, 'title:"Entelín aplicó la técnica Unagi de Ross"')
        self.assertEqual(row.formatted_date, "22/09/24")
        self.assertGreater(row.sortable_date, 0)
        self.assertEqual(row.topic_for_header, "Post")
        self.assertEqual(row.original_link, "https://www.instagram.com/reel/DAQV5Qv-H8/")

    def test_linkedin_returns_none(self) -> None:
        log = RunLogger()
        segment = RawSegment(url="https://www.linkedin.com/posts/x", copy_segment="", date_token="29-08-24")

        self.assertIsNone(parsed_row_from_segment(segment, logger=log))
        self.assertEqual(log.events(), ["linkedin_skipped"])

    def test_degraded_row_is_still_built(self) -> None:
        log = RunLogger()
        segment = RawSegment(url="https://example.com/post/1", copy_segment="hola", date_token="31-04-24")

        row = parsed_row_from_segment(segment, logger=log)
        assert row is not None

        self.assertEqual(row.abbreviated_platform, "??")
        self.assertEqual(row.identifier_operator, "unknown:")
        self.assertEqual(row.identifier, "")
        self.assertEqual(row.title_operator, "")
        self.assertEqual(row.formatted_date, "31-04-24")
        self.assertEqual(row.sortable_date, 0)
        self.assertEqual(
            log.events(),
            ["unknown_platform", "title_omitted", "date_unparsed"],
        )

    def test_topic_override_and_default(self) -> None:
        segment = RawSegment(url="https://www.tiktok.com/@a/video/1", copy_segment="", date_token="29-08-24")
        cfg = AppConfig(blocks=BlocksConfig(default_topic="Campaña"))

        row = parsed_row_from_segment(segment, config=cfg)
        assert row is not None
        self.assertEqual(row.topic_for_header, "Campaña")

        row = parsed_row_from_segment(segment, config=cfg, topic="Reel")
        assert row is not None
        self.assertEqual(row.topic_for_header, "Reel")

        row = parsed_row_from_segment(segment, config=cfg, topic="  ")
        assert row is not None
        self.assertEqual(row.topic_for_header, "Campaña")


if __name__ == "__main__":
    unittest.main()
