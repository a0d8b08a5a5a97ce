from __future__ import annotations

import unittest

from listening_blocks.platforms import (
    ENGAGING_WITH_GUID,
    UNKNOWN_OPERATOR,
    URL_OPERATOR,
    Platform,
    classify_link,
    strip_tracking,
)


class TestClassifyLink(unittest.TestCase):
    def test_facebook_trailing_digits(self) -> None:
        link = classify_link("https://www.facebook.com/352770001124_921437093355563")
        assert link is not None

        self.assertIs(link.platform, Platform.FACEBOOK)
        self.assertEqual(link.platform.code, "FB")
        self.assertEqual(link.identifier, "921437093355563")
        self.assertEqual(link.operator, ENGAGING_WITH_GUID)

    def test_facebook_without_id_keeps_empty_identifier(self) -> None:
        link = classify_link("https://www.facebook.com/somepage/")
        assert link is not None

        self.assertIs(link.platform, Platform.FACEBOOK)
        self.assertEqual(link.identifier, "")

    def test_tiktok_video_id(self) -> None:
        link = classify_link("https://www.tiktok.com/@entel/video/7412345678901234567?lang=es")
        assert link is not None

        self.assertEqual(link.platform.code, "TK")
        self.assertEqual(link.identifier, "7412345678901234567")
        self.assertEqual(link.operator, ENGAGING_WITH_GUID)

    def test_instagram_shortcodes(self) -> None:
        cases = {
            "https://www.instagram.com/p/C_REdQMix6/": "C_REdQMix6",
            "https://www.instagram.com/reel/DAQV5Qv-H8/": "DAQV5Qv-H8",
            "https://www.instagram.com/tv/XyZ123?igsh=abc": "XyZ123",
            "https://www.instagram.com/p/AbC": "AbC",
        }
        for url, expected in cases.items():
            with self.subTest(url=url):
                link = classify_link(url)
                assert link is not None
                self.assertEqual(link.platform.code, "IG")
                self.assertEqual(link.identifier, expected)
                self.assertEqual(link.operator, URL_OPERATOR)

    def test_linkedin_is_skipped(self) -> None:
        self.assertIsNone(classify_link("https://www.linkedin.com/posts/entel_activity-123"))

    def test_unknown_platform(self) -> None:
        link = classify_link("https://x.com/entel/status/1")
        assert link is not None

        self.assertTrue(link.is_unknown)
        self.assertEqual(link.platform.code, "??")
        self.assertEqual(link.platform.display_name, "Desconocida")
        self.assertEqual(link.identifier, "")
        self.assertEqual(link.operator, UNKNOWN_OPERATOR)

    def test_tracking_parameters_are_stripped(self) -> None:
        url = "https://www.facebook.com/1_222?utm_campaign=x&utm_source=y"

        self.assertEqual(strip_tracking(url), "https://www.facebook.com/1_222")
        link = classify_link(url)
        assert link is not None
        self.assertEqual(link.link, "https://www.facebook.com/1_222")
        self.assertEqual(link.identifier, "222")


if __name__ == "__main__":
    unittest.main()
