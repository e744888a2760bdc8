"""
Unit tests for block segmentation.
"""

import unittest

from lichhoc.segment import segment


class TestSegment(unittest.TestCase):
    def test_empty_and_blank(self) -> None:
        self.assertEqual(segment(""), [])
        self.assertEqual(segment("  \n\t "), [])

    def test_split_keeps_marker_in_its_block(self) -> None:
        text = "Thứ 2\nToán\nThứ 4\nLý\n"
        blocks = segment(text)
        self.assertEqual([b.text for b in blocks], ["Thứ 2\nToán\n", "Thứ 4\nLý\n"])
        self.assertEqual([b.offset for b in blocks], [0, text.index("Thứ 4")])
        self.assertTrue(all(b.has_marker for b in blocks))

    def test_preamble_is_own_block(self) -> None:
        blocks = segment("Lịch học\nThứ 3 Hóa\nChủ nhật Nghỉ")
        self.assertEqual([b.text for b in blocks], ["Lịch học\n", "Thứ 3 Hóa\n", "Chủ nhật Nghỉ"])
        self.assertFalse(blocks[0].has_marker)
        self.assertTrue(blocks[2].has_marker)

    def test_no_marker_is_one_block(self) -> None:
        text = "Lập trình web\nPhòng: A1"
        blocks = segment(text)
        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].text, text)
        self.assertFalse(blocks[0].has_marker)

    def test_no_characters_dropped(self) -> None:
        text = "Thứ 2 A\nThứ 3 B\nThứ 4 C"
        self.assertEqual("".join(b.text for b in segment(text)), text)

    def test_sunday_short_marker(self) -> None:
        blocks = segment("Thứ 2\nToán\nCN\nSinh hoạt lớp")
        self.assertEqual([b.text for b in blocks], ["Thứ 2\nToán\n", "CN\nSinh hoạt lớp"])
        self.assertTrue(blocks[1].has_marker)

    def test_codes_starting_with_cn_are_not_markers(self) -> None:
        blocks = segment("Thứ 2\nNhóm: CNTT.01 CN.02\nPhòng: cn")
        self.assertEqual(len(blocks), 1)

    def test_adjacent_markers_are_not_merged(self) -> None:
        blocks = segment("Thứ 2Thứ 3")
        self.assertEqual([b.text for b in blocks], ["Thứ 2", "Thứ 3"])


if __name__ == "__main__":
    unittest.main()
