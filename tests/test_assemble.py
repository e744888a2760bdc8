"""
Unit tests for event assembly: title cleanup, description, dates, times, ids.
"""

import unittest
from datetime import date

from lichhoc.assemble import Assembler, clean_title, compose_description, split_annotations
from lichhoc.config import DEFAULT_END_TIME, DEFAULT_START_TIME
from lichhoc.model import RawFields, Weekday

ANCHOR = date(2025, 5, 12)
TODAY = date(2026, 10, 19)


class TestTitle(unittest.TestCase):
    def test_split_credits_and_code(self) -> None:
        self.assertEqual(
            split_annotations("Đồ án chuyên ngành (0+2) (DPM0456)"),
            ("Đồ án chuyên ngành", "0+2", "DPM0456"),
        )

    def test_split_code_suffix(self) -> None:
        self.assertEqual(
            split_annotations("Cơ sở dữ liệu (3+0) - Mã học phần: CSD101"),
            ("Cơ sở dữ liệu", "3+0", "CSD101"),
        )

    def test_plain_title(self) -> None:
        self.assertEqual(split_annotations("Triết học"), ("Triết học", "", ""))

    def test_clean_title(self) -> None:
        self.assertEqual(clean_title("📘  Phát triển ứng dụng   (2+0)"), "Phát triển ứng dụng")
        self.assertEqual(clean_title(" (2+0) "), "")


class TestDescription(unittest.TestCase):
    def test_only_present_parts(self) -> None:
        fields = RawFields(title="X", group="CNTT.CQ.01", instructor="Võ Văn Lên")
        self.assertEqual(compose_description(fields), "Nhóm: CNTT.CQ.01, GV: Võ Văn Lên")

    def test_missing_middle_part_has_no_double_separator(self) -> None:
        fields = RawFields(title="X", group="G1", course_code="", remainder="Mang máy tính")
        desc = compose_description(fields)
        self.assertEqual(desc, "Nhóm: G1, Mang máy tính")
        assert desc is not None
        self.assertNotIn(", ,", desc)

    def test_slot_label(self) -> None:
        fields = RawFields(title="X", weekday=Weekday.FRIDAY, period_start=1, period_end=2)
        self.assertEqual(compose_description(fields), "Thứ 6, Tiết 1-2")

    def test_nothing_present(self) -> None:
        self.assertIsNone(compose_description(RawFields(title="X")))


class TestAssembler(unittest.TestCase):
    def test_ids_are_sequential(self) -> None:
        asm = Assembler(ANCHOR, TODAY)
        events = asm.build_all([RawFields(title="A"), RawFields(title=""), RawFields(title="B")])
        self.assertEqual([e.id for e in events], ["1", "2"])
        self.assertEqual([e.title for e in events], ["A", "B"])

    def test_date_priority(self) -> None:
        asm = Assembler(ANCHOR, TODAY)
        explicit = RawFields(title="A", weekday=Weekday.MONDAY, explicit_date=date(2025, 5, 20))
        projected = RawFields(title="B", weekday=Weekday.FRIDAY)
        undated = RawFields(title="C")
        self.assertEqual(asm.resolve_date(explicit), date(2025, 5, 20))
        self.assertEqual(asm.resolve_date(projected), date(2025, 5, 16))
        self.assertEqual(asm.resolve_date(undated), TODAY)

    def test_clock_wins_over_periods(self) -> None:
        ev = Assembler(ANCHOR, TODAY).build(RawFields(title="A", clock="7h00 - 8h40", period_start=1, period_end=3))
        assert ev is not None
        self.assertEqual((ev.start_time, ev.end_time), ("07:00", "08:40"))

    def test_bad_clock_falls_back_to_periods(self) -> None:
        ev = Assembler(ANCHOR, TODAY).build(RawFields(title="A", clock="9h00 - 7h00", period_start=6, period_end=7))
        assert ev is not None
        self.assertEqual((ev.start_time, ev.end_time), ("13:00", "14:50"))

    def test_placeholder_slot(self) -> None:
        ev = Assembler(ANCHOR, TODAY).build(RawFields(title="A"))
        assert ev is not None
        self.assertEqual((ev.start_time, ev.end_time), (DEFAULT_START_TIME, DEFAULT_END_TIME))
        self.assertEqual((DEFAULT_START_TIME, DEFAULT_END_TIME), ("07:00", "08:40"))

    def test_empty_location_is_none(self) -> None:
        ev = Assembler(ANCHOR, TODAY).build(RawFields(title="A", room="  "))
        assert ev is not None
        self.assertIsNone(ev.location)
        self.assertIsNone(ev.description)


if __name__ == "__main__":
    unittest.main()
