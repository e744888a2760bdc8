"""
Timetable texts shared by the tests.
"""

ANNOTATED_WEEK = """Tuần 38 [từ ngày 12/05/2025 đến ngày 18/05/2025]
📌 Thứ 6 (16/05/2025)
⏰ Tiết 1 - 2 (7h00 - 8h40)
📘 Phát triển ứng dụng di động đa nền tảng (2+0) - Mã học phần: DPM0123
👥 Nhóm: CNTT.CQ.01
👨‍🏫 Giảng viên: Võ Văn Lên
🏫 Phòng: K23-101
"""

# same record without the week header and without emoji
ANNOTATED_PLAIN = """Thứ 6 (16/05/2025)
Tiết 1 - 2 (7h00 - 8h40)
Phát triển ứng dụng di động đa nền tảng (2+0)
Nhóm: CNTT.CQ.01
Giảng viên: Võ Văn Lên
Phòng: K23-101
"""

ANNOTATED_NO_CLOCK = """📌 Thứ 4 (14/05/2025)
⏰ Tiết 3 - 4
📘 Thực hành Phát triển ứng dụng di động đa nền tảng (0+1)
👨‍🏫 Giảng viên: Võ Văn Lên
🏫 Phòng: K23-203
"""

WEEK_TABLE = """Tuần 38 [từ ngày 12/05/2025 đến ngày 18/05/2025]
Thứ 6
Tiết 1 - 2
Phát triển ứng dụng di động đa nền tảng (2+0) (DPM0123)
Nhóm: CNTT.CQ.01 Phòng: K23-101 GV: Võ Văn Lên
Thứ 4
Tiết 3 - 4
Thực hành Phát triển ứng dụng di động đa nền tảng (0+1)
Nhóm: CNTT.TH.01 Phòng: K23-203 GV: Võ Văn Lên
"""

GENERAL = "Thứ 3 Tiết 7 - 9 Lập trình Python Nhóm: CNTT.CQ.02 Phòng: E2-104 GV: Dương Thị Kim Chi"

UNMARKED = """Lập trình web (3+0)
Phòng: A1-101
GV: Nguyễn Văn A
Nhóm: KTPM.01
Mang theo laptop
"""

MARKED_LINES = """Lịch học tuần này
Thứ 2
Toán cao cấp
Phòng: B2-01
Chủ nhật
Sinh hoạt lớp
"""
