"""
End-to-end tests for parse_attendance_workbook over in-memory exports.
"""
from datetime import date, datetime

from attendance.excel.reader import WorkbookReader
from attendance.parser import AttendanceParser, parse_attendance_file, parse_attendance_workbook

HEADER = ["Name", "ID", "Department"]


def test_scenario_single_month(xlsx_bytes):
    data = xlsx_bytes([
        HEADER + ["12-01", "12-02"],
        ["Ali", "E001", "IT", "W", "L"],
    ])
    result = parse_attendance_workbook(data, manual_year=2025)

    assert result.errors == []
    assert result.date_columns == ["2025-12-01", "2025-12-02"]
    assert [e.model_dump() for e in result.employees] == [{
        "id": "E001",
        "name": "Ali",
        "department": "IT",
        "daily_attendance": {"2025-12-01": "W", "2025-12-02": "L"},
    }]


def test_scenario_single_month_from_time_period(xlsx_bytes, export_rows):
    data = xlsx_bytes(export_rows(
        ":Time Period: 2025-12-01 - 2025-12-31:",
        HEADER + ["12-01", "12-02"],
        [["Ali", "E001", "IT", "W", "L"]],
    ))
    result = parse_attendance_workbook(data, today=date(2031, 5, 5))

    assert result.errors == []
    assert result.warnings == ["Time Period topildi: 2025 yil"]
    assert result.date_columns == ["2025-12-01", "2025-12-02"]
    assert result.employees[0].daily_attendance == {"2025-12-01": "W", "2025-12-02": "L"}


def test_scenario_missing_department(xlsx_bytes):
    data = xlsx_bytes([["Name", "ID", "12-01"], ["Ali", "E001", "W"]])
    result = parse_attendance_workbook(data, manual_year=2025)

    assert result.errors == ["Majburiy ustun topilmadi: Department"]
    assert result.employees == []
    assert result.date_columns == []


def test_all_missing_columns_reported_in_order(xlsx_bytes):
    data = xlsx_bytes([["Foo", "Bar"], ["1", "2"]])
    result = parse_attendance_workbook(data, manual_year=2025)
    assert result.errors == [
        "Majburiy ustun topilmadi: Name",
        "Majburiy ustun topilmadi: ID",
        "Majburiy ustun topilmadi: Department",
    ]


def test_scenario_cross_year(xlsx_bytes, export_rows):
    data = xlsx_bytes(export_rows(
        ":Time Period: 2025-12-01 - 2026-01-31:",
        HEADER + ["12-31", "01-05"],
        [["Ali", "E001", "All Departments> it", "h", "le"]],
    ))
    result = parse_attendance_workbook(data, today=date(2031, 5, 5))

    assert result.errors == []
    assert result.date_columns == ["2025-12-31", "2026-01-05"]
    assert result.warnings == ["Time Period topildi: 2025-2026 yillar (12-oydan 1-oygacha)"]
    emp = result.employees[0]
    assert emp.department == "IT"
    assert emp.daily_attendance == {"2025-12-31": "H", "2026-01-05": "LE"}


def test_blank_id_row_skipped_with_sheet_row_number(xlsx_bytes, export_rows):
    data = xlsx_bytes(export_rows(
        ":Time Period: 2025-12-01 - 2025-12-31:",
        HEADER + ["12-01"],
        [
            ["Ali", "", "IT", "W"],
            ["Vali", "E002", "HR", "W"],
            ["", "E003", "HR", "W"],
        ],
    ))
    result = parse_attendance_workbook(data)

    assert [e.id for e in result.employees] == ["E002"]
    # header on sheet row 9, data starts on row 10
    assert result.warnings[1:] == [
        "10-qator: ID bo'sh, o'tkazib yuborildi",
        "12-qator: Ism bo'sh, o'tkazib yuborildi",
    ]
    assert sum("10-qator" in w for w in result.warnings) == 1


def test_unknown_and_missing_status_read_as_absent(csv_bytes):
    data = csv_bytes([
        "Name,ID,Department,12-01,12-02,12-03",
        "Ali,E001,IT,x,,ns",
        "Vali,E002,IT,W",
    ])
    result = parse_attendance_workbook(data, manual_year=2025)
    assert result.employees[0].daily_attendance == {
        "2025-12-01": "A", "2025-12-02": "A", "2025-12-03": "NS",
    }
    assert result.employees[1].daily_attendance["2025-12-03"] == "A"


def test_aliased_headers_and_ignored_columns(csv_bytes):
    data = csv_bytes([
        "Hisobot",
        "Ism,Tabel,Bo'lim,Lavozim,01.12,02.12",
        "Ali,1001,Moliya,Kassir,W,E",
    ])
    result = parse_attendance_workbook(data, manual_year=2025)
    assert result.errors == []
    assert result.date_columns == ["2025-12-01", "2025-12-02"]
    emp = result.employees[0]
    assert (emp.id, emp.name, emp.department) == ("1001", "Ali", "MOLIYA")


def test_empty_department_is_kept(csv_bytes):
    data = csv_bytes(["Name,ID,Department,12-01", "Ali,E001,All Departments>,W"])
    result = parse_attendance_workbook(data, manual_year=2025)
    assert result.employees[0].department == ""


def test_no_date_columns_warns_but_imports_employees(csv_bytes):
    data = csv_bytes(["Name,ID,Department,Total", "Ali,E001,IT,22"])
    result = parse_attendance_workbook(data, manual_year=2025)
    assert result.errors == []
    assert result.date_columns == []
    assert result.warnings == [
        "Qo'lda kiritilgan yil ishlatiladi: 2025",
        "Sana ustunlari topilmadi. Faqat xodim ma'lumotlari import qilinadi.",
    ]
    assert result.employees[0].daily_attendance == {}


def test_default_year_comes_from_injected_clock(csv_bytes, fixed_today):
    data = csv_bytes(["Name,ID,Department,03-08", "Ali,E001,IT,H"])
    result = AttendanceParser(clock=lambda: fixed_today).parse(data)
    assert result.warnings[0] == "Time Period topilmadi, joriy yil ishlatiladi: 2031"
    assert result.date_columns == ["2031-03-08"]


def test_manual_year_overrides_time_period(xlsx_bytes, export_rows):
    data = xlsx_bytes(export_rows(
        ":Time Period: 2025-12-01 - 2026-01-31:",
        HEADER + ["01-05"],
        [["Ali", "E001", "IT", "W"]],
    ))
    result = parse_attendance_workbook(data, manual_year=2024)
    assert result.date_columns == ["2024-01-05"]
    assert result.warnings == ["Qo'lda kiritilgan yil ishlatiladi: 2024"]


def test_datetime_headers_pass_through(xlsx_bytes):
    data = xlsx_bytes([HEADER + [datetime(2025, 12, 1)], ["Ali", "E001", "IT", "W"]])
    result = parse_attendance_workbook(data, manual_year=2020)
    assert result.date_columns == ["2025-12-01"]


def test_duplicate_date_header_last_cell_wins(csv_bytes):
    data = csv_bytes(["Name,ID,Department,12-01,12-01", "Ali,E001,IT,W,L"])
    result = parse_attendance_workbook(data, manual_year=2025)
    assert result.date_columns == ["2025-12-01"]
    assert result.employees[0].daily_attendance == {"2025-12-01": "L"}


def test_header_only_sheet_is_an_error(xlsx_bytes):
    result = parse_attendance_workbook(xlsx_bytes([HEADER + ["12-01"]]), manual_year=2025)
    assert result.errors == ["Excel faylda ma'lumot topilmadi"]
    assert result.employees == []


def test_corrupt_buffer_becomes_single_error():
    result = parse_attendance_workbook(b"PK\x03\x04 definitely not a zip", manual_year=2025)
    assert len(result.errors) == 1
    assert result.errors[0].startswith("Faylni o'qishda xatolik: ")
    assert result.employees == []
    assert result.date_columns == []


def test_undecodable_csv_becomes_error():
    result = parse_attendance_workbook(b"\xff\xfe\xfa garbage", manual_year=2025, filename="x.csv")
    assert result.errors[0].startswith("Faylni o'qishda xatolik: ")


def test_workbook_without_sheets(monkeypatch, xlsx_bytes):
    monkeypatch.setattr(WorkbookReader, "list_sheet_names", staticmethod(lambda data, kind: []))
    result = parse_attendance_workbook(xlsx_bytes([HEADER]))
    assert result.errors == ["Excel faylda hech qanday varaq topilmadi"]


def test_parse_is_deterministic(xlsx_bytes, export_rows, fixed_today):
    data = xlsx_bytes(export_rows(
        "Time Period: 2025-12-01 - 2026-01-31",
        HEADER + ["12-30", "12-31", "01-01"],
        [["Ali", "E001", "IT", "W", "L", "E"], ["", "E002", "IT", "W", "W", "W"]],
    ))
    first = parse_attendance_workbook(data, today=fixed_today)
    second = parse_attendance_workbook(data, today=fixed_today)
    assert first.model_dump_json() == second.model_dump_json()


def test_parse_attendance_file(tmp_path, xlsx_bytes):
    path = tmp_path / "december.xlsx"
    path.write_bytes(xlsx_bytes([HEADER + ["12-01"], ["Ali", "E001", "IT", "w"]]))
    result = parse_attendance_file(path, manual_year=2025)
    assert result.employees[0].daily_attendance == {"2025-12-01": "W"}


def test_parse_missing_file(tmp_path):
    result = parse_attendance_file(tmp_path / "nope.xlsx")
    assert result.errors[0].startswith("Faylni o'qishda xatolik: ")
