"""
Student attendance report export (CSV / Excel).
"""
import csv
import io

import openpyxl
from openpyxl.styles import Font

EXPORT_COLUMNS = [
    ('studentId', 'Student ID'),
    ('studentName', 'Student'),
    ('totalSessions', 'Sessions'),
    ('present', 'Present'),
    ('late', 'Late'),
    ('absent', 'Absent'),
    ('attendanceRate', 'Attendance %'),
]

CSV_CONTENT_TYPE = 'text/csv; charset=utf-8'
XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def export_csv(report_rows):
    """UTF-8 with BOM so Excel opens non-ASCII names correctly."""
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow([title for _, title in EXPORT_COLUMNS])
    for row in report_rows:
        writer.writerow([row[key] for key, _ in EXPORT_COLUMNS])
    return "\ufeff" + buf.getvalue()


def export_xlsx(report_rows, title='Attendance'):
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title[:31]
    ws.append([header for _, header in EXPORT_COLUMNS])
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in report_rows:
        ws.append([row[key] for key, _ in EXPORT_COLUMNS])
    ws.column_dimensions['B'].width = 30
    out = io.BytesIO()
    wb.save(out)
    wb.close()
    return out.getvalue()
