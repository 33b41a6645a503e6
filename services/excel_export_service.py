"""
Excel export service for the Campus Portal backend
Handles Excel export of attendance sheets
"""

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter
from io import BytesIO

ATTENDANCE_COLUMNS = [
    'Date', 'Session', 'Subject', 'Department', 'Semester',
    'Student ID', 'Student Name', 'Status'
]

class ExcelExportService:
    """Service for exporting reports to Excel"""

    @staticmethod
    def style_header_row(ws, row_num, columns):
        """Apply styling to header row"""
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="000000", end_color="000000", fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")

        for col_num, header in enumerate(columns, 1):
            cell = ws.cell(row=row_num, column=col_num, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment

    @staticmethod
    def auto_adjust_columns(ws):
        """Auto-adjust column widths"""
        for column in ws.columns:
            max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
            column_letter = get_column_letter(column[0].column)
            ws.column_dimensions[column_letter].width = min(max_length + 2, 50)

    @staticmethod
    def export_attendance(sheets):
        """Write one row per student entry and return the workbook bytes"""
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = 'Attendance'

        ExcelExportService.style_header_row(ws, 1, ATTENDANCE_COLUMNS)
        ws.freeze_panes = 'A2'

        row = 2
        for sheet in sheets:
            for entry in sheet.records:
                student = entry.student
                values = [
                    sheet.date.isoformat(),
                    sheet.session,
                    sheet.subject,
                    sheet.department,
                    sheet.semester,
                    student.student_id if student else None,
                    student.name if student else entry.student_id,
                    entry.status.capitalize()
                ]
                for col_num, value in enumerate(values, 1):
                    ws.cell(row=row, column=col_num, value=value)
                row += 1

        ExcelExportService.auto_adjust_columns(ws)

        output = BytesIO()
        wb.save(output)
        output.seek(0)
        return output
