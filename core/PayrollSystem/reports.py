"""
Excel salary report for one month
"""
from io import BytesIO

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from .utils import ZERO, month_label

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADERS = [
    "Employee ID",
    "Employee Name",
    "Designation",
    "Base Salary",
    "Allowances",
    "Overtime",
    "Bonus",
    "Deductions",
    "Gross Salary",
    "Advance Deduction",
    "Net Salary",
    "Status",
    "Paid Date",
    "Payment Method",
]
MONEY_COLUMNS = {4, 5, 6, 7, 8, 9, 10, 11}


def report_filename(month, year):
    return f"Salary_Report_{month_label(month)}_{year}.xlsx"


def build_salary_report(salaries, month, year):
    """
    Render the month's salaries as an .xlsx workbook with a totals row.

    Returns:
        bytes: workbook contents
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = f"Salaries {month_label(month)[:3]} {year}"

    header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF", size=11)
    border = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    for col, header in enumerate(HEADERS, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = border

    totals = {col: ZERO for col in MONEY_COLUMNS}
    row_idx = 1
    for row_idx, salary in enumerate(salaries, start=2):
        employee = salary.employee
        values = [
            employee.employee_id,
            employee.name,
            employee.designation,
            salary.base_salary,
            salary.allowances,
            salary.overtime_amount,
            salary.bonus,
            salary.deductions,
            salary.gross_salary,
            salary.advance_deduction,
            salary.net_salary,
            salary.status,
            salary.paid_date.date().isoformat() if salary.paid_date else "",
            salary.payment_method or "",
        ]
        for col, value in enumerate(values, 1):
            if col in MONEY_COLUMNS:
                totals[col] += value
                value = float(value)
            cell = ws.cell(row=row_idx, column=col, value=value)
            cell.border = border
            if col in MONEY_COLUMNS:
                cell.number_format = '#,##0.00'

    total_row = row_idx + 1
    label = ws.cell(row=total_row, column=1, value="Total")
    label.font = Font(bold=True)
    for col in range(1, len(HEADERS) + 1):
        cell = ws.cell(row=total_row, column=col)
        cell.border = border
        if col in MONEY_COLUMNS:
            cell.value = float(totals[col])
            cell.number_format = '#,##0.00'
            cell.font = Font(bold=True)

    for col in ws.columns:
        max_len = max((len(str(cell.value)) for cell in col if cell.value is not None), default=0)
        ws.column_dimensions[col[0].column_letter].width = min(max_len + 2, 30)

    output = BytesIO()
    wb.save(output)
    return output.getvalue()
