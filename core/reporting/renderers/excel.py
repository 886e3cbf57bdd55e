from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side

from core.reporting.contexts import ScheduleReportContext


def _iso(value):
    return value.isoformat() if value else ""


class ScheduleExcelRenderer:
    def render(self, ctx: ScheduleReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        center = Alignment(horizontal="center")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")
        critical_fill = PatternFill("solid", fgColor="FFCCCC")

        # ---------------- Overview ----------------
        ws = wb.active
        ws.title = "Overview"

        ws["A1"] = f"Project schedule - {ctx.summary.project_name}"
        ws["A1"].font = title_font

        row = 3

        def kv(key, value):
            nonlocal row
            ws[f"A{row}"] = key
            ws[f"B{row}"] = value
            ws[f"A{row}"].font = header_font
            ws[f"A{row}"].border = thin_border
            ws[f"B{row}"].border = thin_border
            row += 1

        kv("Project name", ctx.summary.project_name)
        kv("Start date", _iso(ctx.summary.start_date))
        kv("End date", _iso(ctx.summary.end_date))
        kv("Duration (calendar days)", ctx.summary.duration_days)

        row += 1
        kv("Tasks - total", ctx.summary.tasks_total)
        kv("Critical tasks", ctx.summary.critical_tasks)
        kv("Critical path (%)", ctx.summary.critical_path_percentage)
        kv("Report date", _iso(ctx.as_of))

        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 25

        # ---------------- Schedule ----------------
        ws_tasks = wb.create_sheet("Schedule")
        headers = [
            "Task ID", "Name", "Start", "Duration (days)", "Predecessors",
            "Early start", "Early finish", "Late start", "Late finish",
            "Free float", "Total float", "Critical",
        ]
        for col_index, h in enumerate(headers, start=1):
            cell = ws_tasks.cell(row=1, column=col_index, value=h)
            cell.font = header_font
            cell.alignment = center
            cell.fill = header_fill
            cell.border = thin_border

        for row_index, t in enumerate(ctx.tasks, start=2):
            values = [
                t.id,
                t.name,
                _iso(t.start_date),
                t.duration_days,
                t.predecessor_string(),
                _iso(t.early_start),
                _iso(t.early_finish),
                _iso(t.late_start),
                _iso(t.late_finish),
                t.free_float_days,
                t.total_float_days,
                "Yes" if t.is_critical else "No",
            ]
            for col_index, value in enumerate(values, start=1):
                cell = ws_tasks.cell(row=row_index, column=col_index, value=value)
                cell.border = thin_border
                if t.is_critical:
                    cell.fill = critical_fill

        ws_tasks.column_dimensions["A"].width = 16
        ws_tasks.column_dimensions["B"].width = 30
        ws_tasks.column_dimensions["E"].width = 24
        for col_letter in ("C", "D", "F", "G", "H", "I", "J", "K", "L"):
            ws_tasks.column_dimensions[col_letter].width = 14
        ws_tasks.freeze_panes = "C2"

        wb.save(output_path)
        return output_path
