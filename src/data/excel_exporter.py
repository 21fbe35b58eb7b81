"""
Excel Export functionality for LEV system analysis results
"""

import logging
from datetime import datetime
from typing import Optional

import openpyxl
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from calculations.network_calculator import velocity_status
from calculations.network_models import SystemCalculation, MaterialProperties

logger = logging.getLogger(__name__)


class SystemExcelExporter:
    """Excel export of a calculated LEV system"""

    def __init__(self):
        """Initialize the Excel exporter"""
        self.header_font = Font(bold=True, size=12, color="FFFFFF")
        self.header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        self.subheader_font = Font(bold=True, size=11)
        self.border = Border(
            left=Side(style='thin'), right=Side(style='thin'),
            top=Side(style='thin'), bottom=Side(style='thin')
        )

    def export_system_analysis(self, calculation: SystemCalculation, export_path: str,
                               material: Optional[MaterialProperties] = None) -> bool:
        """
        Export a system calculation to Excel

        Args:
            calculation: Result of LEVSystemCalculator.calculate()
            export_path: Path for Excel file output
            material: Material the system was sized for

        Returns:
            True if export successful, False if the workbook could not be written
        """
        wb = openpyxl.Workbook()
        wb.remove(wb.active)

        self.create_summary_sheet(wb, calculation, material)
        self.create_pressure_losses_sheet(wb, calculation, material)
        self.create_warnings_sheet(wb, calculation)

        try:
            wb.save(export_path)
        except OSError as e:
            logger.error("Error exporting to Excel: %s", e)
            return False
        return True

    def create_summary_sheet(self, wb, calculation: SystemCalculation,
                             material: Optional[MaterialProperties]):
        """Create system summary sheet"""
        ws = wb.create_sheet("Summary")

        ws['A1'] = "LEV System Analysis"
        ws['A1'].font = Font(bold=True, size=16)
        ws['A2'] = f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}"

        rows = [
            ("Material", material.display_name if material else "Not selected"),
            ("Total Flow (m³/h)", calculation.total_flow),
            ("System Pressure (Pa)", calculation.total_pressure),
            ("Main Duct (mm)", calculation.main_duct_size),
            ("Required Fan Flow (m³/h)", calculation.fan_selection.required_flow),
            ("Required Fan Pressure (Pa)", calculation.fan_selection.required_pressure),
            ("Fan Efficiency (%)", calculation.fan_selection.efficiency),
            ("Warnings", len(calculation.warnings)),
        ]
        ws['A4'] = "Parameter"
        ws['B4'] = "Value"
        self.apply_header_style(ws, 'A4:B4')
        for row, (label, value) in enumerate(rows, 5):
            ws.cell(row=row, column=1, value=label).font = self.subheader_font
            ws.cell(row=row, column=2, value=value)

        self.auto_size_columns(ws)

    def create_pressure_losses_sheet(self, wb, calculation: SystemCalculation,
                                     material: Optional[MaterialProperties]):
        """Create itemized pressure loss sheet"""
        ws = wb.create_sheet("Pressure Losses")

        headers = ["Element", "Type", "Loss (Pa)", "Velocity (m/s)", "Diameter (mm)", "Status"]
        for col, header in enumerate(headers, 1):
            ws.cell(row=1, column=col, value=header)
        self.apply_header_style(ws, f"A1:{get_column_letter(len(headers))}1")

        for row, record in enumerate(calculation.pressure_losses, 2):
            data = [
                record.element_id,
                record.loss_type,
                record.loss,
                round(record.velocity, 1),
                record.diameter,
                velocity_status(record.velocity, material),
            ]
            for col, value in enumerate(data, 1):
                ws.cell(row=row, column=col, value=value).border = self.border

        total_row = len(calculation.pressure_losses) + 2
        ws.cell(row=total_row, column=1, value="Total").font = self.subheader_font
        ws.cell(row=total_row, column=3, value=calculation.total_pressure).font = self.subheader_font

        self.auto_size_columns(ws)

    def create_warnings_sheet(self, wb, calculation: SystemCalculation):
        """Create design warnings sheet"""
        ws = wb.create_sheet("Warnings")
        ws['A1'] = "Warning"
        self.apply_header_style(ws, 'A1:A1')

        if not calculation.warnings:
            ws['A2'] = "No warnings"
        for row, warning in enumerate(calculation.warnings, 2):
            ws.cell(row=row, column=1, value=warning)

        self.auto_size_columns(ws)

    def apply_header_style(self, ws, range_str):
        """Apply header styling to a range"""
        for row in ws[range_str]:
            for cell in row:
                cell.font = self.header_font
                cell.fill = self.header_fill
                cell.alignment = Alignment(horizontal='center', vertical='center')
                cell.border = self.border

    def auto_size_columns(self, ws):
        """Auto-size all columns in worksheet"""
        for column in ws.columns:
            max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
            column_letter = get_column_letter(column[0].column)
            ws.column_dimensions[column_letter].width = min(max_length + 2, 80)
