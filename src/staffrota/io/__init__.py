# staffrota/io - Input/output handling
from .day_loader import day_input_to_json, load_day_input
from .excel_export import export_to_csv, export_to_excel

__all__ = ["load_day_input", "day_input_to_json", "export_to_excel", "export_to_csv"]
