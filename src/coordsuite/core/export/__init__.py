"""
Export module for converted coordinates.

Provides CSV, KML/KMZ and clipboard-text output.
"""

from coordsuite.core.export.coordinates import (
    ExportColumns,
    build_kml,
    csv_string,
    export_csv,
    export_kml,
    format_rows,
    kml_string,
    to_clipboard_text,
)

__all__ = [
    "ExportColumns",
    "build_kml",
    "csv_string",
    "export_csv",
    "export_kml",
    "format_rows",
    "kml_string",
    "to_clipboard_text",
]
