"""
Export of converted coordinates.

Provides export functionality to:
- CSV with UTM or latitude/longitude columns
- KML/KMZ (Google Earth) with one placemark per point
- Tab-separated text for pasting into spreadsheets

Rows always follow the input order of the records.
"""

import csv
import io
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, TextIO, Union

import simplekml

from coordsuite.core.config import Settings, settings as default_settings
from coordsuite.core.errors import ExportError
from coordsuite.models.coordinates import CoordinateRecord

logger = logging.getLogger(__name__)


class ExportColumns(str, Enum):
    """Which representation an export writes."""

    UTM = "utm"
    LATLON = "latlon"


UTM_HEADER = ("Easting", "Northing", "Zone", "Hemisphere")
LATLON_HEADER = ("Latitude", "Longitude")


def _check_records(records: Sequence[CoordinateRecord], export_format: str) -> None:
    if not records:
        raise ExportError("No converted coordinates to export", export_format=export_format)


def format_rows(
    records: Sequence[CoordinateRecord],
    columns: Union[ExportColumns, str] = ExportColumns.LATLON,
    settings: Optional[Settings] = None,
) -> List[List[str]]:
    """
    Format records as text rows without header.

    Args:
        records: Converted records, in input order
        columns: UTM or LATLON columns
        settings: Settings providing output precision

    Returns:
        One list of cell strings per record
    """
    settings = settings or default_settings
    columns = ExportColumns(columns)

    rows = []
    for record in records:
        if columns is ExportColumns.UTM:
            utm = record.utm
            rows.append([
                f"{utm.easting:.{settings.metric_precision}f}",
                f"{utm.northing:.{settings.metric_precision}f}",
                str(utm.zone),
                utm.hemisphere.value,
            ])
        else:
            geo = record.geographic
            rows.append([
                f"{geo.latitude:.{settings.coordinate_precision}f}",
                f"{geo.longitude:.{settings.coordinate_precision}f}",
            ])
    return rows


def export_csv(
    records: Sequence[CoordinateRecord],
    output: Union[str, Path, TextIO],
    columns: Union[ExportColumns, str] = ExportColumns.LATLON,
    settings: Optional[Settings] = None,
) -> None:
    """
    Write records as CSV.

    Args:
        records: Converted records
        output: Output path or open text stream
        columns: UTM or LATLON columns
        settings: Settings providing delimiter and precision

    Raises:
        ExportError: If there are no records or the file cannot be written
    """
    settings = settings or default_settings
    columns = ExportColumns(columns)
    _check_records(records, "csv")

    header = UTM_HEADER if columns is ExportColumns.UTM else LATLON_HEADER
    rows = format_rows(records, columns, settings)

    def write(stream: TextIO) -> None:
        writer = csv.writer(stream, delimiter=settings.export_delimiter, lineterminator="\n")
        writer.writerow(header)
        writer.writerows(rows)

    if isinstance(output, (str, Path)):
        output_path = Path(output)
        try:
            with open(output_path, "w", encoding="utf-8", newline="") as f:
                write(f)
        except OSError as e:
            raise ExportError(f"Failed to write CSV file: {e}", export_format="csv")
        logger.info(f"Exported {len(rows)} {columns.value} row(s) to {output_path}")
    else:
        write(output)


def csv_string(
    records: Sequence[CoordinateRecord],
    columns: Union[ExportColumns, str] = ExportColumns.LATLON,
    settings: Optional[Settings] = None,
) -> str:
    """CSV document as a string."""
    buffer = io.StringIO()
    export_csv(records, buffer, columns, settings)
    return buffer.getvalue()


def to_clipboard_text(
    records: Sequence[CoordinateRecord],
    columns: Union[ExportColumns, str] = ExportColumns.LATLON,
    settings: Optional[Settings] = None,
) -> str:
    """
    Tab-separated rows without header, ready to paste into a spreadsheet.
    """
    return "\n".join("\t".join(row) for row in format_rows(records, columns, settings))


def build_kml(
    records: Sequence[CoordinateRecord],
    name: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> simplekml.Kml:
    """
    Build a KML document with one point placemark per record.

    Placemarks are named after the input line number and describe the
    point in both representations.

    Raises:
        ExportError: If there are no records
    """
    settings = settings or default_settings
    _check_records(records, "kml")

    kml = simplekml.Kml(name=name or settings.kml_document_name)
    for record in records:
        geo = record.geographic
        utm = record.utm
        point = kml.newpoint(
            name=str(record.line_number),
            coords=[(geo.longitude, geo.latitude, 0)],
        )
        point.description = (
            f"Lat/Lon: {geo.latitude:.{settings.coordinate_precision}f}, "
            f"{geo.longitude:.{settings.coordinate_precision}f}<br/>"
            f"UTM {utm.zone_label}: {utm.easting:.{settings.metric_precision}f}, "
            f"{utm.northing:.{settings.metric_precision}f}"
        )
    return kml


def kml_string(
    records: Sequence[CoordinateRecord],
    name: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> str:
    """KML document as a string."""
    return build_kml(records, name, settings).kml()


def export_kml(
    records: Sequence[CoordinateRecord],
    output_path: Union[str, Path],
    name: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> None:
    """
    Write records to a KML file, or a zipped KMZ when the suffix is .kmz.

    Raises:
        ExportError: If there are no records or the file cannot be written
    """
    output_path = Path(output_path)
    kml = build_kml(records, name, settings)

    try:
        if output_path.suffix.lower() == ".kmz":
            kml.savekmz(str(output_path))
        else:
            kml.save(str(output_path))
    except OSError as e:
        raise ExportError(f"Failed to write KML file: {e}", export_format="kml")

    logger.info(f"Exported {len(records)} placemark(s) to {output_path}")
