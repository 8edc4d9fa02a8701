"""
Coordinate conversion and export API endpoints.
"""

import logging

from fastapi import APIRouter, Query, Response, status

from coordsuite.core.converter import CoordinateConverter
from coordsuite.core.export.coordinates import ExportColumns, csv_string, kml_string
from coordsuite.core.visualization.map_view import compute_map_view
from coordsuite.models.api import ConvertRequest, ConvertResponse
from coordsuite.models.coordinates import ConversionResult, ZoneOverride
from coordsuite.models.errors import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["coordinates"])

_ERROR_RESPONSES = {
    422: {"model": ErrorResponse, "description": "Format could not be detected"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}


def _run_conversion(request: ConvertRequest) -> ConversionResult:
    converter = CoordinateConverter()
    override = None
    if request.zone is not None or request.hemisphere is not None:
        override = ZoneOverride(zone=request.zone, hemisphere=request.hemisphere)
    return converter.convert(request.text, request.direction, override)


@router.post(
    "/convert",
    response_model=ConvertResponse,
    status_code=status.HTTP_200_OK,
    responses=_ERROR_RESPONSES,
    summary="Convert coordinate text",
    description=(
        "Detect whether the text holds latitude/longitude or UTM pairs and "
        "convert every line. Lines that cannot be converted are reported in "
        "place with their line number."
    ),
)
def convert_coordinates(request: ConvertRequest) -> ConvertResponse:
    """
    Convert a block of coordinate text.

    Args:
        request: Text, direction and optional zone override

    Returns:
        ConvertResponse with per-line outcomes and a map view
    """
    logger.info(f"Converting {len(request.text.splitlines())} line(s), direction={request.direction.value}")

    result = _run_conversion(request)
    map_view = compute_map_view(result.geographic_points)

    return ConvertResponse(
        detection=result.detection.to_dict(),
        direction=result.direction,
        outcomes=[outcome.to_dict() for outcome in result.outcomes],
        converted_count=len(result.records),
        failed_count=len(result.failures),
        map_view=map_view.to_dict(),
    )


@router.post(
    "/export/csv",
    responses={**_ERROR_RESPONSES, 400: {"model": ErrorResponse, "description": "Nothing to export"}},
    response_class=Response,
    summary="Export converted coordinates as CSV",
)
def export_coordinates_csv(
    request: ConvertRequest,
    columns: ExportColumns = Query(ExportColumns.LATLON, description="Columns to write"),
) -> Response:
    """Convert the text and return the successful rows as a CSV attachment."""
    result = _run_conversion(request)
    content = csv_string(result.records, columns)

    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="coordinates.csv"'},
    )


@router.post(
    "/export/kml",
    responses={**_ERROR_RESPONSES, 400: {"model": ErrorResponse, "description": "Nothing to export"}},
    response_class=Response,
    summary="Export converted coordinates as KML",
)
def export_coordinates_kml(request: ConvertRequest) -> Response:
    """Convert the text and return the successful points as a KML document."""
    result = _run_conversion(request)
    content = kml_string(result.records)

    return Response(
        content=content,
        media_type="application/vnd.google-earth.kml+xml",
        headers={"Content-Disposition": 'attachment; filename="coordinates.kml"'},
    )
