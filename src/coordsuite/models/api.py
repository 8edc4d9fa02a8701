"""
Pydantic models for the conversion API.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from coordsuite.models.coordinates import Direction


class ConvertRequest(BaseModel):
    """
    Request body for converting a block of coordinate text.

    Zone and hemisphere are passed through unvalidated so that an invalid
    value is reported on each affected line, like any other line failure.
    """

    text: str = Field(..., description="Newline-delimited coordinate pairs")
    direction: Direction = Field(Direction.AUTO, description="Conversion direction")
    zone: Optional[int] = Field(None, description="Explicit UTM zone (1-60)")
    hemisphere: Optional[str] = Field(None, description="Explicit hemisphere, 'N' or 'S'")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "41.651285, -0.869147\n41.652000, -0.870000",
                "direction": "auto",
            }
        }
    )


class DetectionModel(BaseModel):
    format: str
    separator: str


class MapViewModel(BaseModel):
    center_lat: float
    center_lon: float
    zoom: int
    bounds: Optional[Dict[str, float]] = None


class ConvertResponse(BaseModel):
    """
    Result of a conversion.

    Attributes:
        detection: Format and separator used for the block
        direction: Requested direction
        outcomes: One entry per non-blank line; successes carry both
            representations, failures carry the line text and error kind
        converted_count: Number of successful lines
        failed_count: Number of failed lines
        map_view: Center and zoom framing the converted points
    """

    detection: DetectionModel
    direction: Direction
    outcomes: List[Dict[str, Any]]
    converted_count: int
    failed_count: int
    map_view: MapViewModel
