#!/usr/bin/env python3
"""
Demo script showing how to use the coordinate conversion service.

This example demonstrates:
1. Converting pasted latitude/longitude text to UTM
2. Handling lines that cannot be converted
3. Converting back with the zone of the first run
4. Exporting the results to CSV and KML
"""

from pathlib import Path

from coordsuite.core.converter import CoordinateConverter
from coordsuite.core.export.coordinates import ExportColumns, csv_string, export_kml
from coordsuite.core.visualization.map_view import compute_map_view

PASTED_TEXT = """41.651285, -0.869147
41.652000, -0.870000
not,a,number
41.660000\t-0.880000
"""


def main():
    """Run conversion demo."""
    print("=" * 70)
    print("Coordinate Conversion Demo")
    print("=" * 70)

    converter = CoordinateConverter()

    # Example 1: auto-detected latitude/longitude block
    print("\n1. Converting latitude/longitude to UTM...")
    print("-" * 70)

    result = converter.convert(PASTED_TEXT)
    print(f"Detected {result.detection.format.value} ({result.detection.separator.value} separated)")

    for outcome in result.outcomes:
        if outcome.ok:
            print(f"  line {outcome.line_number}: {outcome.geographic} -> {outcome.utm}")
        else:
            print(f"  line {outcome.line_number}: ✗ {outcome.kind.value}: {outcome.message}")

    # Example 2: reverse conversion in the zone chosen above
    print("\n2. Converting the UTM values back...")
    print("-" * 70)

    utm_text = "\n".join(f"{p.easting:.2f}\t{p.northing:.2f}" for p in result.utm_points)
    backward = converter.convert(utm_text, override=result.zone_context())

    for record in backward.records:
        print(f"  line {record.line_number}: {record.utm} -> {record.geographic}")

    # Example 3: map framing and export
    print("\n3. Map view and export...")
    print("-" * 70)

    view = compute_map_view(result.geographic_points)
    print(f"  Center: ({view.center_lat:.6f}, {view.center_lon:.6f}), zoom {view.zoom}")

    print(csv_string(result.records, ExportColumns.UTM))

    output_path = Path("coordinates.kmz")
    export_kml(result.records, output_path)
    print(f"  ✓ KMZ written to {output_path}")

    print("\n" + "=" * 70)
    print("Demo completed!")
    print("=" * 70)


if __name__ == "__main__":
    main()
