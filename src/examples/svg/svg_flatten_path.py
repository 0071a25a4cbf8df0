"""Creates a SVG file showing a path with curves and arcs (gray)
and its flattened polylines (red) on top of it.
The polyline vertices are marked by small dots.
"""

from pathlib import Path

import svgwrite

from svgflat.consts import FlattenOptions
from svgflat.flatten import SvgFlattener
from svgflat.geom import GeomMath

OUTPUT_FILE = "data/output/example/svg/flatten_path.svg"

PATH_STRING_INPUT = (
    "M10 80 C40 10 65 10 95 80 S150 150 180 80"
    + " M10 120 Q52.5 60 95 120 T180 120"
    + " M20 170 a30 20 0 1 0 60 0 a30 20 0 0 1 60 0 h40 v20 z"
)

MAX_ERROR = 0.5  # flattening tolerance in user units
TRAFO = GeomMath.from_svg_matrix(1, 0, 0, 1, 10, 10)  # translate(10, 10)


def main(output_file: str = OUTPUT_FILE):
    """Flattens PATH_STRING_INPUT and draws input and result into _output_file_."""
    flattener = SvgFlattener(FlattenOptions(max_error=MAX_ERROR))
    polylines = flattener.flatten_path_string(PATH_STRING_INPUT, TRAFO, attributes={"stroke": "red"})

    Path(output_file).parent.mkdir(parents=True, exist_ok=True)
    dwg = svgwrite.Drawing(output_file, size=("220mm", "240mm"), viewBox="0 0 220 240")

    # Input path, shifted by the same translation
    dwg.add(
        dwg.path(
            d=PATH_STRING_INPUT,
            transform=f"translate({TRAFO[4]}, {TRAFO[5]})",
            stroke="lightgray",
            stroke_width=3,
            fill="none",
        )
    )

    # Flattened polylines and their vertices
    for polyline in polylines:
        points = [(float(x), float(y)) for (x, y) in polyline.points]
        dwg.add(dwg.polyline(points, stroke=polyline.attributes["stroke"], stroke_width=0.3, fill="none"))
        for point in points:
            dwg.add(dwg.circle(center=point, r=0.6, fill="black"))

    dwg.saveas(output_file, pretty=True, indent=2)

    print(f"Input : {PATH_STRING_INPUT}")
    print(f"Output: {len(polylines)} polylines, {sum(len(p) for p in polylines)} points")
    print(f'  ...using max-error "{MAX_ERROR}", saved to {output_file}')


if __name__ == "__main__":
    main()
