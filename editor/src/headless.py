"""Headless circle renderer - CLI entry point.

Renders one image into a circular PNG without opening a window, using the
same session, transform and compositor as the interactive cropper.

Usage:
    python -m headless <image> [-o OUTPUT] [--scale S] [--offset-x X] [--offset-y Y]

Examples:
    python -m headless photo.jpg
    python -m headless photo.jpg -o circle.png --scale 1.4 --offset-x -20
    python -m headless photo.jpg --diameter-mm 40 --dpi 300 --data-uri
"""

import sys
import os
import argparse
import logging

# Add editor/src to path so imports work
_src_dir = os.path.dirname(os.path.abspath(__file__))
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from constants import (
    DEFAULT_TARGET_DIAMETER_MM, DEFAULT_EXPORT_DPI, DEFAULT_PREVIEW_DIAMETER_PX,
    OFFSET_MAPPING_PHYSICAL, OFFSET_MAPPING_LEGACY, DEFAULT_SCALE
)

logger = logging.getLogger(__name__)


def _ensure_qapp():
    """QImage/QPainter need a Qt application object; create an offscreen one if missing."""
    from PyQt5.QtGui import QGuiApplication

    app = QGuiApplication.instance()
    if app is None:
        os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')
        app = QGuiApplication([sys.argv[0]])
    return app


def render_file(input_path, scale=DEFAULT_SCALE, offset_x=0.0, offset_y=0.0, geometry=None):
    """Load an image file and return the Artifact for the given transform.

    Raises:
        UnsupportedMediaError, DecodeError: On a bad input file
    """
    from models.geometry import GeometryConfig
    from models.raster import ImagePayload
    from services.crop_session import CropSession

    _ensure_qapp()
    session = CropSession(geometry or GeometryConfig())
    session.load_file_sync(ImagePayload.from_path(input_path))
    controller = session.controller
    controller.set_scale(scale)
    if offset_x or offset_y:
        controller.nudge(offset_x, offset_y)
    return session.artifact


def build_parser():
    parser = argparse.ArgumentParser(
        description="Render an image into a printable circular PNG."
    )
    parser.add_argument("input", help="Path to the source image")
    parser.add_argument("-o", "--output", default=None,
                        help="Output PNG path (default: <input>_circle.png)")
    parser.add_argument("--scale", type=float, default=DEFAULT_SCALE,
                        help="Image scale, clamped to 0.1-3.0 (default: 1.0)")
    parser.add_argument("--offset-x", type=float, default=0.0,
                        help="Horizontal offset in preview pixels")
    parser.add_argument("--offset-y", type=float, default=0.0,
                        help="Vertical offset in preview pixels")
    parser.add_argument("--diameter-mm", type=float, default=DEFAULT_TARGET_DIAMETER_MM,
                        help="Printed circle diameter in millimetres (default: 40)")
    parser.add_argument("--dpi", type=float, default=DEFAULT_EXPORT_DPI,
                        help="Export DPI (default: 96)")
    parser.add_argument("--preview-px", type=int, default=DEFAULT_PREVIEW_DIAMETER_PX,
                        help="Preview viewport size the offsets refer to (default: 200)")
    parser.add_argument("--legacy-offsets", action="store_true",
                        help="Apply offsets to the export canvas unscaled")
    parser.add_argument("--data-uri", action="store_true",
                        help="Print the artifact as a data URI instead of writing a file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    from models.errors import CropperError
    from models.geometry import GeometryConfig

    if not os.path.isfile(args.input):
        logger.error("Input file not found: %s", args.input)
        return 1

    try:
        geometry = GeometryConfig(
            preview_diameter_px=args.preview_px,
            target_diameter_mm=args.diameter_mm,
            export_dpi=args.dpi,
            offset_mapping=OFFSET_MAPPING_LEGACY if args.legacy_offsets else OFFSET_MAPPING_PHYSICAL,
        )
    except ValueError as e:
        logger.error("Invalid geometry: %s", e)
        return 2

    try:
        artifact = render_file(args.input, args.scale, args.offset_x, args.offset_y, geometry)
    except CropperError as e:
        logger.error("%s", e)
        return 1

    if args.data_uri:
        print(artifact.data_uri)
        return 0

    output = args.output or os.path.splitext(args.input)[0] + "_circle.png"
    artifact.save(output)
    logger.info("Wrote %s (%dx%d px, %gmm at %g DPI)", output,
                artifact.diameter_px, artifact.diameter_px, geometry.target_diameter_mm, geometry.export_dpi)
    return 0


if __name__ == "__main__":
    sys.exit(main())
