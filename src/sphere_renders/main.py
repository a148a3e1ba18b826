import argparse
import logging
import sys

from sphere_renders import constants
from sphere_renders.core import Renderer, Scene
from sphere_renders.imaging import write_image
from sphere_renders.logging_config import setup_logging

logger = logging.getLogger(__name__)


def render_to_file(scene, output_path):
    """Render `scene` and write it as a grayscale PNG."""
    pixels = Renderer(scene).render_pixels(scene.width, scene.height)
    write_image(output_path, pixels, scene.width, scene.height)
    return pixels


def main(argv=None):
    parser = argparse.ArgumentParser(description="Sphere Renderer CLI")
    parser.add_argument("--ui", action="store_true", help="Launch the interactive Gradio UI")
    parser.add_argument("--output", "-o", default=constants.DEFAULT_OUTPUT_PATH,
                        help="Path of the PNG to write")
    parser.add_argument("--width", type=int, default=constants.DEFAULT_WIDTH, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=constants.DEFAULT_HEIGHT, help="Image height in pixels")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.ui:
        from sphere_renders.ui import launch_ui

        logger.info("Launching UI...")
        launch_ui()
        return

    try:
        scene = Scene.default(width=args.width, height=args.height)
    except ValueError as exc:
        parser.error(str(exc))

    logger.info("Rendering %dx%d scene with %d spheres...", scene.width, scene.height, len(scene.spheres))
    try:
        render_to_file(scene, args.output)
    except OSError as exc:
        logger.error("Could not write %s: %s", args.output, exc)
        sys.exit(1)
    logger.info("Render complete: %s", args.output)


def run_ui():
    """Entry point for sphere-ui command."""
    main(["--ui"])


if __name__ == "__main__":
    main()
