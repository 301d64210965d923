"""
QR Reader Application

Command-line entry point: decodes QR codes from image files, directories
of images, or a single webcam frame, prints each result, saves per-image
reports and a batch report, and logs detection statistics.

Usage:
    python main.py samples/qr1.png samples/qr2.jpg
    python main.py samples/ --output results --debug
    python main.py --webcam 0
    python main.py --list-cameras
"""

import sys
import os
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from core.camera.opencv_camera import OpenCVCamera
from core.qr import getSupportedQrBackends
from services.impl.config_service import ConfigService
from services.qr_reader_orchestrator import QrReaderOrchestrator


DEFAULT_CONFIG_PATH = "config/application_config.json"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def setupLogging(level: str = "INFO") -> None:
    """
    Setup application logging.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ],
        force=True
    )


def parseArgs(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Decode QR codes from images or a webcam frame",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py samples/qr1.png
  python main.py samples/ --output results --debug
  python main.py --webcam 0 --no-preprocessing
        """
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        help="Image files or directories (searched recursively)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH} if present)"
    )

    parser.add_argument(
        "--webcam", "-w",
        type=int,
        default=None,
        metavar="INDEX",
        help="Capture one frame from this camera index"
    )

    parser.add_argument(
        "--list-cameras",
        action="store_true",
        help="List available cameras and exit"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Directory for result reports and visualizations"
    )

    parser.add_argument(
        "--backend", "-b",
        choices=getSupportedQrBackends(),
        default=None,
        help="QR decoder backend (default: from config)"
    )

    parser.add_argument(
        "--no-preprocessing",
        action="store_true",
        help="Do not retry on an enhanced image"
    )

    parser.add_argument(
        "--no-debug-images",
        action="store_true",
        help="Do not write debug_original/debug_enhanced images on failure"
    )

    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Minimum log level (default: from config)"
    )

    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Shortcut for --log-level DEBUG"
    )

    return parser.parse_args(argv)


def loadConfig(configPath: Optional[str]) -> ConfigService:
    """
    Load the explicit config, the default config if present, or defaults.
    """
    if configPath is not None:
        return ConfigService(configPath)
    if os.path.exists(DEFAULT_CONFIG_PATH):
        return ConfigService(DEFAULT_CONFIG_PATH)
    return ConfigService(None)


def collectImagePaths(orchestrator: QrReaderOrchestrator, inputs: List[str]) -> List[str]:
    """Expand directories into image files; files are kept as given."""
    paths = []
    for entry in inputs:
        if Path(entry).is_dir():
            paths.extend(str(p) for p in orchestrator.imageLoader.listImages(entry))
        else:
            paths.append(entry)
    return paths


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parseArgs(argv)

    try:
        configService = loadConfig(args.config)
    except RuntimeError as e:
        setupLogging("INFO")
        logging.getLogger(__name__).error(str(e))
        return 1

    level = "DEBUG" if args.debug else (args.log_level or configService.getLogLevel())
    setupLogging(level)
    logger = logging.getLogger(__name__)

    if args.list_cameras:
        for camera in OpenCVCamera().listAvailableCameras():
            print(f"{camera.index}: {camera}")
        return 0

    if not args.inputs and args.webcam is None:
        logger.error("No input given. Pass image paths, a directory or --webcam INDEX.")
        return 1

    logger.info("=" * 60)
    logger.info("QR READER")
    logger.info("=" * 60)

    try:
        orchestrator = QrReaderOrchestrator(
            configService=configService,
            backend=args.backend,
            outputDirectory=args.output
        )
    except (ValueError, ImportError) as e:
        logger.error(f"Failed to initialize QR reader: {e}")
        return 1

    if args.no_preprocessing:
        orchestrator.detectionService.setPreprocessingEnabled(False)
    if args.no_debug_images:
        orchestrator.detectionService.setDebugEnabled(False)

    try:
        imagePaths = collectImagePaths(orchestrator, args.inputs)
        for idx, imagePath in enumerate(imagePaths, 1):
            logger.info(f"[{idx}/{len(imagePaths)}] Processing: {imagePath}")
            orchestrator.processFile(imagePath)

        if args.webcam is not None:
            orchestrator.processWebcam(args.webcam)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    results = orchestrator.results
    if not results:
        logger.error("No images found to process")
        return 1

    orchestrator.saveBatchReport()
    orchestrator.logStatistics()

    return 0 if any(r.success for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
