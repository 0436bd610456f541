#!/usr/bin/env python3
"""
Revenue Screenshot Analyzer - Main Entry Point.

Command-line access to the analysis pipeline: analyze one screenshot
(or a piece of already extracted text) and print the revenue summary.

Usage:
    Command Line:
        python main.py --input dashboard.png
        python main.py --input dashboard.png --output outputs/result.json
        python main.py --text "Total Revenue: $12,450 this month"

    Python:
        from main import run_analysis
        result = run_analysis("dashboard.png")

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager, get_config
from revenue_ocr.utils.logger import setup_logger_from_config, get_logger
from revenue_ocr.utils.helpers import ensure_directory, get_file_extension, validate_file_exists
from revenue_ocr.utils.exceptions import ConfigurationError
from revenue_ocr.analysis.analysis_result import AnalysisResult
from revenue_ocr.analysis.formatting import format_currency

SUPPORTED_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.webp', '.bmp', '.tiff', '.tif', '.gif'}


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list, defaults to sys.argv[1:].

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Revenue Screenshot Analyzer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Analyze a screenshot:
        python main.py --input dashboard.png

    Save the JSON result:
        python main.py --input dashboard.png --output outputs/result.json

    Analyze text without OCR:
        python main.py --text "Total Revenue: $12,450 this month"
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input", "-i",
        type=str,
        help="Screenshot image to analyze"
    )
    source.add_argument(
        "--text", "-t",
        type=str,
        help="Analyze this text directly instead of running OCR"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write the JSON result to this file"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only print the JSON result; warnings go to stderr"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Load configuration and set up logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)
    # Quiet mode keeps stdout for the JSON result only
    logger = setup_logger_from_config(stream=sys.stderr if args.quiet else None)

    if args.debug:
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.setLevel(logging.DEBUG)
    elif args.quiet:
        logger.setLevel(logging.WARNING)

    logger.debug(f"Version: {config.get('project.version', '1.0.0')}")
    return config


def validate_input(input_path: str) -> Path:
    """
    Check that the screenshot exists and looks like an image.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the extension is not a supported image type.
    """
    path = Path(input_path)

    if not validate_file_exists(path):
        raise FileNotFoundError(f"Input file not found: {path}")

    if get_file_extension(path) not in SUPPORTED_EXTENSIONS:
        raise ValueError(f"Unsupported file type: {path.suffix}")

    return path


def run_analysis(
    input_path: Optional[str] = None,
    text: Optional[str] = None,
    config_path: Optional[str] = None
) -> AnalysisResult:
    """
    Run the revenue analysis pipeline.

    Args:
        input_path: Screenshot to analyze with OCR.
        text: Already extracted text; OCR is skipped.
        config_path: Optional custom configuration file path.

    Returns:
        AnalysisResult.

    Example:
        >>> result = run_analysis("dashboard.png")
        >>> print(result.total_revenue)
    """
    ConfigurationManager(config_path)

    from revenue_ocr.analyzer import RevenueAnalyzer

    analyzer = RevenueAnalyzer()

    if text is not None:
        return analyzer.analyze_text(text)

    logger = get_logger(__name__)

    def report_progress(percent: int) -> None:
        logger.debug(f"OCR progress: {percent}%")

    return analyzer.analyze(Path(input_path), progress=report_progress)


def print_summary(result: AnalysisResult) -> None:
    """Print a human-readable summary of the result."""
    sign = '+' if result.growth_percent >= 0 else ''

    print("=" * 60)
    print(f"Total revenue:   {format_currency(result.total_revenue, result.currency)}")
    print(f"This period:     {format_currency(result.this_period, result.currency)}")
    print(f"Previous period: {format_currency(result.previous_period, result.currency)}")
    print(f"Growth:          {sign}{result.growth_percent}%")
    print(f"Confidence:      {round(result.confidence * 100)}%")
    print(f"Method:          {result.method.value}")
    print("=" * 60)

    if result.is_fallback:
        print("OCR failed: showing placeholder figures, not data from the image.")
    elif result.is_low_confidence(get_config("analysis.low_confidence_threshold", 0.5)):
        print("Low confidence: figures may not match the screenshot.")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        args = parse_arguments(argv)
        initialize_system(args)

        input_path = None
        if args.input:
            input_path = str(validate_input(args.input))

        result = run_analysis(
            input_path=input_path,
            text=args.text,
            config_path=args.config
        )

        if not args.quiet:
            print_summary(result)
        print(result.to_json())

        if args.output:
            output_path = Path(args.output)
            ensure_directory(output_path.parent)
            output_path.write_text(result.to_json(), encoding='utf-8')
            get_logger(__name__).info(f"Result written to: {output_path}")

        return 0

    except (FileNotFoundError, ValueError, ConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
