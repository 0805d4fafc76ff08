#!/usr/bin/env python3
"""
Gold Invoice Entry - Main Entry Point.

This is the main entry point for gold invoice entry. It extracts a
transaction draft from pasted text or an invoice document, prints the
draft with its computed totals, and optionally submits it through the
validation gate.

Usage:
    Command Line:
        python main.py --text "Sold 5g to XYZ Jewellers at Rs 6500 per gram"
        python main.py --input invoice.pdf --submit --stock 120 --lock-date 2026-03-31

    Python:
        from main import run_entry
        report = asyncio.run(run_entry(text="Purchase invoice, ABC Traders, 10.5g @ 6200/g"))

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

# Import project modules
from config import ConfigurationManager
from src.utils.logger import LOGGER_NAMESPACE, setup_logger_from_config, get_logger
from src.utils.exceptions import GoldEntryError
from src.utils.helpers import format_inr


def parse_arguments() -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Gold Invoice Entry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Extract from pasted text:
        python main.py --text "Purchase invoice, ABC Traders, 10.5g gold @ 6200/g, GST 3%"

    Extract from a document and submit:
        python main.py --input invoice.pdf --submit --stock 120

    With a period lock:
        python main.py --input invoice.jpg --submit --stock 120 --lock-date 2026-03-31
        """
    )

    # Input arguments
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--text", "-t",
        type=str,
        help="Raw invoice text"
    )
    source.add_argument(
        "--input", "-i",
        type=str,
        help="Invoice document (PDF or image)"
    )

    parser.add_argument(
        "--media-type", "-m",
        type=str,
        default=None,
        help="Declared media type of the document (default: inferred)"
    )

    # Submission options
    parser.add_argument(
        "--submit",
        action="store_true",
        help="Submit the extracted draft through the validation gate"
    )

    parser.add_argument(
        "--stock",
        type=float,
        default=0.0,
        help="Gold currently in stock, in grams (default: 0)"
    )

    parser.add_argument(
        "--lock-date",
        type=str,
        default=None,
        help="Period lock date (YYYY-MM-DD); no entries on or before it"
    )

    # Processing options
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    # Logging options
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log errors"
    )

    return parser.parse_args()


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)

    logger = setup_logger_from_config()

    if args.debug:
        logging.getLogger(LOGGER_NAMESPACE).setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger(LOGGER_NAMESPACE).setLevel(logging.ERROR)

    logger.info("=" * 60)
    logger.info("GOLD INVOICE ENTRY")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")

    return config


async def run_entry(
    text: Optional[str] = None,
    input_path: Optional[str] = None,
    media_type: Optional[str] = None,
    submit: bool = False,
    current_stock: float = 0.0,
    lock_date: Optional[str] = None
) -> Dict[str, Any]:
    """
    Run one extraction and optional submission.

    Args:
        text: Raw invoice text.
        input_path: Invoice document path; takes precedence over text.
        media_type: Declared document media type.
        submit: Whether to submit the draft.
        current_stock: Available gold in grams.
        lock_date: Optional period lock date.

    Returns:
        Report dictionary with the extraction, draft and, when
        submitted, the transaction or the rejection reason.

    Raises:
        InputError: The document could not be loaded.
    """
    from src.input_handler import DocumentLoader
    from src.transaction.session import TransactionEntrySession

    logger = get_logger(__name__)

    document = None
    if input_path:
        document = DocumentLoader().load(input_path, media_type)

    accepted = []
    session = TransactionEntrySession(on_add=accepted.append)

    result = await session.process_input(text=text, document=document)
    report: Dict[str, Any] = {
        'extraction': result.to_dict() if result else None,
        'draft': session.draft.to_dict(),
        'error': session.error,
    }

    if submit and result is not None and result.success:
        transaction = session.submit(current_stock, lock_date)
        report['transaction'] = transaction.to_dict() if transaction else None
        report['error'] = session.error
        if transaction:
            logger.info(f"Recorded {transaction.type.value}: {format_inr(transaction.total_amount)}")

    return report


def main() -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        args = parse_arguments()

        initialize_system(args)

        report = asyncio.run(run_entry(
            text=args.text,
            input_path=args.input,
            media_type=args.media_type,
            submit=args.submit,
            current_stock=args.stock,
            lock_date=args.lock_date
        ))

        print(json.dumps(report, indent=2, default=str))

        if report.get('error'):
            print(f"Error: {report['error']}", file=sys.stderr)
            return 1
        return 0

    except GoldEntryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if "--debug" in sys.argv:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
