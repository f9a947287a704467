"""Command-line entry point."""
import sys
import json
import asyncio
import argparse
from pathlib import Path
from typing import List

from statementai.config.manager import Config, ConfigManager
from statementai.config.settings import get_settings
from statementai.documents.intake import read_files
from statementai.llm.models import AnalysisResult
from statementai.orchestrator.processor import AnalysisPipeline, ProcessingStatus
from statementai.report.charts import daily_flow, cumulative_balance
from statementai.report.console import render_summary_cards, render_chart_series, render_table
from statementai.report.summary import build_summary_cards
from statementai.report.table import TransactionTable, TypeFilter
from statementai.utils.logger import get_logger
from statementai.utils.exceptions import ConfigError

logger = get_logger()

STATUS_MESSAGES = {
    ProcessingStatus.CONVERTING: "Processing PDF pages...",
    ProcessingStatus.ANALYZING: "Gemini is reading your statement...",
}


def _load_and_validate_config(log_level: str = None) -> Config:
    """Load configuration from the environment and fail fast when invalid."""
    config_manager = ConfigManager()
    config = config_manager.load_config()
    if log_level:
        config.log_level = log_level

    get_logger(config.log_level)

    is_valid, message = config_manager.validate_config(config)
    if not is_valid:
        raise ConfigError(message)

    logger.debug("Configuration loaded successfully")
    return config


def _print_status(status: ProcessingStatus) -> None:
    message = STATUS_MESSAGES.get(status)
    if message:
        print(message, file=sys.stderr)


def _print_result(result: AnalysisResult, table: TransactionTable, show_charts: bool) -> None:
    print(f"\nAnalysis Results - {len(result.transactions)} Transactions Found\n")
    print(render_summary_cards(build_summary_cards(result.summary)))

    if show_charts and result.transactions:
        flows = daily_flow(result.transactions)
        print("\nDaily cash flow and balance trend:")
        print(render_chart_series(flows, cumulative_balance(flows)))

    print()
    print(render_table(table))


def _write_json(result: AnalysisResult, path: Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info(f"Saved JSON: {path}")


def analyze_command(args: argparse.Namespace) -> int:
    """Run the full pipeline on the given files and print the dashboard."""
    config = _load_and_validate_config(args.log_level)
    type_filter = TypeFilter.parse(args.type)

    files = read_files(Path(p) for p in args.files)

    pipeline = AnalysisPipeline(config)
    pipeline.on_status_change(_print_status)
    result = asyncio.run(pipeline.run(files))

    table = TransactionTable(result.transactions, type_filter=type_filter, search=args.search)
    _print_result(result, table, show_charts=not args.no_charts)

    if args.csv:
        path = table.export_csv(Path(args.csv))
        print(f"\nCSV written to {path}")
    elif args.export_dir:
        path = table.export_csv(Path(args.export_dir))
        print(f"\nCSV written to {path}")

    if args.json:
        _write_json(result, Path(args.json))

    return 0


def serve_command(args: argparse.Namespace) -> int:
    """Start the HTTP API."""
    import uvicorn
    from statementai.web.app import create_app

    settings = get_settings()
    get_logger(args.log_level)
    uvicorn.run(
        create_app(),
        host=args.host or settings.server_host,
        port=args.port or settings.server_port
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="statementai",
        description=f"{settings.app_name} - bank statement analysis with Gemini"
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--log-level", help="Logging level (default from config.yaml)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser(
        "analyze", parents=[common], help="Analyze PDF or image statements"
    )
    analyze.add_argument("files", nargs="+", help="Statement files (.pdf or images)")
    analyze.add_argument(
        "--type",
        default=TypeFilter.ALL.value,
        choices=[f.value for f in TypeFilter],
        help="Show only credits or debits (default: All)"
    )
    analyze.add_argument("--search", default="", help="Filter rows by description or notes")
    output = analyze.add_mutually_exclusive_group()
    output.add_argument("--csv", help="Write the filtered table to this CSV file")
    output.add_argument("--export-dir", help="Write a dated CSV into this directory")
    analyze.add_argument("--json", help="Save the full analysis as JSON")
    analyze.add_argument("--no-charts", action="store_true", help="Skip the daily flow table")
    analyze.set_defaults(handler=analyze_command)

    serve = subparsers.add_parser("serve", parents=[common], help="Run the HTTP API")
    serve.add_argument("--host", help="Bind address")
    serve.add_argument("--port", type=int, help="Port")
    serve.set_defaults(handler=serve_command)

    return parser


def main(argv: List[str] = None) -> int:
    """Main entry point for StatementAI."""
    args = build_parser().parse_args(argv)

    try:
        return args.handler(args)
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
        return 130
    except Exception as e:
        logger.debug("Fatal error", exc_info=True)
        message = str(e) or "An unexpected error occurred during processing."
        print(f"\n✗ Error: {message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
