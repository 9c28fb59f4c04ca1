"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or prints one report as JSON.
"""

import argparse
import json
import logging

import uvicorn

from shopstats.analytics import AnalyticsError
from shopstats.api.routers import REPORT_NAMES, ReportRequestError, api_build_report_payload
from shopstats.bootstrap import bootstrap_create_application, bootstrap_create_report_service
from shopstats.config import config_load_settings
from shopstats.domain import DatasetLoadError

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Run selected runtime command with validated startup configuration.

    Args:
        argv: Optional argument list, defaults to process arguments.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when a report cannot be produced.
    """

    argument_parser = argparse.ArgumentParser(description="Shop statistics runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "report"),
        help="Runtime command: `api` starts server, `report` prints one report as JSON",
        type=str,
    )
    argument_parser.add_argument(
        "report_name",
        nargs="?",
        choices=REPORT_NAMES,
        help="Report to print for the `report` command",
    )
    argument_parser.add_argument("--card-type", dest="card_type", type=str, help="Card type for orders-for-card-type")
    argument_parser.add_argument("--color", dest="color", type=str, help="Product color for has-color-product")
    argument_parser.add_argument(
        "--card-number",
        dest="card_number",
        type=str,
        help="Card number for average-product-price",
    )
    argument_parser.add_argument("--dataset", dest="dataset_path", type=str, help="Override DATASET_PATH")
    parsed_arguments = argument_parser.parse_args(argv)

    settings = config_load_settings()
    if parsed_arguments.dataset_path:
        settings = settings.model_copy(update={"dataset_path": parsed_arguments.dataset_path})
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if parsed_arguments.command == "report":
        if parsed_arguments.report_name is None:
            argument_parser.error("report command requires a report name")
        main_print_report(
            settings=settings,
            report_name=parsed_arguments.report_name,
            card_type=parsed_arguments.card_type,
            color=parsed_arguments.color,
            card_number=parsed_arguments.card_number,
        )
        return

    application = bootstrap_create_application(settings=settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_print_report(settings, report_name: str, **parameters: str | None) -> None:
    """Print one report payload to stdout.

    Args:
        settings: Validated runtime settings.
        report_name: Report to run.
        **parameters: Report parameters (`card_type`, `color`, `card_number`).

    Returns:
        None: Prints JSON payload to stdout as side effect.

    Raises:
        SystemExit: Raised with code 1 when the report fails.
    """

    report_service = bootstrap_create_report_service(settings)
    try:
        payload = api_build_report_payload(report_service, report_name, **parameters)
    except (ReportRequestError, AnalyticsError, DatasetLoadError) as error:
        logger.error("Report %s failed: %s", report_name, error)
        raise SystemExit(1) from error
    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
