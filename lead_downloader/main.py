"""Main entry point for the Apollo Lead Downloader service."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
import time
from pathlib import Path
from typing import Optional, Sequence, Tuple

import uvicorn

from lead_downloader.config.environment import EnvironmentConfig
from lead_downloader.config.exceptions import ConfigurationError
from lead_downloader.config.loader import load_config
from lead_downloader.config.models import AppConfig
from lead_downloader.domain.models import QueryValidationError, SearchQuery
from lead_downloader.export.csv_writer import build_download_filename, leads_to_csv
from lead_downloader.logging import get_logger
from lead_downloader.logging.config import configure_logging
from lead_downloader.normalization.service import LeadNormalizer
from lead_downloader.retrieval.runner import LeadRetriever
from lead_downloader.upstream.apollo import ApolloClient
from lead_downloader.upstream.exceptions import UpstreamError
from lead_downloader.web.app import create_app

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load and prepare runtime configuration.

    Args:
        config_path: Path to configuration file, or None for default lookup
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with the effective log level
        stored on the environment config

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    # Log level priority: CLI > Environment > Config
    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    return app_config, env_config


def build_retriever(app_config: AppConfig, env_config: EnvironmentConfig) -> LeadRetriever:
    """Wire the Apollo client and normalizer into a retriever."""
    client = ApolloClient(
        api_key=env_config.apollo_api_key,
        endpoint=app_config.upstream.endpoint,
        timeout=app_config.upstream.http_request_timeout,
        user_agent=app_config.upstream.user_agent,
    )
    return LeadRetriever(client, LeadNormalizer())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Apollo Lead Downloader - search Apollo contacts and export them as CSV"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument("--host", default=None, help="Interface to bind (overrides HOST)")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (overrides PORT)")

    export = parser.add_argument_group("one-shot export")
    export.add_argument(
        "--export",
        metavar="KEYWORDS",
        default=None,
        help="Run a single search for KEYWORDS and write CSV instead of serving",
    )
    export.add_argument("--location", default=None, help="Location filter for --export")
    export.add_argument("--limit", default=None, help="Target lead count for --export")
    export.add_argument("--per-page", default=None, help="Upstream page size for --export")
    export.add_argument(
        "--output",
        type=Path,
        default=None,
        help="CSV output path for --export (default: apollo_leads_<timestamp>.csv)",
    )
    return parser


def run_export(retriever: LeadRetriever, args: argparse.Namespace) -> int:
    """Run one retrieval and write the result to a CSV file."""
    query = SearchQuery.from_params(args.export, args.location, args.limit, args.per_page)
    leads = retriever.fetch_leads(query)

    output = args.output or Path(build_download_filename())
    output.write_text(leads_to_csv(leads), encoding="utf-8")

    logger.info(
        f"Exported {len(leads)} leads to {output}",
        extra={
            "event": "cli.export.completed",
            "lead_count": len(leads),
            "output": str(output),
        },
    )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the Apollo Lead Downloader.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)
    retriever = None

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        retriever = build_retriever(app_config, env_config)

        if args.export is not None:
            return run_export(retriever, args)

        host = args.host or env_config.host
        port = args.port or env_config.port

        logger.info(
            f"Apollo Lead Downloader running: http://{host}:{port}",
            extra={
                "event": "service.starting",
                "host": host,
                "port": port,
                "log_level": env_config.log_level,
            },
        )

        uvicorn.run(create_app(retriever), host=host, port=port, log_config=None)

        logger.info(
            "Apollo Lead Downloader stopped",
            extra={
                "event": "service.stopping",
                "uptime_seconds": round(time.time() - start_time, 2),
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except QueryValidationError as e:
        print(f"Invalid search: {e}", file=sys.stderr)
        return 1
    except UpstreamError as e:
        print(f"Search failed: {e}", file=sys.stderr)
        if e.detail:
            print(f"Details: {e.detail}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 0
    finally:
        if retriever is not None:
            retriever.client.close()


if __name__ == "__main__":
    sys.exit(main())
