"""Command line interface for building the site data and importing the dataset."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .config import AppConfig, load_config
from .database import create_storage
from .runtime import (
    create_import_pipeline,
    create_row_source,
    create_site_pipeline,
    create_summarizer,
    output_directory,
)
from .summarization import generate_missing_summaries

LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Zij werken voor u: parliamentary data builder")
    parser.add_argument(
        "command",
        choices=["build", "import", "summarize"],
        help="build the site data, import the dataset into the database or generate missing summaries",
    )
    parser.add_argument("--config", type=Path, help="Path to an explicit configuration file")
    parser.add_argument("--output", type=Path, help="Directory the site data is written to (build only)")
    parser.add_argument("--limit", type=int, help="Maximum number of summaries to generate")
    parser.add_argument(
        "--without-summaries",
        action="store_true",
        help="Skip Gemini summarisation even if an API key is configured",
    )
    return parser


def _build(config: AppConfig, output: Optional[Path]) -> int:
    storage = None
    if config.data.source.strip().lower() == "database":
        storage = create_storage(config.storage.database_url, echo=config.storage.echo_sql)
    try:
        pipeline = create_site_pipeline(config, create_row_source(config, storage))
        data = pipeline.run(output_directory(config, output))
    finally:
        if storage is not None:
            storage.dispose()
    if data.failed:
        LOGGER.warning("Units built from empty fallbacks: %s", ", ".join(data.failed))
    return 0


def _import(config: AppConfig, *, limit: Optional[int], without_summaries: bool) -> int:
    resources = create_import_pipeline(config, skip_summaries=without_summaries)
    try:
        processed = resources.pipeline.run(summary_limit=limit)
    except Exception:
        LOGGER.error("Import failed")
        return 1
    finally:
        resources.close()
    LOGGER.info("Imported %s tables", processed)
    return 0


def _summarize(config: AppConfig, *, limit: Optional[int]) -> int:
    summarizer = create_summarizer(config)
    if summarizer is None:
        return 1
    storage = create_storage(config.storage.database_url, echo=config.storage.echo_sql)
    try:
        stored = generate_missing_summaries(
            create_row_source(config, storage),
            storage,
            summarizer,
            model=summarizer.model,
            limit=limit,
        )
    finally:
        storage.dispose()
    LOGGER.info("Stored %s new summaries", stored)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    parser = _build_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)

    if args.command == "build":
        return _build(config, args.output)
    if args.command == "import":
        return _import(config, limit=args.limit, without_summaries=args.without_summaries)
    if args.command == "summarize":
        return _summarize(config, limit=args.limit)
    parser.error(f"Unknown command {args.command}")
    return 2


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
