"""Assemble sources, storage and pipelines from an :class:`AppConfig`."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging

from .config import AppConfig
from .database import SQLRowSource, Storage, create_storage
from .pipeline import BuildOptions, ImportPipeline, SiteBuildPipeline, SiteBuilder
from .sources import ParquetRowSource, RowSource
from .summarization import GeminiSummarizer
from .topics import load_json_mapping

LOGGER = logging.getLogger(__name__)


def create_row_source(config: AppConfig, storage: Optional[Storage] = None) -> RowSource:
    """Row source selected by ``data.source``: ``parquet`` or ``database``."""

    kind = config.data.source.strip().lower()
    if kind == "parquet":
        return ParquetRowSource(config.data.directory)
    if kind == "database":
        if storage is None:
            raise ValueError("A database row source needs a storage instance")
        return SQLRowSource(storage.engine)
    raise ValueError(f"Unknown data source {config.data.source!r}")


def create_summarizer(config: AppConfig, *, skip_summaries: bool = False) -> Optional[GeminiSummarizer]:
    if skip_summaries:
        return None
    if not config.gemini.api_key:
        LOGGER.warning("Gemini API key missing - summaries will be skipped")
        return None
    return GeminiSummarizer(
        api_key=config.gemini.api_key,
        base_url=config.gemini.base_url,
        model=config.gemini.model,
        timeout=config.gemini.timeout,
        max_retries=config.gemini.max_retries,
        enable_safety_settings=config.gemini.enable_safety_settings,
    )


@dataclass(slots=True)
class ImportResources:
    """Objects needed to run an import, closed together afterwards."""

    pipeline: ImportPipeline
    storage: Storage
    summarizer: GeminiSummarizer | None
    owns_storage: bool = True

    def close(self) -> None:
        if self.owns_storage:
            self.storage.dispose()


def create_import_pipeline(
    config: AppConfig,
    *,
    skip_summaries: bool,
    storage: Storage | None = None,
    source: RowSource | None = None,
) -> ImportResources:
    """Import pipeline reading the Parquet dataset into the configured database."""

    owns_storage = storage is None
    storage_instance = storage or create_storage(config.storage.database_url, echo=config.storage.echo_sql)
    summarizer = create_summarizer(config, skip_summaries=skip_summaries)
    pipeline = ImportPipeline(
        source=source or ParquetRowSource(config.data.directory),
        storage=storage_instance,
        summarizer=summarizer,
        summary_model=config.gemini.model if summarizer else None,
    )
    return ImportResources(
        pipeline=pipeline,
        storage=storage_instance,
        summarizer=summarizer,
        owns_storage=owns_storage,
    )


def build_options(config: AppConfig) -> BuildOptions:
    return BuildOptions(
        income_year=config.data.income_year,
        chamber_size=config.data.chamber_size,
        similarity_threshold=config.data.similarity_threshold,
        contributors_per_topic=config.data.contributors_per_topic,
        max_workers=config.data.max_workers,
    )


def create_site_pipeline(config: AppConfig, source: RowSource) -> SiteBuildPipeline:
    builder = SiteBuilder(
        source,
        taxonomy=load_json_mapping(config.data.topics_path),
        party_colors=load_json_mapping(config.data.party_colors_path),
        options=build_options(config),
    )
    return SiteBuildPipeline(builder)


def output_directory(config: AppConfig, override: Optional[Path] = None) -> Path:
    return override or Path(config.data.output_dir)


__all__ = [
    "ImportResources",
    "build_options",
    "create_import_pipeline",
    "create_row_source",
    "create_site_pipeline",
    "create_summarizer",
    "output_directory",
]
