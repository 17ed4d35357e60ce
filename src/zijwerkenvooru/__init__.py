"""Data joining and derived metrics for the Zij werken voor u website."""
from __future__ import annotations

from .config import AppConfig, DataConfig, GeminiConfig, StorageConfig, load_config
from .database import SQLRowSource, Storage, create_storage
from .joins import Lookups, build_lookups
from .pipeline import BuildOptions, ImportPipeline, PipelineEvent, SiteBuildPipeline, SiteBuilder, SiteData
from .runtime import ImportResources, create_import_pipeline, create_site_pipeline
from .sources import MemoryRowSource, ParquetRowSource, RowSource
from .summarization import GeminiSummarizer
from .topics import TopicMatcher

__all__ = [
    "AppConfig",
    "BuildOptions",
    "DataConfig",
    "GeminiConfig",
    "GeminiSummarizer",
    "ImportPipeline",
    "ImportResources",
    "Lookups",
    "MemoryRowSource",
    "ParquetRowSource",
    "PipelineEvent",
    "RowSource",
    "SQLRowSource",
    "SiteBuildPipeline",
    "SiteBuilder",
    "SiteData",
    "StorageConfig",
    "Storage",
    "TopicMatcher",
    "build_lookups",
    "create_import_pipeline",
    "create_site_pipeline",
    "create_storage",
    "load_config",
]
