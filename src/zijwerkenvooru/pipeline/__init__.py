"""Pipeline orchestration components."""
from __future__ import annotations

from .build_pipeline import UNITS, BuildOptions, SiteBuildPipeline, SiteBuilder, SiteData, SiteEvent
from .import_pipeline import ImportPipeline, PipelineEvent

__all__ = [
    "BuildOptions",
    "ImportPipeline",
    "PipelineEvent",
    "SiteBuildPipeline",
    "SiteBuilder",
    "SiteData",
    "SiteEvent",
    "UNITS",
]
