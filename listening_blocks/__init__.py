from __future__ import annotations

from .audit import AuditFinding, run_audit
from .config import config_sha256, load_config
from .config_schema import AppConfig
from .errors import ConfigError, ExportError
from .pipeline import PipelineResult, run_pipeline
from .post import ParsedRow, RawSegment

__all__ = [
    "AppConfig",
    "AuditFinding",
    "ConfigError",
    "ExportError",
    "ParsedRow",
    "PipelineResult",
    "RawSegment",
    "config_sha256",
    "load_config",
    "run_audit",
    "run_pipeline",
]
