"""Run summary records, schema validation, writing, and run ID generation."""

from dynbatch.results.run_id import generate_run_id
from dynbatch.results.schema import build_summary, load_summary, validate_summary, write_summary
from dynbatch.results.types import BatchRecord, RunSummary

__all__ = [
    "BatchRecord",
    "RunSummary",
    "build_summary",
    "generate_run_id",
    "load_summary",
    "validate_summary",
    "write_summary",
]
