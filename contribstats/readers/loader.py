"""
Pick a reader by file extension and turn records into contributions
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from contribstats.core.models import Contribution
from contribstats.readers.base import BaseReader

SUPPORTED_FORMATS = ["csv", "json", "jsonl"]


def create_reader(source: str, format: Optional[str] = None) -> BaseReader:
    """
    Auto-detect file type and create appropriate reader

    Args:
        source: Path to data file
        format: Explicit format (csv, json, jsonl); overrides the extension

    Returns:
        Reader instance for the source

    Raises:
        ValueError: If file format is not supported
        FileNotFoundError: If the file does not exist
    """
    suffix = Path(source).suffix.lower()

    if format == "json" or (not format and suffix == ".json"):
        from contribstats.readers.json_reader import JSONReader

        return JSONReader(source)

    elif format == "jsonl" or (not format and suffix in [".jsonl", ".ndjson"]):
        from contribstats.readers.jsonl_reader import JSONLReader

        return JSONLReader(source)

    elif format == "csv" or (not format and suffix in [".csv", ".tsv"]):
        from contribstats.readers.csv_reader import CSVReader

        delimiter = "\t" if suffix == ".tsv" else ","
        return CSVReader(source, delimiter=delimiter)

    raise ValueError(
        f"Unsupported file format: {format or suffix or '(none)'}. "
        f"Supported formats: {', '.join(SUPPORTED_FORMATS)}"
    )


def load_records(source: str, format: Optional[str] = None) -> List[Dict[str, Any]]:
    """Read every record of a file into memory"""
    return list(create_reader(source, format).read_lazy())


def load_contributions(source: str, format: Optional[str] = None) -> List[Contribution]:
    """
    Load raw contributions from a file

    Args:
        source: Path to a CSV, JSON or JSONL file
        format: Explicit format, see create_reader()

    Returns:
        List of Contribution records in file order
    """
    return [Contribution.from_dict(record) for record in load_records(source, format)]
