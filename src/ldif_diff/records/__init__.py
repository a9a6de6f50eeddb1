"""Record models, parsing, and random-access reads."""

from .models import ParsedRecord, Record, build_record, fold_name
from .parser import LdifRecordParser, RecordParser
from .reader import read_entry

__all__ = [
    "LdifRecordParser",
    "ParsedRecord",
    "Record",
    "RecordParser",
    "build_record",
    "fold_name",
    "read_entry",
]
