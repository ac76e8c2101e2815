"""
Annotated FASTQ identifier lines.

Downstream tools split the identifier on '|||' and read values by tag, so the
separator and every tag are always written even when a value is empty.
"""

from typing import Dict, Optional

from .constants import (
    FIELD_SEPARATOR, HEADER_TAGS, TAG_CELL_BARCODE, TAG_CELL_BARCODE_QUALITY, TAG_CELL_ID,
    TAG_SAMPLE_BARCODE, TAG_SAMPLE_BARCODE_QUALITY, TAG_UMI, TAG_UMI_QUALITY
)
from .models import ExtractedFields, Record


def cell_id(barcode: str, experiment_tag: str) -> str:
    return f"{barcode}-{experiment_tag}"


def compose_header(primary: Record, fields: Optional[ExtractedFields] = None,
                   index: Optional[Record] = None, experiment_tag: str = "") -> str:
    """Build the identifier line (no trailing newline) for one output record.

    With no extracted fields only the experiment tag is filled in; without an
    index record the sample barcode fields are left empty.
    """
    values = dict.fromkeys(HEADER_TAGS, "")

    if fields is not None:
        values[TAG_CELL_BARCODE] = fields.barcode
        values[TAG_CELL_BARCODE_QUALITY] = fields.barcode_quality
        values[TAG_UMI] = fields.umi
        values[TAG_UMI_QUALITY] = fields.umi_quality
        values[TAG_CELL_ID] = cell_id(fields.barcode, experiment_tag)
    else:
        values[TAG_CELL_ID] = experiment_tag

    if index is not None:
        values[TAG_SAMPLE_BARCODE] = index.sequence
        values[TAG_SAMPLE_BARCODE_QUALITY] = index.quality

    parts = [primary.name]
    for tag in HEADER_TAGS:
        parts.append(tag)
        parts.append(values[tag])

    header = "@" + FIELD_SEPARATOR.join(parts)
    if primary.comment:
        header += " " + primary.comment
    return header


def format_record(header: str, primary: Record) -> str:
    """Render the full 4-line, LF-terminated FASTQ record."""
    output = []
    output.append(header + "\n")
    output.append(primary.sequence + "\n")
    output.append("+\n")
    output.append(primary.quality + "\n")
    return ''.join(output)


def parse_header(line: str) -> Dict[str, str]:
    """Split an annotated identifier line back into its fields.

    Returns a dict keyed by tag, plus 'name' and 'comment'.
    """
    line = line.rstrip("\n")
    if line.startswith("@"):
        line = line[1:]

    # The comment is separated from the last field by the first whitespace
    # after the CID value; names never contain whitespace.
    annotated, _, comment = line.partition(" ")
    parts = annotated.split(FIELD_SEPARATOR)
    if len(parts) != 2 * len(HEADER_TAGS) + 1:
        raise ValueError(f"Not an annotated header: {line!r}")

    parsed = {"name": parts[0], "comment": comment}
    for i, tag in enumerate(HEADER_TAGS):
        found = parts[1 + 2 * i]
        if found != tag:
            raise ValueError(f"Expected tag {tag}, found {found!r}")
        parsed[tag] = parts[2 + 2 * i]
    return parsed
