from typing import Optional

from .errors import MalformedRecordError
from .models import ExtractedFields, ExtractionConfig, Record


def extract_fields(record: Record, config: ExtractionConfig,
                   source: Optional[str] = None,
                   record_index: Optional[int] = None) -> ExtractedFields:
    """Slice the cell barcode and UMI, with their qualities, off the front of a record.

    The barcode occupies [0, barcode_length) and the UMI follows it.
    Records shorter than barcode_length + umi_length are rejected rather than
    padded or truncated.
    """
    b = config.barcode_length
    end = config.required_length

    if len(record.sequence) < end or len(record.quality) < end:
        raise MalformedRecordError(
            source, record_index,
            f"barcode read {record.name or '<unnamed>'} has length {len(record.sequence)}, "
            f"need at least {end} ({b} barcode + {config.umi_length} UMI)")

    return ExtractedFields(
        barcode=record.sequence[:b],
        barcode_quality=record.quality[:b],
        umi=record.sequence[b:end],
        umi_quality=record.quality[b:end],
    )
