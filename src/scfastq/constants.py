"""Wire-format tokens, defaults and input layouts."""

from enum import Enum

FIELD_SEPARATOR = "|||"

# Annotated header field names, in output order
TAG_CELL_BARCODE = "CR"
TAG_CELL_BARCODE_QUALITY = "CY"
TAG_UMI = "UR"
TAG_UMI_QUALITY = "UY"
TAG_SAMPLE_BARCODE = "BC"
TAG_SAMPLE_BARCODE_QUALITY = "QT"
TAG_CELL_ID = "CID"

HEADER_TAGS = [TAG_CELL_BARCODE, TAG_CELL_BARCODE_QUALITY, TAG_UMI, TAG_UMI_QUALITY,
               TAG_SAMPLE_BARCODE, TAG_SAMPLE_BARCODE_QUALITY, TAG_CELL_ID]

DEFAULT_BARCODE_LENGTH = 16
DEFAULT_EXPERIMENT_TAG = "exp01"
DEFAULT_PROGRESS_INTERVAL = 1000000

CHUNK_SUFFIX = ".fastq"
GZIP_EXTENSIONS = (".gz", ".gzip")


class Chemistry:
    """Barcode chemistries, which differ only in UMI length."""
    V2 = "v2"
    V3 = "v3"

    UMI_LENGTHS = {V2: 10, V3: 12}

    @classmethod
    def umi_length(cls, chemistry: str) -> int:
        return cls.UMI_LENGTHS[chemistry]


class InputLayout(Enum):
    """Which streams are present, selected by the number of input files."""
    PASSTHROUGH = 1  # primary only
    BARCODE_ONLY = 2  # barcode-carrier + primary
    FULL = 3  # sample index + barcode-carrier + primary

    def to_string(self) -> str:
        if self == InputLayout.PASSTHROUGH:
            return "passthrough"
        elif self == InputLayout.BARCODE_ONLY:
            return "barcode-only"
        else:
            return "full"

    @classmethod
    def from_file_count(cls, count: int) -> "InputLayout":
        return cls(count)

    def has_index(self) -> bool:
        return self == InputLayout.FULL

    def has_barcodes(self) -> bool:
        return self != InputLayout.PASSTHROUGH

    def roles(self) -> list:
        """Stream role names in command-line order."""
        if self == InputLayout.FULL:
            return ["index", "barcode", "primary"]
        elif self == InputLayout.BARCODE_ONLY:
            return ["barcode", "primary"]
        return ["primary"]
