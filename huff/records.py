# huff/records.py

import base64
import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from huff.progress import OperationStatus

SIZE_UNITS = "KMGTPE"


def utcnow():
    return datetime.now(timezone.utc)


def format_size(num_bytes):
    if num_bytes < 1024:
        return f"{num_bytes} B"
    value = float(num_bytes)
    exp = 0
    while value >= 1024 and exp < len(SIZE_UNITS):
        value /= 1024
        exp += 1
    return f"{value:.2f} {SIZE_UNITS[exp - 1]}B"


class OperationType(enum.Enum):
    COMPRESS = "COMPRESS"
    DECOMPRESS = "DECOMPRESS"


@dataclass(frozen=True)
class ProgressInfo:
    operation_id: str
    file_name: str
    status: OperationStatus = OperationStatus.QUEUED
    progress_percent: int = 0
    current_phase: str = "Initializing"
    bytes_processed: int = 0
    total_bytes: int = 0
    start_time: datetime = field(default_factory=utcnow)
    last_updated: datetime = field(default_factory=utcnow)
    error_message: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(
            self, "progress_percent", min(100, max(0, int(self.progress_percent)))
        )

    @property
    def is_complete(self):
        return self.status.is_terminal

    def to_dict(self):
        data = {
            "operationId": self.operation_id,
            "fileName": self.file_name,
            "status": self.status.value,
            "progressPercent": self.progress_percent,
            "currentPhase": self.current_phase,
            "bytesProcessed": self.bytes_processed,
            "totalBytes": self.total_bytes,
            "complete": self.is_complete,
            "startTime": self.start_time.isoformat(),
            "lastUpdated": self.last_updated.isoformat(),
        }
        if self.error_message is not None:
            data["errorMessage"] = self.error_message
        return data


@dataclass(frozen=True)
class CompressionResult:
    """Outcome of one compress or decompress call.

    ``original_size`` is always the size of the input handed to the
    operation and ``processed_size`` the size of what it produced, so for a
    decompression the compressed blob is the "original".
    """

    operation_id: str
    file_name: str
    operation_type: OperationType
    original_size: int = 0
    processed_size: int = 0
    compression_ratio: float = 0.0
    processing_time_ms: int = 0
    success: bool = True
    error_message: Optional[str] = None
    data: Optional[bytes] = field(default=None, repr=False)

    @property
    def formatted_original_size(self):
        return format_size(self.original_size)

    @property
    def formatted_processed_size(self):
        return format_size(self.processed_size)

    @property
    def formatted_compression_ratio(self):
        return f"{self.compression_ratio * 100:.2f}%"

    def to_dict(self, include_data=True):
        """JSON body for the API, keyed the way the web front end expects."""
        body = {
            "success": self.success,
            "operationId": self.operation_id,
            "fileName": self.file_name,
            "processingTimeMs": self.processing_time_ms,
        }
        if self.operation_type is OperationType.COMPRESS:
            body.update(
                originalSize=self.original_size,
                compressedSize=self.processed_size,
                compressionRatio=self.compression_ratio,
                formattedCompressionRatio=self.formatted_compression_ratio,
                formattedOriginalSize=self.formatted_original_size,
                formattedCompressedSize=self.formatted_processed_size,
            )
        else:
            body.update(
                compressedSize=self.original_size,
                originalSize=self.processed_size,
                formattedCompressedSize=self.formatted_original_size,
                formattedOriginalSize=self.formatted_processed_size,
            )

        if not self.success:
            body["errorMessage"] = self.error_message
        elif include_data:
            body["data"] = base64.b64encode(self.data or b"").decode("ascii")
        return body
