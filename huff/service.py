# huff/service.py

import logging
import time
import uuid

from huff import analyzer, container
from huff.exceptions import HuffmanFormatError
from huff.progress import OperationStatus, safe_deliver
from huff.records import CompressionResult, OperationType, ProgressInfo
from huff.registry import OperationRegistry

logger = logging.getLogger(__name__)

COMPRESSED_SUFFIX = ".huff"
INVALID_FORMAT_MESSAGE = "Invalid file format: not a Huffman compressed file (.huff)"


def compressed_file_name(file_name):
    return file_name + COMPRESSED_SUFFIX


def decompressed_file_name(file_name):
    if file_name.lower().endswith(COMPRESSED_SUFFIX):
        return file_name[: -len(COMPRESSED_SUFFIX)]
    return "decompressed_" + file_name


class CompressionService:
    """Runs codec calls and keeps a progress/result record for each one.

    ``observer``, when given to ``compress``/``decompress``, is called with
    every new ``ProgressInfo`` for that operation.
    """

    def __init__(self, registry=None):
        self.registry = registry if registry is not None else OperationRegistry()

    def compress(self, data, file_name, observer=None):
        return self._run(
            OperationType.COMPRESS,
            container.compress,
            data,
            file_name,
            compressed_file_name(file_name),
            observer,
        )

    def decompress(self, data, file_name, observer=None):
        if not self.can_decompress(data):
            logger.warning("Rejected %s: missing container magic", file_name)
            return CompressionResult(
                operation_id=str(uuid.uuid4()),
                file_name=file_name,
                operation_type=OperationType.DECOMPRESS,
                original_size=len(data or b""),
                success=False,
                error_message=INVALID_FORMAT_MESSAGE,
            )
        return self._run(
            OperationType.DECOMPRESS,
            container.decompress,
            data,
            file_name,
            decompressed_file_name(file_name),
            observer,
        )

    def get_progress(self, operation_id):
        return self.registry.get_progress(operation_id)

    def get_result(self, operation_id):
        return self.registry.get_result(operation_id)

    def analyze(self, data):
        return analyzer.code_statistics(data)

    def can_decompress(self, data):
        return container.is_valid_compressed_file(data)

    def cleanup(self, operation_id):
        self.registry.remove(operation_id)

    def _run(self, operation_type, codec_call, data, file_name, output_name, observer):
        operation_id = str(uuid.uuid4())
        started = time.perf_counter()
        verb = operation_type.value.lower()

        def publish(info):
            if info is not None:
                safe_deliver(observer, info)

        progress = self.registry.start(
            ProgressInfo(
                operation_id=operation_id,
                file_name=file_name,
                total_bytes=len(data),
            )
        )
        publish(progress)
        logger.info("Starting %s of %s (%d bytes) [%s]", verb, file_name, len(data), operation_id)

        def sink(status, phase, percent):
            info = self.registry.update(
                operation_id,
                status=status,
                current_phase=phase,
                progress_percent=percent,
            )
            publish(info)

        def fail(exc):
            reason = str(exc) or type(exc).__name__
            info = self.registry.update(
                operation_id,
                status=OperationStatus.FAILED,
                current_phase="Failed",
                error_message=reason,
            )
            publish(info)
            return CompressionResult(
                operation_id=operation_id,
                file_name=file_name,
                operation_type=operation_type,
                original_size=len(data),
                success=False,
                error_message=f"{verb.capitalize()}ion failed: {reason}",
            )

        try:
            output = codec_call(data, progress=sink)
        except (HuffmanFormatError, ValueError) as exc:
            logger.warning("%s of %s failed [%s]: %s", verb.capitalize(), file_name, operation_id, exc)
            return fail(exc)
        except Exception as exc:
            logger.exception("%s of %s crashed [%s]", verb.capitalize(), file_name, operation_id)
            return fail(exc)

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        info = self.registry.update(
            operation_id,
            status=OperationStatus.COMPLETED,
            current_phase="Completed",
            progress_percent=100,
            bytes_processed=len(output),
        )
        publish(info)

        if operation_type is OperationType.COMPRESS:
            ratio = 1.0 - len(output) / len(data) if data else 0.0
        else:
            ratio = len(output) / len(data) - 1.0

        result = CompressionResult(
            operation_id=operation_id,
            file_name=output_name,
            operation_type=operation_type,
            original_size=len(data),
            processed_size=len(output),
            compression_ratio=ratio,
            processing_time_ms=elapsed_ms,
            data=output,
        )
        self.registry.save_result(result)
        logger.info(
            "Finished %s of %s: %d -> %d bytes in %d ms [%s]",
            verb, file_name, len(data), len(output), elapsed_ms, operation_id,
        )
        return result
