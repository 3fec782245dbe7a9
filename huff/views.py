import logging

from django.http import HttpResponse, JsonResponse
from django.utils.http import content_disposition_header
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from huff import __version__
from huff.forms import UploadForm
from huff.records import format_size
from huff.service import INVALID_FORMAT_MESSAGE, CompressionService

logger = logging.getLogger(__name__)


def get_service():
    return CompressionService()


def error_response(message, status):
    return JsonResponse({"success": False, "error": message}, status=status)


def read_upload(request):
    """Return ``(data, file_name, None)`` or ``(None, None, error_response)``."""
    form = UploadForm(request.POST, request.FILES)
    if not form.is_valid():
        return None, None, error_response(form.first_error(), status=400)
    upload = form.cleaned_data["file"]
    return upload.read(), upload.name, None


def attachment(result):
    response = HttpResponse(result.data, content_type="application/octet-stream")
    response["Content-Disposition"] = content_disposition_header(
        as_attachment=True, filename=result.file_name
    )
    response["X-Operation-Id"] = result.operation_id
    response["X-Processing-Time"] = str(result.processing_time_ms)
    return response


# ---------------------- Compression ----------------------

@csrf_exempt
@require_POST
def compress_file(request):
    data, file_name, error = read_upload(request)
    if error:
        return error

    result = get_service().compress(data, file_name)
    if not result.success:
        return error_response(result.error_message, status=500)

    response = attachment(result)
    response["X-Original-Size"] = str(result.original_size)
    response["X-Compressed-Size"] = str(result.processed_size)
    response["X-Compression-Ratio"] = result.formatted_compression_ratio
    return response


@csrf_exempt
@require_POST
def compress_file_json(request):
    data, file_name, error = read_upload(request)
    if error:
        return error

    result = get_service().compress(data, file_name)
    return JsonResponse(result.to_dict())


# ---------------------- Decompression ----------------------

@csrf_exempt
@require_POST
def decompress_file(request):
    data, file_name, error = read_upload(request)
    if error:
        return error

    service = get_service()
    if not service.can_decompress(data):
        return error_response(INVALID_FORMAT_MESSAGE, status=400)

    result = service.decompress(data, file_name)
    if not result.success:
        return error_response(result.error_message, status=422)

    response = attachment(result)
    # for a decompression the upload is the compressed side
    response["X-Compressed-Size"] = str(result.original_size)
    response["X-Original-Size"] = str(result.processed_size)
    return response


@csrf_exempt
@require_POST
def decompress_file_json(request):
    data, file_name, error = read_upload(request)
    if error:
        return error

    service = get_service()
    if not service.can_decompress(data):
        return error_response(INVALID_FORMAT_MESSAGE, status=400)

    result = service.decompress(data, file_name)
    return JsonResponse(result.to_dict(), status=200 if result.success else 422)


# ---------------------- Analysis & Validation ----------------------

@csrf_exempt
@require_POST
def analyze_file(request):
    data, file_name, error = read_upload(request)
    if error:
        return error

    stats = get_service().analyze(data)
    stats.update(
        fileName=file_name,
        fileSize=len(data),
        formattedFileSize=format_size(len(data)),
    )
    return JsonResponse(stats)


@csrf_exempt
@require_POST
def validate_file(request):
    data, file_name, error = read_upload(request)
    if error:
        return error

    valid = get_service().can_decompress(data)
    return JsonResponse(
        {
            "valid": valid,
            "fileName": file_name,
            "message": (
                "File is a valid Huffman compressed file"
                if valid
                else "File is not a Huffman compressed file"
            ),
        }
    )


# ---------------------- Operations ----------------------

@require_GET
def progress(request, operation_id):
    info = get_service().get_progress(operation_id)
    if info is None:
        return error_response(f"Unknown operation: {operation_id}", status=404)
    return JsonResponse(info.to_dict())


@csrf_exempt
@require_http_methods(["DELETE"])
def cleanup_operation(request, operation_id):
    get_service().cleanup(operation_id)
    logger.info("Cleaned up operation %s", operation_id)
    return HttpResponse(status=204)


@require_GET
def health(request):
    return JsonResponse(
        {
            "status": "UP",
            "service": "File Compression Service",
            "version": __version__,
        }
    )
