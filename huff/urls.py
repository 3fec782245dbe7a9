from django.urls import path

from . import views

app_name = "huff"

urlpatterns = [
    path("compress", views.compress_file, name="compress"),
    path("compress/json", views.compress_file_json, name="compress_json"),
    path("decompress", views.decompress_file, name="decompress"),
    path("decompress/json", views.decompress_file_json, name="decompress_json"),
    path("analyze", views.analyze_file, name="analyze"),
    path("validate", views.validate_file, name="validate"),

    # Operation tracking
    path("progress/<str:operation_id>", views.progress, name="progress"),
    path("operations/<str:operation_id>", views.cleanup_operation, name="cleanup"),
    path("health", views.health, name="health"),
]
