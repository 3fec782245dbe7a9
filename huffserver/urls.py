from django.urls import include, path

urlpatterns = [
    path("huffman/", include("huff.urls")),
]
