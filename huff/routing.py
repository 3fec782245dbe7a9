from django.urls import re_path

from . import consumers

websocket_urlpatterns = [
    re_path(r"^ws/huffman/$", consumers.CompressionConsumer.as_asgi()),
]
