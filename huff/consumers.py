import base64
import binascii
import json
import logging

from asgiref.sync import async_to_sync, sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer

from huff.service import CompressionService

logger = logging.getLogger(__name__)


def operation_group(operation_id):
    return f"operation_{operation_id}"


class CompressionConsumer(AsyncWebsocketConsumer):
    """Runs compress/decompress requests and streams their progress.

    Clients send JSON commands:

    * ``{"command": "compress" | "decompress", "fileName": ..., "data": <base64>}``
    * ``{"command": "watch", "operationId": ...}`` to follow another operation
    """

    watched_groups = None

    # ---------------------- Connection Logic ----------------------

    async def connect(self):
        self.watched_groups = set()
        await self.accept()

    async def disconnect(self, close_code):
        for group in self.watched_groups or ():
            await self.channel_layer.group_discard(group, self.channel_name)

    # ---------------------- Message Handling ----------------------

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or "")
        except json.JSONDecodeError:
            await self.send_error("Malformed message: expected JSON")
            return

        command = data.get("command") if isinstance(data, dict) else None

        if command == "watch":
            await self.watch(data.get("operationId"))
        elif command in ("compress", "decompress"):
            await self.run_operation(command, data)
        else:
            await self.send_error(f"Unknown command: {command}")

    async def watch(self, operation_id):
        if not operation_id:
            await self.send_error("Missing operationId")
            return

        group = operation_group(operation_id)
        await self.channel_layer.group_add(group, self.channel_name)
        self.watched_groups.add(group)

        info = await sync_to_async(CompressionService().get_progress)(operation_id)
        await self.send(
            text_data=json.dumps(
                {
                    "type": "watching",
                    "operationId": operation_id,
                    "progress": info.to_dict() if info else None,
                }
            )
        )

    async def run_operation(self, command, data):
        try:
            payload = base64.b64decode(data.get("data") or "", validate=True)
        except (binascii.Error, TypeError, ValueError):
            await self.send_error("Invalid data: expected base64")
            return

        default_name = "file" if command == "compress" else "file.huff"
        file_name = data.get("fileName") or default_name

        service = CompressionService()
        operation = getattr(service, command)
        result = await sync_to_async(operation, thread_sensitive=False)(
            payload, file_name, observer=self.publish_progress
        )

        if result.success:
            await self.send(text_data=json.dumps({"type": "result", **result.to_dict()}))
        else:
            await self.send_error(result.error_message, operationId=result.operation_id)

    def publish_progress(self, info):
        # called from the worker thread running the codec
        frame = {"type": "progress", **info.to_dict()}
        async_to_sync(self.send)(text_data=json.dumps(frame))
        async_to_sync(self.channel_layer.group_send)(
            operation_group(info.operation_id),
            {"type": "progress_update", "frame": frame},
        )

    async def send_error(self, message, **extra):
        await self.send(text_data=json.dumps({"type": "error", "error": message, **extra}))

    # ---------------------- Group Events ----------------------

    async def progress_update(self, event):
        await self.send(text_data=json.dumps(event["frame"]))
