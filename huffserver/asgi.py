"""
ASGI config for the huffserver project.

It exposes the ASGI callable as a module-level variable named ``application``.

For more information on this file, see
https://docs.djangoproject.com/en/5.2/howto/deployment/asgi/
"""

import os
from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'huffserver.settings')

# Initialise Django before anything imports models or settings-dependent code
django_asgi_app = get_asgi_application()

from channels.routing import ProtocolTypeRouter  # noqa: E402
from huffserver.routing import websocket_application  # noqa: E402

# Main ASGI application
application = ProtocolTypeRouter({
    "http": django_asgi_app,               # Django views
    "websocket": websocket_application,    # progress streaming
})
