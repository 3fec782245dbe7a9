from channels.routing import URLRouter
from channels.security.websocket import AllowedHostsOriginValidator

import huff.routing

websocket_application = AllowedHostsOriginValidator(
    URLRouter(
        huff.routing.websocket_urlpatterns
    )
)
