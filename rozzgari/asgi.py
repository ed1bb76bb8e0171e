import os

import socketio
from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'rozzgari.settings')

django_application = get_asgi_application()

from django.conf import settings  # noqa: E402
from apps.messaging.sockets import create_socket_server  # noqa: E402

# Socket.IO traffic on /socket.io/ goes to the relay, everything else to Django.
sio = create_socket_server(settings.CORS_ALLOWED_ORIGINS)
application = socketio.ASGIApp(sio, other_asgi_app=django_application)
