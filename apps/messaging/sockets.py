"""
Socket.IO binding for the live relay.

Each connected socket is a relay peer keyed by its sid. Deliveries are
scheduled on the running event loop so ``RoomRelay.publish`` stays
synchronous.
"""
import asyncio
import logging

import socketio

from .relay import relay as default_relay

logger = logging.getLogger(__name__)


class RelayNamespace(socketio.AsyncNamespace):
    def __init__(self, namespace='/', relay=None):
        super().__init__(namespace)
        self.relay = relay or default_relay

    def _deliver_to(self, sid):
        def deliver(event, payload):
            asyncio.get_running_loop().create_task(self.emit(event, payload, to=sid))
        return deliver

    async def on_connect(self, sid, environ, auth=None):
        logger.info(f"Socket {sid} connected")

    async def on_join_room(self, sid, room_id):
        return self.relay.handle_event(sid, self._deliver_to(sid), 'join_room', room_id)

    async def on_leave_room(self, sid, room_id):
        return self.relay.handle_event(sid, self._deliver_to(sid), 'leave_room', room_id)

    async def on_send_message(self, sid, data):
        return self.relay.handle_event(sid, self._deliver_to(sid), 'send_message', data)

    async def on_disconnect(self, sid, reason=None):
        self.relay.disconnect(sid)
        logger.info(f"Socket {sid} disconnected")


def create_socket_server(cors_allowed_origins):
    sio = socketio.AsyncServer(async_mode='asgi', cors_allowed_origins=cors_allowed_origins)
    sio.register_namespace(RelayNamespace('/'))
    return sio
