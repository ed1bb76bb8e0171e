"""
In-process live-delivery relay.

Peers join rooms keyed by a conversation or job id and receive every payload
another member publishes to that room, unchanged. The relay keeps no history
and never touches the Message table; a client that wants durable delivery
posts to the messages API as well.
"""
import logging
from collections import defaultdict
from threading import Lock

logger = logging.getLogger(__name__)

RECEIVE_EVENT = 'receive_message'


class RoomRelay:
    def __init__(self):
        self._lock = Lock()
        # room id -> {peer id: deliver callable}
        self._rooms = defaultdict(dict)

    def join(self, room_id, peer_id, deliver):
        """Register ``deliver(event, payload)`` for ``peer_id`` in ``room_id``."""
        room_id = str(room_id)
        with self._lock:
            self._rooms[room_id][peer_id] = deliver
        logger.info(f"Peer {peer_id} joined room {room_id}")

    def leave(self, room_id, peer_id):
        room_id = str(room_id)
        with self._lock:
            members = self._rooms.get(room_id)
            if not members:
                return
            members.pop(peer_id, None)
            if not members:
                del self._rooms[room_id]

    def disconnect(self, peer_id):
        """Drop ``peer_id`` from every room it joined."""
        with self._lock:
            for room_id in list(self._rooms):
                members = self._rooms[room_id]
                members.pop(peer_id, None)
                if not members:
                    del self._rooms[room_id]

    def members(self, room_id):
        with self._lock:
            return set(self._rooms.get(str(room_id), {}))

    def publish(self, room_id, sender_id, payload):
        """
        Send ``payload`` to every member of the room except the sender.

        Delivery is fire-and-forget: a failing peer is logged and skipped.
        Returns the number of peers the payload reached.
        """
        with self._lock:
            targets = [
                (peer_id, deliver)
                for peer_id, deliver in self._rooms.get(str(room_id), {}).items()
                if peer_id != sender_id
            ]

        delivered = 0
        for peer_id, deliver in targets:
            try:
                deliver(RECEIVE_EVENT, payload)
                delivered += 1
            except Exception:
                logger.exception(f"Dropped relay payload for peer {peer_id} in room {room_id}")
        return delivered

    def handle_event(self, peer_id, deliver, event, data):
        """
        Entry point for a socket transport: ``join_room`` carries the room id,
        ``send_message`` a payload whose ``room_id`` names the room.
        """
        if event == 'join_room':
            self.join(data, peer_id, deliver)
        elif event == 'leave_room':
            self.leave(data, peer_id)
        elif event == 'send_message':
            room_id = data.get('room_id') if isinstance(data, dict) else None
            if room_id is None:
                logger.warning(f"Peer {peer_id} sent a message without a room_id; dropped")
                return 0
            return self.publish(room_id, peer_id, data)
        else:
            logger.warning(f"Ignoring unknown relay event '{event}' from peer {peer_id}")
        return 0


relay = RoomRelay()
