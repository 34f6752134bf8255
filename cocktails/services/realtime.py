"""Socket.IO fan-out of community events (new members, member stat changes)."""

import logging
import threading

import socketio
from django.conf import settings
from django.utils import timezone

logger = logging.getLogger(__name__)

COMMUNITY_ROOM = "community"


class RealtimeService:
    """Owns the Socket.IO server and the community room broadcasts."""

    def __init__(self):
        self.sio = None
        self.connected_clients = set()
        self._lock = threading.Lock()

    @property
    def is_initialized(self):
        return self.sio is not None

    def initialize(self, server=None):
        """Create (or adopt) the Socket.IO server and register event handlers."""
        if self.sio is not None:
            return self.sio
        self.sio = server or socketio.Server(
            async_mode="threading",
            cors_allowed_origins=settings.CORS_ALLOWED_ORIGINS,
        )
        self.sio.on("connect", self.handle_connect)
        self.sio.on("disconnect", self.handle_disconnect)
        self.sio.on("join-community", self.handle_join)
        self.sio.on("leave-community", self.handle_leave)
        logger.info("Realtime service initialized")
        return self.sio

    def shutdown(self):
        self.sio = None
        with self._lock:
            self.connected_clients.clear()

    def handle_connect(self, sid, environ=None, auth=None):
        with self._lock:
            self.connected_clients.add(sid)
        logger.debug("Client connected: %s", sid)

    def handle_disconnect(self, sid, reason=None):
        with self._lock:
            self.connected_clients.discard(sid)
        logger.debug("Client disconnected: %s", sid)

    def handle_join(self, sid, data=None):
        self.sio.enter_room(sid, COMMUNITY_ROOM)
        logger.debug("Client %s joined community room", sid)

    def handle_leave(self, sid, data=None):
        self.sio.leave_room(sid, COMMUNITY_ROOM)
        logger.debug("Client %s left community room", sid)

    def _emit(self, event, payload):
        if self.sio is None:
            logger.warning("Realtime not initialized, cannot broadcast %s", event)
            return False
        self.sio.emit(event, payload, to=COMMUNITY_ROOM)
        return True

    def broadcast_new_member(self, user):
        """Announce a freshly registered member to the community room."""
        member = {
            "id": user.pk,
            "name": user.name,
            "username": user.username,
            "avatar": user.avatar or None,
            "joinDate": user.date_joined.isoformat() if user.date_joined else None,
            "isVerified": bool(user.is_verified),
            "cocktailsAdded": 0,
        }
        sent = self._emit("new-member", {
            "type": "NEW_MEMBER",
            "data": member,
            "timestamp": timezone.now().isoformat(),
        })
        if sent:
            logger.info("Broadcast new member %s to %d clients", user.username, len(self.connected_clients))
        return sent

    def broadcast_member_update(self, user_id, data):
        """Push changed member stats (follower or cocktail counts)."""
        return self._emit("member-update", {
            "type": "MEMBER_UPDATE",
            "userId": user_id,
            "data": data,
            "timestamp": timezone.now().isoformat(),
        })

    def get_stats(self):
        with self._lock:
            connected = len(self.connected_clients)
        return {"connectedClients": connected, "isInitialized": self.is_initialized}


realtime_service = RealtimeService()
