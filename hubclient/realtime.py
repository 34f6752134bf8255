"""Socket.IO listener that keeps the community list and join toasts current."""

import logging
import threading
import time

import socketio

logger = logging.getLogger(__name__)

COMMUNITY_ROOM = "community"
MAX_TOASTS = 5
TOAST_SECONDS = 10


class CommunityListener:
    """
    Join the community room and react to member events.

    `new-member` prepends the member to `members` and to the toast list,
    which holds at most MAX_TOASTS entries that expire after TOAST_SECONDS.
    `member-update` merges changed stats into the matching member.
    """

    def __init__(self, url, members=None, client=None, clock=time.monotonic):
        self.url = url
        self.members = list(members or [])
        self.client = client or socketio.Client(reconnection=True)
        self.clock = clock
        self._toasts = []
        self._lock = threading.Lock()
        self.client.on("connect", self._on_connect)
        self.client.on("disconnect", self._on_disconnect)
        self.client.on("new-member", self.handle_new_member)
        self.client.on("member-update", self.handle_member_update)

    @property
    def is_connected(self):
        return bool(self.client.connected)

    def connect(self):
        self.client.connect(self.url, transports=["websocket", "polling"])

    def close(self):
        if self.is_connected:
            self.client.emit("leave-community", COMMUNITY_ROOM)
            self.client.disconnect()

    def _on_connect(self):
        logger.info("Connected to %s, joining %s", self.url, COMMUNITY_ROOM)
        self.client.emit("join-community", COMMUNITY_ROOM)

    def _on_disconnect(self, reason=None):
        logger.info("Disconnected from %s (%s)", self.url, reason)

    def handle_new_member(self, event):
        member = event.get("data") or {}
        with self._lock:
            self.members.insert(0, member)
            self._toasts.insert(0, (member, self.clock()))
            del self._toasts[MAX_TOASTS:]

    def handle_member_update(self, event):
        user_id = event.get("userId")
        data = event.get("data") or {}
        with self._lock:
            self.members = [
                dict(member, **data) if member.get("id") == user_id else member
                for member in self.members
            ]

    @property
    def recent_joins(self):
        """Toasts still on screen, newest first."""
        now = self.clock()
        with self._lock:
            self._toasts = [(m, shown) for m, shown in self._toasts if now - shown < TOAST_SECONDS]
            return [member for member, _ in self._toasts]

    def dismiss(self, member_id):
        with self._lock:
            self._toasts = [(m, shown) for m, shown in self._toasts if m.get("id") != member_id]

    def dismiss_all(self):
        with self._lock:
            self._toasts = []
