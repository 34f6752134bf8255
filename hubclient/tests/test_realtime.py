from unittest.mock import MagicMock

from django.test import SimpleTestCase

from hubclient.realtime import MAX_TOASTS, TOAST_SECONDS, CommunityListener


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class CommunityListenerTests(SimpleTestCase):
    def setUp(self):
        self.client = MagicMock(connected=True)
        self.clock = FakeClock()
        self.listener = CommunityListener(
            "http://localhost:8000",
            members=[{"id": 1, "name": "Old Timer", "cocktailsAdded": 2}],
            client=self.client,
            clock=self.clock,
        )

    def event(self, member_id):
        return {"type": "NEW_MEMBER", "data": {"id": member_id, "name": f"Member {member_id}"}}

    def test_joins_room_on_connect(self):
        handlers = {c.args[0]: c.args[1] for c in self.client.on.call_args_list}
        handlers["connect"]()
        self.client.emit.assert_called_once_with("join-community", "community")

    def test_new_member_prepends_and_toasts(self):
        self.listener.handle_new_member(self.event(2))
        self.assertEqual([m["id"] for m in self.listener.members], [2, 1])
        self.assertEqual([m["id"] for m in self.listener.recent_joins], [2])

    def test_toasts_are_capped(self):
        for member_id in range(2, 2 + MAX_TOASTS + 3):
            self.listener.handle_new_member(self.event(member_id))
        joins = self.listener.recent_joins
        self.assertEqual(len(joins), MAX_TOASTS)
        self.assertEqual(joins[0]["id"], 1 + MAX_TOASTS + 3)

    def test_toasts_expire(self):
        self.listener.handle_new_member(self.event(2))
        self.clock.now += TOAST_SECONDS
        self.assertEqual(self.listener.recent_joins, [])
        self.assertEqual(len(self.listener.members), 2)

    def test_dismiss(self):
        self.listener.handle_new_member(self.event(2))
        self.listener.handle_new_member(self.event(3))
        self.listener.dismiss(2)
        self.assertEqual([m["id"] for m in self.listener.recent_joins], [3])
        self.listener.dismiss_all()
        self.assertEqual(self.listener.recent_joins, [])

    def test_member_update_merges(self):
        self.listener.handle_member_update({"type": "MEMBER_UPDATE", "userId": 1, "data": {"cocktailsAdded": 3}})
        self.assertEqual(self.listener.members[0]["cocktailsAdded"], 3)
        self.assertEqual(self.listener.members[0]["name"], "Old Timer")

    def test_close_leaves_room(self):
        self.listener.close()
        self.client.emit.assert_called_once_with("leave-community", "community")
        self.client.disconnect.assert_called_once()
