from django.urls import reverse

from cocktails.data.classic_cocktails import CLASSIC_COCKTAILS
from cocktails.models import AuditLog, Cocktail, User
from cocktails.tests.helpers import ApiTestCase, make_cocktail, make_user


class AdminAccessTests(ApiTestCase):
    def test_anonymous_is_401(self):
        self.assertEqual(self.client.get(reverse("moderation:metrics")).status_code, 401)

    def test_member_is_403(self):
        self.authenticate(make_user())
        response = self.client.get(reverse("moderation:metrics"))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Admin access required")


class AdminViewTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = make_user(username="chief", is_admin=True)
        self.authenticate(self.admin)

    def test_promote_demote_verify(self):
        member = make_user(username="member", is_verified=False)
        response = self.client.post(reverse("moderation:promote_user", args=[member.pk]), {"reason": "helpful"}, format="json")
        self.assertTrue(response.json()["user"]["isAdmin"])
        response = self.client.post(reverse("moderation:demote_user", args=[member.pk]))
        self.assertFalse(response.json()["user"]["isAdmin"])
        response = self.client.post(reverse("moderation:verify_user", args=[member.pk]))
        self.assertTrue(response.json()["user"]["isVerified"])
        self.assertEqual(AuditLog.objects.get(action="user.promote").reason, "helpful")

    def test_self_demote_rejected(self):
        response = self.client.post(reverse("moderation:demote_user", args=[self.admin.pk]))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "SELF_DEMOTE")

    def test_cocktail_moderation(self):
        cocktail = make_cocktail(is_approved=False)
        response = self.client.post(reverse("moderation:approve_cocktail", args=[cocktail.pk]))
        self.assertTrue(response.json()["cocktail"]["isApproved"])
        response = self.client.post(reverse("moderation:feature_cocktail", args=[cocktail.pk]))
        self.assertTrue(response.json()["cocktail"]["isFeatured"])
        response = self.client.post(reverse("moderation:unfeature_cocktail", args=[cocktail.pk]))
        self.assertFalse(response.json()["cocktail"]["isFeatured"])

    def test_bulk_users(self):
        members = [make_user(is_verified=False) for _ in range(2)]
        response = self.client.post(
            reverse("moderation:bulk_users"),
            {"ids": [str(m.pk) for m in members], "action": "verify"},
            format="json",
        )
        self.assertEqual((response.json()["matched"], response.json()["modified"]), (2, 2))
        self.assertEqual(User.objects.filter(is_verified=False).count(), 0)

    def test_bulk_invalid_action(self):
        response = self.client.post(reverse("moderation:bulk_cocktails"), {"ids": ["x"], "action": "burn"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "INVALID_ACTION")

    def test_bulk_requires_ids(self):
        response = self.client.post(reverse("moderation:bulk_cocktails"), {"ids": [], "action": "approve"}, format="json")
        self.assertEqual(response.status_code, 400)

    def test_bulk_cocktails(self):
        pending = [make_cocktail(is_approved=False) for _ in range(3)]
        response = self.client.post(
            reverse("moderation:bulk_cocktails"),
            {"ids": [str(c.pk) for c in pending], "action": "approve", "reason": "queue cleanup"},
            format="json",
        )
        self.assertEqual(response.json()["modified"], 3)
        self.assertEqual(Cocktail.objects.filter(is_approved=True).count(), 3)

    def test_seed_and_status(self):
        response = self.client.post(reverse("moderation:seed_classics"))
        self.assertEqual(response.json()["inserted"], len(CLASSIC_COCKTAILS))
        status = self.client.get(reverse("moderation:seed_status")).json()
        self.assertEqual(status["count"], len(CLASSIC_COCKTAILS))
        self.assertEqual(status["message"], "System classics seed status")

    def test_cache_and_metrics(self):
        response = self.client.post(reverse("moderation:invalidate_cache"))
        self.assertIn("invalidations", response.json()["cache"])
        metrics = self.client.get(reverse("moderation:metrics")).json()
        self.assertEqual(metrics["admins"], 1)
        self.assertIn("realtime", metrics)

    def test_audit_log(self):
        self.client.post(reverse("moderation:invalidate_cache"))
        self.client.post(reverse("moderation:seed_classics"))
        body = self.client.get(reverse("moderation:audit_log"), {"action": "cache.invalidate"}).json()
        self.assertEqual(body["total"], 1)
        self.assertEqual(body["data"][0]["actor"]["username"], "chief")
        self.assertEqual(body["data"][0]["targetType"], "system")
