from cocktails.data.classic_cocktails import CLASSIC_COCKTAILS, PLACEHOLDER_IMAGE
from cocktails.models import Cocktail
from cocktails.services import classics
from cocktails.tests.helpers import BartendersTestCase


class ClassicsSeedTests(BartendersTestCase):
    def test_status_before_seeding(self):
        status = classics.seed_status()
        self.assertIsNone(status["systemUser"])
        self.assertEqual(status["count"], 0)
        self.assertIsNone(status["latestUpdatedAt"])

    def test_seed_creates_system_user_and_classics(self):
        result = classics.seed_classics()
        self.assertEqual(result, {"inserted": len(CLASSIC_COCKTAILS), "updated": 0})
        system_user = classics.get_system_user()
        self.assertTrue(system_user.is_admin and system_user.is_verified)
        self.assertFalse(system_user.has_usable_password())
        cocktail = Cocktail.objects.get(name="Negroni")
        self.assertEqual(cocktail.created_by, system_user)
        self.assertTrue(cocktail.is_approved and cocktail.is_system)
        self.assertEqual(cocktail.category, "classics")
        self.assertEqual(cocktail.image_public_id, PLACEHOLDER_IMAGE["publicId"])

    def test_reseed_updates_in_place(self):
        classics.seed_classics()
        Cocktail.objects.filter(name="Negroni").update(name="NEGRONI", garnish="")
        result = classics.seed_classics()
        self.assertEqual(result, {"inserted": 0, "updated": len(CLASSIC_COCKTAILS)})
        self.assertEqual(Cocktail.objects.count(), len(CLASSIC_COCKTAILS))
        self.assertEqual(Cocktail.objects.get(name="Negroni").garnish, "Orange peel")

    def test_status_after_seeding(self):
        classics.seed_classics()
        status = classics.seed_status()
        self.assertEqual(status["systemUser"]["email"], classics.SYSTEM_EMAIL)
        self.assertEqual(status["count"], len(CLASSIC_COCKTAILS))
        self.assertEqual(status["names"], sorted(entry["name"] for entry in CLASSIC_COCKTAILS))
        self.assertIsNotNone(status["latestUpdatedAt"])
