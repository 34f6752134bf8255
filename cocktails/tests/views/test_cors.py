from django.urls import reverse

from cocktails.tests.helpers import ApiTestCase

SPA_ORIGIN = "http://localhost:5173"


class CorsTests(ApiTestCase):
    url = reverse("cocktail_list")

    def test_allowed_origin_is_echoed_with_credentials(self):
        response = self.client.get(self.url, HTTP_ORIGIN=SPA_ORIGIN)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Access-Control-Allow-Origin"], SPA_ORIGIN)
        self.assertEqual(response["Access-Control-Allow-Credentials"], "true")

    def test_production_subdomain_is_allowed(self):
        response = self.client.get(self.url, HTTP_ORIGIN="https://app.bartendershub.com")
        self.assertEqual(response["Access-Control-Allow-Origin"], "https://app.bartendershub.com")

    def test_unknown_origin_gets_no_header(self):
        response = self.client.get(self.url, HTTP_ORIGIN="https://evil.example.com")
        self.assertEqual(response.status_code, 200)
        self.assertNotIn("Access-Control-Allow-Origin", response)

    def test_preflight(self):
        response = self.client.options(
            reverse("auth:login"),
            HTTP_ORIGIN=SPA_ORIGIN,
            HTTP_ACCESS_CONTROL_REQUEST_METHOD="POST",
            HTTP_ACCESS_CONTROL_REQUEST_HEADERS="authorization, content-type",
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Access-Control-Allow-Origin"], SPA_ORIGIN)
        self.assertIn("POST", response["Access-Control-Allow-Methods"])
        self.assertIn("authorization", response["Access-Control-Allow-Headers"])
