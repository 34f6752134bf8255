"""Thin requests-based client for the /api endpoints."""

import logging

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"
DEFAULT_TIMEOUT = 10


class ApiClientError(Exception):
    """Raised for failure envelopes and transport errors."""

    def __init__(self, message, status=None, code="ERROR", payload=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.payload = payload or {}


class ApiClient:
    """Send authenticated JSON requests and unwrap the response envelope."""

    def __init__(self, base_url=DEFAULT_BASE_URL, token=None, session=None, timeout=DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self):
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(self, method, path, params=None, json=None):
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiClientError(str(exc)) from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not response.ok or body.get("success") is False:
            raise ApiClientError(
                body.get("message") or response.reason or "Request failed",
                status=response.status_code,
                code=body.get("code", "ERROR"),
                payload=body,
            )
        return body

    def get(self, path, **params):
        return self.request("GET", path, params=params or None)

    def post(self, path, data=None):
        return self.request("POST", path, json=data)

    def put(self, path, data=None):
        return self.request("PUT", path, json=data)

    def delete(self, path, data=None):
        return self.request("DELETE", path, json=data)

    # auth

    def login(self, email, password):
        """Log in and keep the returned token for later requests."""
        body = self.post("auth/login", {"email": email, "password": password})
        self.token = body["token"]
        return body["user"]

    # users

    def list_users(self, **params):
        return self.get("users", **params)

    def get_user(self, user_id):
        return self.get(f"users/{user_id}")["user"]

    def get_followers(self, user_id, **params):
        return self.get(f"users/{user_id}/followers", **params)

    def toggle_follow(self, user_id):
        return self.put(f"users/{user_id}/follow")

    # cocktails

    def list_cocktails(self, **params):
        return self.get("cocktails", **params)
