from django.db import IntegrityError
from django.http import Http404
from django.test import SimpleTestCase
from rest_framework import exceptions, serializers

from cocktails.exceptions import ApiError, api_exception_handler, flatten_errors


class ExceptionHandlerTests(SimpleTestCase):
    def handle(self, exc):
        return api_exception_handler(exc, {'view': None})

    def test_api_error_envelope(self):
        response = self.handle(ApiError(429, 'Slow down', 'RATE_LIMIT', retryAfterSeconds=12))
        self.assertEqual(response.status_code, 429)
        self.assertEqual(response.data, {
            'success': False,
            'message': 'Slow down',
            'code': 'RATE_LIMIT',
            'error': {'message': 'Slow down', 'code': 'RATE_LIMIT', 'retryAfterSeconds': 12},
        })

    def test_validation_error_lists_fields(self):
        response = self.handle(serializers.ValidationError({'name': ['This field is required.']}))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Validation failed')
        self.assertEqual(response.data['error']['errors'], [{'field': 'name', 'message': 'This field is required.'}])

    def test_not_authenticated_is_401(self):
        exc = exceptions.NotAuthenticated()
        exc.auth_header = 'Bearer'
        response = self.handle(exc)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data['message'], 'Not authorized to access this route')
        self.assertEqual(response['WWW-Authenticate'], 'Bearer')

    def test_permission_denied_keeps_code(self):
        response = self.handle(exceptions.PermissionDenied('Email verification required', code='UNVERIFIED'))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data['code'], 'UNVERIFIED')

    def test_not_found(self):
        response = self.handle(Http404())
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data['code'], 'NOT_FOUND')

    def test_throttled_is_429_with_retry_after(self):
        response = self.handle(exceptions.Throttled(wait=29.2, detail='Too many requests'))
        self.assertEqual(response.status_code, 429)
        self.assertEqual(response.data['code'], 'RATE_LIMIT')
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['error']['retryAfterSeconds'], 30)
        self.assertEqual(response['Retry-After'], '30')

    def test_integrity_error_is_duplicate(self):
        response = self.handle(IntegrityError('UNIQUE constraint failed'))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Duplicate value entered')

    def test_unexpected_error_is_500(self):
        with self.assertLogs('cocktails.exceptions', level='ERROR'):
            response = self.handle(RuntimeError('boom'))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data['code'], 'SERVER_ERROR')

    def test_flatten_nested_errors(self):
        detail = {'ingredients': [{}, {'unit': ['This field is required.']}]}
        self.assertEqual(
            flatten_errors(detail),
            [{'field': 'ingredients[1].unit', 'message': 'This field is required.'}],
        )
