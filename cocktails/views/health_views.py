from django.conf import settings
from django.http import HttpResponse, HttpResponseRedirect
from rest_framework.decorators import api_view

from cocktails.services.health import api_status
from cocktails.utils.http import success_response


@api_view(['GET'])
def health(request):
    status = api_status()
    return success_response(None, status)


@api_view(['GET'])
def api_root(request):
    return success_response(None, {'message': 'Welcome to BartendersHub API!', 'version': '1.0.0'})


def verify_email_redirect(request, token):
    """Forward verification links that hit the API host to the frontend route."""
    base = settings.FRONTEND_URL_PROD or settings.FRONTEND_URL
    if base:
        query = request.META.get('QUERY_STRING')
        target = f"{base.rstrip('/')}/verify-email/{token}"
        return HttpResponseRedirect(f"{target}?{query}" if query else target)
    return HttpResponse(
        '<h1>Email Verification Redirect Not Configured</h1>'
        '<p>Set FRONTEND_URL so verification links can be forwarded to the frontend.</p>',
        content_type='text/html',
    )
