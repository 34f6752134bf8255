import os

import socketio
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'bartendershub.settings')

django_application = get_wsgi_application()

from cocktails.services.realtime import realtime_service  # noqa: E402  (needs configured settings)

realtime_service.initialize()

# Socket.IO traffic is served under /socket.io/, everything else goes to Django.
application = socketio.WSGIApp(realtime_service.sio, django_application)
