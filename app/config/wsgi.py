"""
WSGI config for the messenger project.

Realtime delivery needs ASGI (config/asgi.py); WSGI only serves the admin
and plain HTTP views under a traditional server.

https://docs.djangoproject.com/en/5.2/howto/deployment/wsgi/
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
