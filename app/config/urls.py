"""
URL configuration for the messenger project.

URL Structure:
    /admin/                        - Django admin interface

Realtime traffic does not go through these routes; WebSocket paths are
declared in messenger/routing.py and mounted in config/asgi.py.

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import path

urlpatterns = [
    path("admin/", admin.site.urls),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Messenger Admin"
admin.site.site_title = "Messenger Admin Portal"
admin.site.index_title = "Messages and favorites"
