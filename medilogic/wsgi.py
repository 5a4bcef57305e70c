"""
WSGI config for medilogic project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "medilogic.settings")

application = get_wsgi_application()
