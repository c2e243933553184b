"""
Mero Tasbir - WSGI Application

This module:
- Initializes Django settings (which validate the environment on import)
- Exposes the WSGI callable for the application server
"""

import logging
import os
import sys

from django.core.exceptions import ImproperlyConfigured

# Configure logging early for startup diagnostics
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "merotasbir.settings")

try:
    from django.core.wsgi import get_wsgi_application
    application = get_wsgi_application()
except ImproperlyConfigured as e:
    logger.critical("Environment validation failed: %s", e)
    sys.exit(1)
