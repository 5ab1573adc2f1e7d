# =============================================================================
# Django Project Configuration Package
# =============================================================================
# This package contains the settings, URLs, WSGI application and Celery
# configuration of the marketplace ledger.
#
# Import Celery app to ensure it's loaded when Django starts, so that
# shared tasks bind to it.
# =============================================================================

from config.celery import app as celery_app

__all__ = ("celery_app",)
