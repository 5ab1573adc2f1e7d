"""
URL configuration for the marketplace ledger.

URL Structure:
    /admin/                        - Django admin interface (ledger browsing)

The ledger has no public API: postings are triggered by the payment
webhook layer through payments.tasks.post_payment_completed_task.

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import path

urlpatterns = [
    path("admin/", admin.site.urls),
]
