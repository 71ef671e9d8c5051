"""
REST API access for propdesk.

- client: httpx wrapper carrying the session token
- resources: one wrapper class per API area
"""

from propdesk.api.client import ApiClient
from propdesk.api.resources import (
    AdminAPI,
    ApplicationsAPI,
    AuthAPI,
    ChatAPI,
    ContactAPI,
    HealthAPI,
    OwnerAPI,
    PropertiesAPI,
    RentPaymentsAPI,
    TenantAPI,
    ViewingsAPI,
)

__all__ = [
    "AdminAPI",
    "ApiClient",
    "ApplicationsAPI",
    "AuthAPI",
    "ChatAPI",
    "ContactAPI",
    "HealthAPI",
    "OwnerAPI",
    "PropertiesAPI",
    "RentPaymentsAPI",
    "TenantAPI",
    "ViewingsAPI",
]
