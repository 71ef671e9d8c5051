"""
Resource wrappers, one per API area.

Each method is a direct call to one endpoint; query parameters are passed
through untouched.
"""

from typing import Any, Optional

from propdesk.api.client import ApiClient

Params = Optional[dict[str, Any]]


class _Resource:
    def __init__(self, client: ApiClient):
        self.client = client


class AuthAPI(_Resource):
    def login(self, email: str, password: str) -> dict:
        return self.client.post("/auth/login", {"email": email, "password": password})

    def register_tenant(self, data: dict) -> dict:
        return self.client.post("/auth/register/tenant", data)

    def register_owner(self, data: dict) -> dict:
        return self.client.post("/auth/register/owner", data)

    def get_current_user(self) -> dict:
        return self.client.get("/auth/me")

    def update_profile(self, data: dict) -> dict:
        return self.client.put("/auth/profile", data)

    def change_password(self, current_password: str, new_password: str) -> dict:
        return self.client.put(
            "/auth/change-password",
            {"currentPassword": current_password, "newPassword": new_password},
        )

    def forgot_password(self, email: str) -> dict:
        return self.client.post("/auth/forgot-password", {"email": email})

    def reset_password(
        self, token: str, password: str, confirm_password: Optional[str] = None
    ) -> dict:
        data = {"token": token, "password": password}
        if confirm_password is not None:
            data["confirmPassword"] = confirm_password
        return self.client.post("/auth/reset-password", data)

    def logout(self) -> dict:
        return self.client.post("/auth/logout")


class PropertiesAPI(_Resource):
    def get_all(self, params: Params = None) -> dict:
        return self.client.get("/properties", params)

    def get_by_id(self, property_id: str) -> dict:
        return self.client.get(f"/properties/{property_id}")

    def add_to_favorites(self, property_id: str) -> dict:
        return self.client.post(f"/properties/{property_id}/favorite")

    def remove_from_favorites(self, property_id: str) -> dict:
        return self.client.delete(f"/properties/{property_id}/favorite")

    def get_favorites(self) -> dict:
        return self.client.get("/properties/favorites/list")


class ApplicationsAPI(_Resource):
    def create(self, data: dict) -> dict:
        return self.client.post("/applications", data)

    def update_status(self, application_id: str, status: str) -> dict:
        return self.client.put(
            f"/applications/{application_id}/status", {"status": status}
        )


class ViewingsAPI(_Resource):
    def create(self, data: dict) -> dict:
        return self.client.post("/viewings", data)

    def get_all(self) -> dict:
        return self.client.get("/viewings")

    def cancel(self, viewing_id: str) -> dict:
        return self.client.put(f"/viewings/{viewing_id}/cancel")


class ChatAPI(_Resource):
    def get_or_create_room(
        self, recipient_id: str, recipient_type: str, room_type: str
    ) -> dict:
        return self.client.post(
            "/chat/rooms",
            {
                "recipientId": recipient_id,
                "recipientType": recipient_type,
                "roomType": room_type,
            },
        )

    def get_rooms(self) -> dict:
        return self.client.get("/chat/rooms")

    def get_messages(self, room_id: str, params: Params = None) -> dict:
        return self.client.get(f"/chat/rooms/{room_id}/messages", params)

    def send_message(
        self,
        room_id: str,
        message: str,
        message_type: Optional[str] = None,
        attachment_url: Optional[str] = None,
    ) -> dict:
        data: dict[str, Any] = {"roomId": room_id, "message": message}
        if message_type:
            data["messageType"] = message_type
        if attachment_url:
            data["attachmentUrl"] = attachment_url
        return self.client.post("/chat/messages", data)

    def mark_as_read(self, room_id: str) -> dict:
        return self.client.put(f"/chat/rooms/{room_id}/read")

    def get_unread_count(self) -> dict:
        return self.client.get("/chat/unread-count")


class ContactAPI(_Resource):
    def submit(self, data: dict) -> dict:
        return self.client.post("/contact/submit", data)

    def get_all_messages(self, params: Params = None) -> dict:
        return self.client.get("/contact/messages", params)

    def update_status(self, message_id: str, status: str) -> dict:
        return self.client.patch(
            f"/contact/messages/{message_id}/status", {"status": status}
        )


class TenantAPI(_Resource):
    def get_dashboard(self) -> dict:
        return self.client.get("/tenant/dashboard")

    def get_applications(self) -> dict:
        return self.client.get("/tenant/applications")

    def get_leases(self, params: Params = None) -> dict:
        return self.client.get("/tenant/leases", params)

    def get_maintenance_requests(self) -> dict:
        return self.client.get("/tenant/maintenance-requests")

    def create_maintenance_request(self, data: dict) -> dict:
        return self.client.post("/tenant/maintenance-requests", data)

    def get_move_permits(self, params: Params = None) -> dict:
        return self.client.get("/tenant/move-permits", params)

    def cancel_move_permit(self, permit_id: str) -> dict:
        return self.client.put(f"/tenant/move-permits/{permit_id}/cancel")


class OwnerAPI(_Resource):
    def get_dashboard(self) -> dict:
        return self.client.get("/owner/dashboard")

    def get_properties(self, params: Params = None) -> dict:
        return self.client.get("/owner/properties", params)

    def get_tenants(self) -> dict:
        return self.client.get("/owner/tenants")

    def get_applications(self, params: Params = None) -> dict:
        return self.client.get("/owner/applications", params)

    def get_leases(self, params: Params = None) -> dict:
        return self.client.get("/owner/leases", params)

    def get_financials(self, params: Params = None) -> dict:
        return self.client.get("/owner/financials", params)

    def get_maintenance_requests(self, params: Params = None) -> dict:
        return self.client.get("/owner/maintenance-requests", params)

    def update_maintenance_request(
        self, request_id: str, status: str, assigned_to: Optional[str] = None
    ) -> dict:
        data = {"status": status}
        if assigned_to:
            data["assignedTo"] = assigned_to
        return self.client.put(f"/owner/maintenance-requests/{request_id}", data)

    def get_move_permits(self, params: Params = None) -> dict:
        return self.client.get("/owner/move-permits", params)

    def update_move_permit_status(
        self, permit_id: str, status: str, status_reason: Optional[str] = None
    ) -> dict:
        data = {"status": status}
        if status_reason:
            data["statusReason"] = status_reason
        return self.client.put(f"/owner/move-permits/{permit_id}/status", data)


class RentPaymentsAPI(_Resource):
    def get_payments(self, params: Params = None) -> dict:
        return self.client.get("/rent-payments", params)


class AdminAPI(_Resource):
    def get_dashboard(self) -> dict:
        return self.client.get("/admin/dashboard")

    def get_owners(self, params: Params = None) -> dict:
        return self.client.get("/admin/owners", params)

    def get_pending_owners(self) -> dict:
        return self.client.get("/admin/owners/pending")

    def approve_owner(self, owner_id: str) -> dict:
        return self.client.put(f"/admin/owners/{owner_id}/approve")

    def reject_owner(self, owner_id: str, reason: Optional[str] = None) -> dict:
        return self.client.put(f"/admin/owners/{owner_id}/reject", {"reason": reason})

    def get_all_properties(self, params: Params = None) -> dict:
        return self.client.get("/admin/properties", params)

    def get_all_applications(self, params: Params = None) -> dict:
        return self.client.get("/admin/applications", params)

    def get_all_tenants(self, params: Params = None) -> dict:
        return self.client.get("/admin/tenants", params)

    def update_property_status(self, property_id: str, status: str) -> dict:
        return self.client.put(
            f"/admin/properties/{property_id}/status", {"status": status}
        )


class HealthAPI(_Resource):
    """Server health lives at the backend root, outside the API prefix."""

    def __init__(self, client: ApiClient, backend_url: str):
        super().__init__(client)
        self.backend_url = backend_url

    def check(self) -> dict:
        return self.client.get(f"{self.backend_url}/health")
