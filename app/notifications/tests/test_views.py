"""
API tests for device token endpoints.

Test Classes:
    TestRegisterToken: POST /api/v1/notifications/register-token/
    TestUnregisterToken: POST /api/v1/notifications/unregister-token/
"""

from rest_framework import status

from notifications.models import DeviceToken

REGISTER_URL = "/api/v1/notifications/register-token/"
UNREGISTER_URL = "/api/v1/notifications/unregister-token/"


class TestRegisterToken:
    def test_registers_token(self, db, authenticated_client, user):
        response = authenticated_client.post(
            REGISTER_URL, {"token": "device-abc", "platform": "android"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["token"] == "device-abc"
        assert response.data["platform"] == "android"
        assert response.data["is_active"] is True
        assert response.data["user_id"] == user.pk
        assert DeviceToken.objects.filter(user=user, token="device-abc").exists()

    def test_platform_defaults_to_ios(self, db, authenticated_client):
        response = authenticated_client.post(
            REGISTER_URL, {"token": "device-abc"}, format="json"
        )

        assert response.data["platform"] == "ios"

    def test_reregistering_returns_same_record(self, db, authenticated_client):
        first = authenticated_client.post(REGISTER_URL, {"token": "t1"}, format="json")
        second = authenticated_client.post(REGISTER_URL, {"token": "t1"}, format="json")

        assert first.data["id"] == second.data["id"]

    def test_missing_token(self, db, authenticated_client):
        response = authenticated_client.post(REGISTER_URL, {}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_platform(self, db, authenticated_client):
        response = authenticated_client.post(
            REGISTER_URL, {"token": "t1", "platform": "symbian"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_requires_authentication(self, db, api_client):
        response = api_client.post(REGISTER_URL, {"token": "t1"}, format="json")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestUnregisterToken:
    def test_deactivates_token(self, db, authenticated_client, device_token):
        response = authenticated_client.post(
            UNREGISTER_URL, {"token": device_token.token}, format="json"
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        device_token.refresh_from_db()
        assert not device_token.is_active

    def test_unknown_token(self, db, authenticated_client):
        response = authenticated_client.post(
            UNREGISTER_URL, {"token": "missing"}, format="json"
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
