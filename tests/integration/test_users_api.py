"""Integration tests for profile endpoints."""

from sqlalchemy import func, select

from backend.app.db.models import SafetyProfile


class TestProfile:
    def test_get_profile(self, client, auth_headers, test_user):
        response = client.get("/users/profile", headers=auth_headers)

        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["id"] == str(test_user.user_id)
        assert user["firstName"] == "Test"
        assert user["safetyProfile"] is None

    def test_patch_profile(self, client, auth_headers):
        response = client.patch(
            "/users/profile",
            json={"firstName": "Grace", "phone": "+1 555 0100"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["firstName"] == "Grace"
        assert user["lastName"] == "Traveler"
        assert user["phone"] == "+1 555 0100"

    def test_patch_profile_rejects_empty_name(self, client, auth_headers):
        response = client.patch(
            "/users/profile", json={"firstName": ""}, headers=auth_headers
        )
        assert response.status_code == 400


class TestSafetyProfile:
    def test_upsert_never_duplicates(self, client, auth_headers, test_session, test_user):
        first = client.post(
            "/users/safety-profile",
            json={"isLGBTQ": True, "dietaryRestrictions": ["vegan"]},
            headers=auth_headers,
        )
        second = client.post(
            "/users/safety-profile",
            json={
                "isSoloFemale": True,
                "languageBarriers": ["Japanese"],
                "preferredBudgetLevel": "luxury",
                "travelStyle": "cultural",
            },
            headers=auth_headers,
        )

        assert first.status_code == second.status_code == 200
        first_profile = first.json()["data"]["safetyProfile"]
        second_profile = second.json()["data"]["safetyProfile"]
        assert first_profile["id"] == second_profile["id"]
        assert first_profile["isLGBTQ"] is True
        # Full replace: omitted fields return to defaults
        assert second_profile["isLGBTQ"] is False
        assert second_profile["dietaryRestrictions"] == []
        assert second_profile["languageBarriers"] == ["Japanese"]
        assert second_profile["preferredBudgetLevel"] == "luxury"
        assert second_profile["travelStyle"] == "cultural"

        total = test_session.execute(
            select(func.count()).select_from(SafetyProfile)
        ).scalar_one()
        assert total == 1

    def test_invalid_enum(self, client, auth_headers):
        response = client.post(
            "/users/safety-profile",
            json={"travelStyle": "chaotic"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "travelStyle"
