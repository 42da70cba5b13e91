"""
Tests for User API Endpoints

Account administration by ADMIN.
"""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from childcare.core.enums import UserRole
from childcare.core.models import User


def _account(**overrides) -> dict:
    payload = {
        "username": "selam",
        "email": "Selam@Example.com",
        "password": "secret123",
        "fullName": "Selam Haile",
        "role": "GUARDIAN",
        "phoneNumber": "0911223344",
    }
    payload.update(overrides)
    return payload


class TestCreateAccount:
    async def test_create_success(self, client: AsyncClient, admin_user: User, auth_headers):
        response = await client.post(
            "/api/users/create", json=_account(), headers=auth_headers(admin_user)
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["username"] == "selam"
        assert data["email"] == "selam@example.com"
        assert data["phoneNumber"] == "+251911223344"
        assert data["role"] == "GUARDIAN"
        assert data["isActive"] is True
        assert "password" not in data

    async def test_duplicate_username(self, client: AsyncClient, admin_user: User, auth_headers):
        headers = auth_headers(admin_user)
        await client.post("/api/users/create", json=_account(), headers=headers)

        response = await client.post(
            "/api/users/create", json=_account(email="other@example.com"), headers=headers
        )

        assert response.status_code == 409
        assert response.json()["message"] == "username already exists"

    async def test_duplicate_email(self, client: AsyncClient, admin_user: User, auth_headers):
        headers = auth_headers(admin_user)
        await client.post("/api/users/create", json=_account(), headers=headers)

        response = await client.post(
            "/api/users/create", json=_account(username="selam2"), headers=headers
        )

        assert response.status_code == 409
        assert response.json()["message"] == "email already exists"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"phoneNumber": "+233501234567"},
            {"email": "not-an-email"},
            {"password": "abc"},
            {"role": "SUPERUSER"},
            {"username": "ab"},
        ],
    )
    async def test_invalid_input(
        self, client: AsyncClient, admin_user: User, auth_headers, overrides
    ):
        response = await client.post(
            "/api/users/create", json=_account(**overrides), headers=auth_headers(admin_user)
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.parametrize("role", [UserRole.MANAGER, UserRole.GUARDIAN, UserRole.FAMILY])
    async def test_non_admin_denied(self, client: AsyncClient, make_user, auth_headers, role):
        caller = await make_user(role)

        response = await client.post(
            "/api/users/create", json=_account(), headers=auth_headers(caller)
        )

        assert response.status_code == 403
        assert response.json() == {
            "success": False,
            "message": "Access denied. Insufficient permissions.",
        }


class TestReadAccounts:
    async def test_list_all(
        self, client: AsyncClient, admin_user: User, manager_user: User, auth_headers
    ):
        response = await client.get("/api/users", headers=auth_headers(admin_user))

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert {u["username"] for u in body["data"]} == {"admin", "manager"}

    async def test_employees_are_managers_and_guardians(
        self,
        client: AsyncClient,
        admin_user: User,
        manager_user: User,
        guardian_user: User,
        family_user: User,
        auth_headers,
    ):
        response = await client.get("/api/users/employees", headers=auth_headers(admin_user))

        assert response.status_code == 200
        assert {u["role"] for u in response.json()["data"]} == {"MANAGER", "GUARDIAN"}

    async def test_manager_can_read_single_account(
        self, client: AsyncClient, manager_user: User, guardian_user: User, auth_headers
    ):
        response = await client.get(
            f"/api/users/{guardian_user.id}", headers=auth_headers(manager_user)
        )

        assert response.status_code == 200
        assert response.json()["data"]["username"] == "guardian"

    async def test_unknown_account(self, client: AsyncClient, admin_user: User, auth_headers):
        response = await client.get(f"/api/users/{uuid4()}", headers=auth_headers(admin_user))

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


class TestModifyAccounts:
    async def test_update_only_provided_fields(
        self, client: AsyncClient, admin_user: User, guardian_user: User, auth_headers
    ):
        response = await client.put(
            f"/api/users/{guardian_user.id}",
            json={"fullName": "Renamed Guardian"},
            headers=auth_headers(admin_user),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["fullName"] == "Renamed Guardian"
        assert data["username"] == "guardian"
        assert data["role"] == "GUARDIAN"

    async def test_update_to_taken_username(
        self,
        client: AsyncClient,
        admin_user: User,
        manager_user: User,
        guardian_user: User,
        auth_headers,
    ):
        response = await client.put(
            f"/api/users/{guardian_user.id}",
            json={"username": "manager"},
            headers=auth_headers(admin_user),
        )

        assert response.status_code == 409

    async def test_blank_full_name_rejected(
        self, client: AsyncClient, admin_user: User, guardian_user: User, auth_headers
    ):
        headers = auth_headers(admin_user)
        guardian_id, original_name = guardian_user.id, guardian_user.full_name

        response = await client.put(
            f"/api/users/{guardian_id}", json={"fullName": "   "}, headers=headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "fullName: Full name is required"
        lookup = await client.get(f"/api/users/{guardian_id}", headers=headers)
        assert lookup.json()["data"]["fullName"] == original_name

    async def test_deactivate_account(
        self, client: AsyncClient, admin_user: User, guardian_user: User, auth_headers
    ):
        response = await client.put(
            f"/api/users/{guardian_user.id}/status",
            json={"isActive": False},
            headers=auth_headers(admin_user),
        )

        assert response.status_code == 200
        assert response.json()["data"]["isActive"] is False

        # The deactivated account's token stops working right away
        profile = await client.get("/api/auth/profile", headers=auth_headers(guardian_user))
        assert profile.status_code == 401

    async def test_delete_account(
        self, client: AsyncClient, admin_user: User, guardian_user: User, auth_headers
    ):
        headers = auth_headers(admin_user)

        response = await client.delete(f"/api/users/{guardian_user.id}", headers=headers)

        assert response.status_code == 200
        assert response.json()["message"] == "User deleted successfully"
        lookup = await client.get(f"/api/users/{guardian_user.id}", headers=headers)
        assert lookup.status_code == 404

    async def test_delete_referenced_account(
        self,
        client: AsyncClient,
        admin_user: User,
        manager_user: User,
        family_user: User,
        make_child,
        auth_headers,
    ):
        child = await make_child(family_user)
        child_id, parent_id = child.id, family_user.id
        headers, staff = auth_headers(admin_user), auth_headers(manager_user)

        response = await client.delete(f"/api/users/{parent_id}", headers=headers)

        assert response.status_code == 409
        assert response.json()["message"] == (
            "User is referenced by other records; deactivate the account instead"
        )
        account = await client.get(f"/api/users/{parent_id}", headers=headers)
        assert account.status_code == 200
        registered = await client.get(f"/api/children/{child_id}", headers=staff)
        assert registered.status_code == 200
        assert registered.json()["data"]["parentId"] == str(parent_id)

    async def test_cannot_delete_self(self, client: AsyncClient, admin_user: User, auth_headers):
        response = await client.delete(
            f"/api/users/{admin_user.id}", headers=auth_headers(admin_user)
        )

        assert response.status_code == 400
