"""Integration tests for authentication API endpoints"""

import pytest
from fastapi import status

from backend.app.repositories.user_repository import UserRepository
from backend.app.services.auth_service import AuthService
from tests.conftest import TEST_PASSWORD, get_auth_headers


class TestRegister:
    
    async def test_register_freelancer(self, client):
        response = await client.post("/api/auth/register", json={
            "name": "Nina New",
            "email": "Nina@Example.com",
            "password": "secret1",
            "role": "freelancer",
        })
        
        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["accessToken"]
        assert body["refreshToken"]
        assert body["tokenType"] == "bearer"
        assert body["user"]["email"] == "nina@example.com"
        assert body["user"]["role"] == "freelancer"
        assert body["user"]["isVerified"] is False
        assert "password" not in body["user"]
    
    async def test_role_defaults_to_freelancer(self, client):
        response = await client.post("/api/auth/register", json={
            "name": "Default Role", "email": "default@example.com", "password": "secret1"
        })
        
        assert response.json()["user"]["role"] == "freelancer"
    
    async def test_admin_role_cannot_self_register(self, client):
        response = await client.post("/api/auth/register", json={
            "name": "Sneaky", "email": "sneaky@example.com", "password": "secret1", "role": "admin"
        })
        
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "role"
    
    async def test_duplicate_email(self, client, client_user):
        response = await client.post("/api/auth/register", json={
            "name": "Copy Cat", "email": client_user.email.upper(), "password": "secret1", "role": "client"
        })
        
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "User already exists"
        assert response.json()["errors"] == [{"field": "email", "message": "Email already registered"}]
    
    async def test_concurrent_duplicate_is_a_conflict(self, client, client_user, monkeypatch):
        # Another request registered the email after the existence check ran
        async def email_not_seen(self, email):
            return None
        monkeypatch.setattr(UserRepository, "get_by_email", email_not_seen)
        
        response = await client.post("/api/auth/register", json={
            "name": "Late Twin", "email": client_user.email, "password": "secret1", "role": "client"
        })
        
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == "The operation conflicts with existing data"
        assert "request_id" in response.json()
    
    @pytest.mark.parametrize("payload,field", [
        ({"name": "Short Pass", "email": "short@example.com", "password": "12345"}, "password"),
        ({"name": "Bad Email", "email": "not-an-email", "password": "secret1"}, "email"),
        ({"name": "", "email": "blank@example.com", "password": "secret1"}, "name"),
    ])
    async def test_invalid_registration(self, client, payload, field):
        response = await client.post("/api/auth/register", json=payload)
        
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert field in {error["field"] for error in response.json()["errors"]}


class TestLogin:
    
    async def test_login_returns_usable_token(self, client, client_user):
        response = await client.post("/api/auth/login", json={
            "email": client_user.email, "password": TEST_PASSWORD
        })
        
        assert response.status_code == status.HTTP_200_OK
        token = response.json()["accessToken"]
        
        me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.json()["id"] == str(client_user.id)
        assert me.json()["role"] == "client"
    
    @pytest.mark.parametrize("email,password", [
        ("client0@example.com", "wrong-password"),
        ("nobody@example.com", TEST_PASSWORD),
    ])
    async def test_bad_credentials(self, client, client_user, email, password):
        response = await client.post("/api/auth/login", json={"email": email, "password": password})
        
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Invalid credentials"


class TestRefresh:
    
    async def test_refresh_issues_new_pair(self, client, freelancer):
        refresh_token = AuthService().create_refresh_token(str(freelancer.id), freelancer.email)
        
        response = await client.post("/api/auth/refresh", json={"refreshToken": refresh_token})
        
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["user"]["id"] == str(freelancer.id)
    
    async def test_access_token_is_not_a_refresh_token(self, client, freelancer):
        access_token = AuthService().create_access_token(str(freelancer.id), freelancer.email, freelancer.role)
        
        response = await client.post("/api/auth/refresh", json={"refreshToken": access_token})
        
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestProfile:
    
    async def test_me_requires_token(self, client):
        response = await client.get("/api/auth/me")
        
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "No token, authorization denied"
    
    async def test_update_profile(self, client, freelancer):
        headers = get_auth_headers(freelancer)
        
        response = await client.put("/api/auth/profile", headers=headers, json={
            "profile": {"bio": "Mobile UX specialist", "skills": ["Figma", " Figma ", "Sketch"], "hourlyRate": 55}
        })
        
        assert response.status_code == status.HTTP_200_OK
        profile = response.json()["profile"]
        assert profile == {"bio": "Mobile UX specialist", "skills": ["Figma", "Sketch"], "hourlyRate": 55}
        
        # Omitted profile fields stay as they were
        response = await client.put("/api/auth/profile", headers=headers, json={
            "name": "Fiona F.", "profile": {"bio": "Senior mobile UX specialist"}
        })
        body = response.json()
        assert body["name"] == "Fiona F."
        assert body["profile"]["skills"] == ["Figma", "Sketch"]
        assert body["profile"]["hourlyRate"] == 55
    
    async def test_negative_hourly_rate(self, client, freelancer):
        response = await client.put("/api/auth/profile", headers=get_auth_headers(freelancer), json={
            "profile": {"hourlyRate": -5}
        })
        
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "profile.hourlyRate"


class TestServiceEndpoints:
    
    async def test_root(self, client):
        response = await client.get("/")
        
        assert response.json()["status"] == "running"
    
    async def test_health(self, client):
        response = await client.get("/health")
        
        assert response.json() == {"status": "healthy"}
    
    async def test_request_id_is_echoed(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "req-123"})
        
        assert response.headers["X-Request-ID"] == "req-123"
    
    async def test_unknown_route_uses_envelope(self, client):
        response = await client.get("/api/nothing-here")
        
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Not Found"
