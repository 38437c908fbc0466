"""Integration tests for admin API endpoints"""

import pytest
from uuid import uuid4
from fastapi import status

from tests.conftest import get_auth_headers


async def post_job(client, owner, payload):
    response = await client.post("/api/jobs", json=payload, headers=get_auth_headers(owner))
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


class TestAdminAccess:
    
    @pytest.mark.parametrize("method,path", [
        ("GET", "/api/admin/dashboard"),
        ("GET", "/api/admin/users"),
        ("GET", "/api/admin/jobs"),
        ("DELETE", f"/api/admin/users/{uuid4()}"),
    ])
    async def test_non_admins_are_refused(self, client, client_user, freelancer, method, path):
        response = await client.request(method, path)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        
        for user in (client_user, freelancer):
            response = await client.request(method, path, headers=get_auth_headers(user))
            assert response.status_code == status.HTTP_403_FORBIDDEN


class TestDashboard:
    
    async def test_dashboard_counts(self, client, admin_user, client_user, freelancer, sample_job_data):
        await post_job(client, client_user, sample_job_data)
        await post_job(client, client_user, {**sample_job_data, "title": "Blog writer wanted", "category": "Writing"})
        
        response = await client.get("/api/admin/dashboard", headers=get_auth_headers(admin_user))
        
        assert response.status_code == status.HTTP_200_OK
        stats = response.json()
        assert stats["totalUsers"] == 3
        assert stats["totalJobs"] == 2
        assert stats["activeJobs"] == 2
        assert stats["completedJobs"] == 0
        assert stats["usersByRole"] == {"admin": 1, "client": 1, "freelancer": 1}
        assert stats["jobsByCategory"] == {"Design": 1, "Writing": 1}


class TestAdminUsers:
    
    async def test_list_users(self, client, admin_user, client_user, freelancer):
        response = await client.get("/api/admin/users", headers=get_auth_headers(admin_user))
        
        body = response.json()
        assert len(body["items"]) == 3
        assert body["pagination"]["total"] == 1
        assert all("passwordHash" not in user and "password_hash" not in user for user in body["items"])
        
        response = await client.get(
            "/api/admin/users", params={"role": "freelancer"}, headers=get_auth_headers(admin_user)
        )
        assert [u["name"] for u in response.json()["items"]] == ["Fiona Freelancer"]
        
        response = await client.get(
            "/api/admin/users", params={"search": "carol"}, headers=get_auth_headers(admin_user)
        )
        assert [u["id"] for u in response.json()["items"]] == [str(client_user.id)]
    
    async def test_update_user(self, client, admin_user, freelancer):
        response = await client.put(
            f"/api/admin/users/{freelancer.id}",
            json={"isVerified": True},
            headers=get_auth_headers(admin_user)
        )
        
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["isVerified"] is True
        assert response.json()["role"] == "freelancer"
    
    async def test_update_unknown_user(self, client, admin_user):
        response = await client.put(
            f"/api/admin/users/{uuid4()}", json={"role": "client"}, headers=get_auth_headers(admin_user)
        )
        
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "User not found"
    
    async def test_delete_user_removes_their_jobs(
        self, client, admin_user, client_user, other_client, sample_job_data
    ):
        doomed = await post_job(client, client_user, sample_job_data)
        kept = await post_job(client, other_client, {**sample_job_data, "title": "Surviving design job"})
        
        response = await client.delete(f"/api/admin/users/{client_user.id}", headers=get_auth_headers(admin_user))
        
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "User deleted successfully"
        assert (await client.get(f"/api/jobs/{doomed['id']}")).status_code == status.HTTP_404_NOT_FOUND
        assert (await client.get(f"/api/jobs/{kept['id']}")).status_code == status.HTTP_200_OK
        
        # The deleted user's token no longer resolves
        response = await client.get("/api/auth/me", headers=get_auth_headers(client_user))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestAdminJobs:
    
    async def test_list_includes_inactive_jobs(self, client, admin_user, client_user, sample_job_data):
        job = await post_job(client, client_user, sample_job_data)
        await client.put(f"/api/admin/jobs/{job['id']}", json={"isActive": False}, headers=get_auth_headers(admin_user))
        
        response = await client.get("/api/admin/jobs", headers=get_auth_headers(admin_user))
        
        (item,) = response.json()["items"]
        assert item["isActive"] is False
    
    async def test_update_job_status(self, client, admin_user, client_user, sample_job_data):
        job = await post_job(client, client_user, sample_job_data)
        
        response = await client.put(
            f"/api/admin/jobs/{job['id']}", json={"status": "cancelled"}, headers=get_auth_headers(admin_user)
        )
        
        assert response.json()["status"] == "cancelled"
        assert response.json()["isActive"] is True
        
        response = await client.get(
            "/api/admin/jobs", params={"status": "cancelled"}, headers=get_auth_headers(admin_user)
        )
        assert [item["id"] for item in response.json()["items"]] == [job["id"]]
    
    async def test_invalid_job_status(self, client, admin_user, client_user, sample_job_data):
        job = await post_job(client, client_user, sample_job_data)
        
        response = await client.put(
            f"/api/admin/jobs/{job['id']}", json={"status": "paused"}, headers=get_auth_headers(admin_user)
        )
        
        assert response.status_code == status.HTTP_400_BAD_REQUEST
    
    async def test_delete_job(self, client, admin_user, client_user, sample_job_data):
        job = await post_job(client, client_user, sample_job_data)
        
        response = await client.delete(f"/api/admin/jobs/{job['id']}", headers=get_auth_headers(admin_user))
        assert response.status_code == status.HTTP_200_OK
        
        response = await client.delete(f"/api/admin/jobs/{job['id']}", headers=get_auth_headers(admin_user))
        assert response.status_code == status.HTTP_404_NOT_FOUND
