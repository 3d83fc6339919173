"""
Integration tests for profile, user, event, notification and settings endpoints.
"""
import pytest
from httpx import AsyncClient


@pytest.mark.integration
@pytest.mark.asyncio
class TestProfileEndpoints:
    
    async def test_save_profile_creates_then_updates(self, client: AsyncClient, teacher_headers):
        missing = await client.get("/api/v1/profiles/me", headers=teacher_headers)
        assert missing.status_code == 404
        
        created = await client.put(
            "/api/v1/profiles/me", json={"department": "Physics"}, headers=teacher_headers
        )
        assert created.status_code == 200
        
        updated = await client.put(
            "/api/v1/profiles/me", json={"employee_id": "T-7"}, headers=teacher_headers
        )
        data = updated.json()
        assert data["role"] == "teacher"
        assert data["department"] == "Physics"
        assert data["employee_id"] == "T-7"
    
    async def test_profile_fields_must_match_role(self, client: AsyncClient, student_headers):
        response = await client.put(
            "/api/v1/profiles/me", json={"employee_id": "T-7"}, headers=student_headers
        )
        
        assert response.status_code == 422
    
    async def test_lookup_with_wrong_role_is_not_found(
        self, client: AsyncClient, student, student_headers, teacher_headers
    ):
        await client.put("/api/v1/profiles/me", json={"cgpa": 8.2}, headers=student_headers)
        
        right = await client.get(f"/api/v1/profiles/{student['id']}?role=student", headers=teacher_headers)
        wrong = await client.get(f"/api/v1/profiles/{student['id']}?role=teacher", headers=teacher_headers)
        
        assert right.status_code == 200
        assert right.json()["cgpa"] == 8.2
        assert wrong.status_code == 404


@pytest.mark.integration
@pytest.mark.asyncio
class TestUserAndEventEndpoints:
    
    async def test_update_me(self, client: AsyncClient, student_headers):
        response = await client.patch(
            "/api/v1/users/me", json={"branch": "CSE", "year": "2"}, headers=student_headers
        )
        
        assert response.status_code == 200
        assert response.json()["branch"] == "CSE"
    
    async def test_role_cannot_be_changed(self, client: AsyncClient, student_headers):
        response = await client.patch(
            "/api/v1/users/me", json={"role": "committee"}, headers=student_headers
        )
        
        assert response.status_code == 422
    
    async def test_committee_creates_event(self, client: AsyncClient, committee, committee_headers):
        response = await client.post(
            "/api/v1/events",
            json={
                "name": "Hackathon",
                "date": "2030-01-15",
                "time": "09:30:00",
                "location": "Lab 3"
            },
            headers=committee_headers,
        )
        
        assert response.status_code == 200
        assert response.json()["organizer_id"] == committee["id"]
        
        listed = await client.get("/api/v1/events")
        assert [e["name"] for e in listed.json()] == ["Hackathon"]
    
    async def test_student_cannot_create_event(self, client: AsyncClient, student_headers):
        response = await client.post(
            "/api/v1/events",
            json={"name": "X", "date": "2030-01-15", "time": "09:30:00", "location": "Y"},
            headers=student_headers,
        )
        
        assert response.status_code == 403
    
    async def test_event_not_found(self, client: AsyncClient):
        response = await client.get("/api/v1/events/missing")
        
        assert response.status_code == 404


@pytest.mark.integration
@pytest.mark.asyncio
class TestNotificationAndSettingsEndpoints:
    
    async def test_notification_round(self, client: AsyncClient, student, student_headers, teacher_headers):
        sent = await client.post(
            "/api/v1/notifications",
            json={"user_id": student["id"], "title": "Approved", "message": "You're in"},
            headers=teacher_headers,
        )
        assert sent.status_code == 200
        
        read = await client.post(f"/api/v1/notifications/{sent.json()['id']}/read", headers=student_headers)
        assert read.json()["is_read"] is True
        
        mine = await client.get("/api/v1/notifications/me", headers=student_headers)
        assert len(mine.json()) == 1
    
    async def test_settings_absent_then_saved(self, client: AsyncClient, student_headers):
        empty = await client.get("/api/v1/settings/me", headers=student_headers)
        assert empty.status_code == 200
        assert empty.json() is None
        
        await client.put("/api/v1/settings/me", json={"preferences": {"theme": "light", "lang": "en"}}, headers=student_headers)
        await client.put("/api/v1/settings/me", json={"preferences": {"theme": "dark"}}, headers=student_headers)
        
        response = await client.get("/api/v1/settings/me", headers=student_headers)
        assert response.json()["preferences"] == {"theme": "dark"}
