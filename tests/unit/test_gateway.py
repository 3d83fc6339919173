"""
Unit tests for the entity store gateway.
Tests the result contract: rows as dicts, failures as codes, never exceptions.
"""
import pytest

from campushub.core import errors
from campushub.db.gateway import EntityStoreGateway
from campushub.db.session import Database


@pytest.mark.unit
@pytest.mark.asyncio
class TestGatewayReads:
    """Test fetch_all and fetch_one."""
    
    async def test_fetch_all_unfiltered(self, gateway, student, teacher):
        result = await gateway.fetch_all("users")
        
        assert result.success
        assert {row["email"] for row in result.data} == {student["email"], teacher["email"]}
    
    async def test_fetch_all_with_filter(self, gateway, student, teacher):
        result = await gateway.fetch_all("users", {"role": "teacher"})
        
        assert result.success
        assert [row["id"] for row in result.data] == [teacher["id"]]
    
    async def test_fetch_one_returns_plain_row(self, gateway, student):
        result = await gateway.fetch_one("users", {"email": student["email"]})
        
        assert result.success
        assert result.data["id"] == student["id"]
        assert result.data["role"] == "student"  # enum values come back as strings
    
    async def test_fetch_one_no_rows_is_pgrst116(self, gateway):
        result = await gateway.fetch_one("users", {"id": "missing"})
        
        assert not result.success
        assert result.error.code == errors.NO_ROWS
        assert result.not_found
    
    async def test_fetch_one_multiple_rows_is_pgrst116(self, gateway, student, other_student):
        result = await gateway.fetch_one("users", {"role": "student"})
        
        assert result.error.code == errors.NO_ROWS
    
    async def test_unknown_table(self, gateway):
        result = await gateway.fetch_all("rsvps")
        
        assert not result.success
        assert result.error.code == errors.UNKNOWN_TABLE
    
    async def test_unknown_filter_column(self, gateway):
        result = await gateway.fetch_one("users", {"username": "x"})
        
        assert result.error.code == errors.UNKNOWN_COLUMN


@pytest.mark.unit
@pytest.mark.asyncio
class TestGatewayWrites:
    """Test insert, update and upsert."""
    
    async def test_insert_assigns_id_and_timestamps(self, gateway, student):
        result = await gateway.insert(
            "notifications",
            {"user_id": student["id"], "title": "Hi", "message": "Welcome"},
        )
        
        assert result.success
        assert result.data["id"]
        assert result.data["is_read"] is False
        assert result.data["created_at"] is not None
    
    async def test_insert_unique_violation(self, gateway, student):
        result = await gateway.insert(
            "users",
            {"email": student["email"], "hashed_password": "x", "role": "teacher"},
        )
        
        assert not result.success
        assert result.error.code == errors.UNIQUE_VIOLATION
    
    async def test_insert_unknown_column(self, gateway):
        result = await gateway.insert("users", {"email": "a@example.com", "nickname": "a"})
        
        assert result.error.code == errors.UNKNOWN_COLUMN
    
    async def test_insert_invalid_enum_value(self, gateway):
        result = await gateway.insert(
            "users",
            {"email": "a@example.com", "hashed_password": "x", "role": "admin"},
        )
        
        assert not result.success
        assert result.error.code == errors.CHECK_VIOLATION
    
    async def test_update_returns_changed_rows(self, gateway, student):
        result = await gateway.update("users", {"id": student["id"]}, {"branch": "CSE"})
        
        assert result.success
        assert len(result.data) == 1
        assert result.data[0]["branch"] == "CSE"
    
    async def test_update_without_match_is_empty_not_failure(self, gateway):
        result = await gateway.update("users", {"id": "missing"}, {"branch": "CSE"})
        
        assert result.success
        assert result.data == []
    
    async def test_update_requires_filter(self, gateway, student):
        result = await gateway.update("users", {}, {"branch": "CSE"})
        
        assert not result.success
    
    async def test_upsert_inserts_then_updates_in_place(self, gateway, student):
        first = await gateway.upsert(
            "settings", {"user_id": student["id"], "preferences": {"a": 1}}, on_conflict=("user_id",)
        )
        second = await gateway.upsert(
            "settings", {"user_id": student["id"], "preferences": {"b": 2}}, on_conflict=("user_id",)
        )
        
        assert first.success and second.success
        assert second.data["id"] == first.data["id"]
        assert second.data["preferences"] == {"b": 2}
        
        rows = await gateway.fetch_all("settings", {"user_id": student["id"]})
        assert len(rows.data) == 1
    
    async def test_insert_dangling_reference_is_foreign_key_violation(self, gateway, student):
        result = await gateway.insert(
            "registrations", {"user_id": student["id"], "event_id": "no-such-event", "status": "pending"}
        )
        
        assert not result.success
        assert result.error.code == errors.FOREIGN_KEY_VIOLATION
        assert (await gateway.fetch_all("registrations")).data == []


@pytest.mark.unit
@pytest.mark.asyncio
class TestGatewayWithoutConnection:
    """Calls on a handle that was never connected raise the same error."""
    
    async def test_fetch_one_raises_runtime_error(self):
        gateway = EntityStoreGateway(Database("sqlite+aiosqlite:///:memory:"))
        
        with pytest.raises(RuntimeError, match="not connected"):
            await gateway.fetch_one("users", {"id": "u1"})
    
    async def test_upsert_raises_runtime_error(self):
        gateway = EntityStoreGateway(Database("sqlite+aiosqlite:///:memory:"))
        
        with pytest.raises(RuntimeError, match="not connected"):
            await gateway.upsert("settings", {"user_id": "u1", "preferences": {}}, on_conflict=("user_id",))
