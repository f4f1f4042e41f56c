"""Tests for tags endpoints."""
from httpx import AsyncClient


async def test_list_tags_empty(client: AsyncClient) -> None:
    """Test listing tags when none exist."""
    response = await client.get("/tags/")
    assert response.status_code == 200
    assert response.json() == []


async def test_create_tag(client: AsyncClient) -> None:
    """Test creating a tag returns 201 with the default color."""
    response = await client.post("/tags/", json={"name": "python"})
    assert response.status_code == 201

    data = response.json()
    assert isinstance(data["id"], int)
    assert data["name"] == "python"
    assert data["color"] == "#6366f1"


async def test_create_tag_with_color(client: AsyncClient) -> None:
    """Test that a supplied color is stored."""
    response = await client.post("/tags/", json={"name": "web", "color": "#ff8800"})
    assert response.status_code == 201
    assert response.json()["color"] == "#ff8800"


async def test_create_tag_duplicate_returns_409(client: AsyncClient) -> None:
    """Test that a duplicate name conflicts and only one tag exists."""
    first = await client.post("/tags/", json={"name": "work"})
    assert first.status_code == 201

    second = await client.post("/tags/", json={"name": "work"})
    assert second.status_code == 409
    assert "work" in second.json()["detail"]

    response = await client.get("/tags/")
    assert [tag["name"] for tag in response.json()] == ["work"]


async def test_create_tag_missing_name_returns_422(client: AsyncClient) -> None:
    """Test that request validation rejects a missing name."""
    response = await client.post("/tags/", json={"color": "#000000"})
    assert response.status_code == 422


async def test_create_tag_empty_name_returns_422(client: AsyncClient) -> None:
    """Test that request validation rejects an empty name."""
    response = await client.post("/tags/", json={"name": ""})
    assert response.status_code == 422


async def test_list_tags_alphabetical(client: AsyncClient) -> None:
    """Test that tags are sorted alphabetically."""
    for name in ["zebra", "apple", "banana"]:
        await client.post("/tags/", json={"name": name})

    response = await client.get("/tags/")
    assert response.status_code == 200
    assert [tag["name"] for tag in response.json()] == ["apple", "banana", "zebra"]


async def test_list_tags_response_format(client: AsyncClient) -> None:
    """Test that tags response has correct format."""
    await client.post("/tags/", json={"name": "test"})

    response = await client.get("/tags/")
    data = response.json()
    assert isinstance(data, list)
    assert len(data) == 1
    assert set(data[0]) == {"id", "name", "color"}


async def test_delete_tag(client: AsyncClient) -> None:
    """Test deleting a tag returns its id and removes it."""
    created = (await client.post("/tags/", json={"name": "temp"})).json()

    response = await client.delete(f"/tags/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"id": created["id"]}

    response = await client.get("/tags/")
    assert response.json() == []


async def test_delete_tag_not_found(client: AsyncClient) -> None:
    """Test deleting a missing tag returns 404."""
    response = await client.delete("/tags/9999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Tag 9999 not found"


async def test_delete_tag_invalid_id(client: AsyncClient) -> None:
    """Test that a non-integer id is rejected by validation."""
    response = await client.delete("/tags/abc")
    assert response.status_code == 422


async def test_delete_tag_huge_id_returns_400(client: AsyncClient) -> None:
    """Test that a tag id too large for storage is a client error."""
    response = await client.delete(f"/tags/{2**70}")
    assert response.status_code == 400
    assert "Invalid tag id" in response.json()["detail"]


async def test_delete_tag_removes_it_from_bookmarks(client: AsyncClient) -> None:
    """Test that deleting a tag detaches it from bookmarks without deleting them."""
    tag = (await client.post("/tags/", json={"name": "gone"})).json()
    bookmark = (
        await client.post(
            "/bookmarks/",
            json={"title": "Example", "url": "https://example.com", "tag_ids": [tag["id"]]},
        )
    ).json()

    await client.delete(f"/tags/{tag['id']}")

    response = await client.get(f"/bookmarks/{bookmark['id']}")
    assert response.status_code == 200
    assert response.json()["tags"] == []
