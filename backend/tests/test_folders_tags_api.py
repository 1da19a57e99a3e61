async def test_folder_lifecycle(client, alice):
    response = await client.post("/api/folders", json={"name": "Work"}, headers=alice)
    assert response.status_code == 201
    folder = response.json()
    assert folder["color"] == "#627d98"

    await client.post("/api/folders", json={"name": "Archive", "color": "#ef4444"}, headers=alice)

    note = (await client.post(
        "/api/notes", json={"title": "report", "folder_id": folder["id"]}, headers=alice
    )).json()

    folders = (await client.get("/api/folders", headers=alice)).json()
    assert [f["name"] for f in folders] == ["Archive", "Work"]
    assert folders[1]["note_count"] == 1

    response = await client.delete(f"/api/folders/{folder['id']}", headers=alice)
    assert response.status_code == 200

    response = await client.get(f"/api/notes/{note['id']}", headers=alice)
    assert response.status_code == 200
    assert response.json()["folder_id"] is None


async def test_folders_are_private(client, alice, bob):
    folder = (await client.post("/api/folders", json={"name": "Mine"}, headers=alice)).json()

    assert (await client.get("/api/folders", headers=bob)).json() == []

    response = await client.delete(f"/api/folders/{folder['id']}", headers=bob)
    assert response.status_code == 400
    assert response.json()["detail"] == "Failed to delete folder"
    assert len((await client.get("/api/folders", headers=alice)).json()) == 1


async def test_tag_lifecycle(client, alice):
    tag = (await client.post("/api/tags", json={"name": "ideas"}, headers=alice)).json()
    assert tag["color"] == "#6366f1"

    note = (await client.post(
        "/api/notes", json={"title": "tagged", "tag_ids": [tag["id"]]}, headers=alice
    )).json()
    assert [t["name"] for t in note["tags"]] == ["ideas"]

    response = await client.get("/api/notes", params={"tag_id": tag["id"]}, headers=alice)
    assert [n["id"] for n in response.json()] == [note["id"]]

    response = await client.delete(f"/api/tags/{tag['id']}", headers=alice)
    assert response.status_code == 200

    response = await client.get(f"/api/notes/{note['id']}", headers=alice)
    assert response.status_code == 200
    assert response.json()["tags"] == []


async def test_tags_are_private(client, alice, bob):
    await client.post("/api/tags", json={"name": "secret"}, headers=alice)
    assert (await client.get("/api/tags", headers=bob)).json() == []
