from __future__ import annotations

from jobtrackr.models.prep_item import PrepItem


def _folder(client, name="Root"):
    res = client.post("/prep/folders/", json={"name": name})
    assert res.status_code == 201
    return res.json()


def test_story_and_note_have_separate_shapes(client):
    folder = _folder(client)

    res = client.post(
        f"/prep/folders/{folder['id']}/items",
        json={
            "type": "story",
            "title": "Shipped under pressure",
            "situation": "Deadline moved up",
            "task": "Ship v2",
            "action": "Cut scope",
            "result": "On time",
            "tags": ["Leadership", " Leadership "],
        },
    )
    assert res.status_code == 201
    story = res.json()
    assert story["type"] == "story"
    assert story["folder_id"] == folder["id"]
    assert story["situation"] == "Deadline moved up"
    assert story["result"] == "On time"
    assert story["tags"] == ["Leadership"]
    assert "content" not in story

    res = client.post(
        f"/prep/folders/{folder['id']}/items",
        json={"type": "note", "title": "Questions to ask", "content": "- team size\n- on-call"},
    )
    assert res.status_code == 201
    note = res.json()
    assert note["type"] == "note"
    assert note["content"].startswith("- team size")
    for field in ("situation", "task", "action", "result"):
        assert field not in note

    # Both kinds list together under the folder.
    res = client.get(f"/prep/folders/{folder['id']}/items")
    assert sorted(i["id"] for i in res.json()) == sorted([story["id"], note["id"]])


def test_item_requires_title_before_storage(client, db_session):
    folder = _folder(client)
    res = client.post(f"/prep/folders/{folder['id']}/items", json={"type": "note", "title": "  "})
    assert res.status_code == 400
    assert res.json()["message"] == "Title is required"
    assert db_session.query(PrepItem).count() == 0


def test_item_type_is_required(client):
    folder = _folder(client)
    res = client.post(f"/prep/folders/{folder['id']}/items", json={"title": "No type"})
    assert res.status_code == 422
    assert res.json()["error"] == "VALIDATION_ERROR"

    res = client.post(f"/prep/folders/{folder['id']}/items", json={"type": "todo", "title": "Bad type"})
    assert res.status_code == 422


def test_item_type_cannot_change(client):
    folder = _folder(client)
    note = client.post(f"/prep/folders/{folder['id']}/items", json={"type": "note", "title": "n"}).json()

    res = client.put(f"/prep/items/{note['id']}", json={"type": "story", "title": "n"})
    assert res.status_code == 400
    assert res.json()["message"] == "Item type cannot be changed"
    assert client.get(f"/prep/items/{note['id']}").json()["type"] == "note"


def test_update_replaces_the_whole_record(client):
    folder = _folder(client)
    story = client.post(
        f"/prep/folders/{folder['id']}/items",
        json={"type": "story", "title": "Old", "situation": "s", "task": "t", "tags": ["a", "b"]},
    ).json()

    res = client.put(
        f"/prep/items/{story['id']}",
        json={"type": "story", "title": "New", "action": "did it", "tags": ["b", "c"]},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "New"
    assert body["situation"] == ""
    assert body["task"] == ""
    assert body["action"] == "did it"
    assert body["tags"] == ["b", "c"]


def test_tag_add_and_remove_are_idempotent(client):
    folder = _folder(client)
    item = client.post(
        f"/prep/folders/{folder['id']}/items",
        json={"type": "note", "title": "n", "tags": ["Teamwork"]},
    ).json()

    res = client.post(f"/prep/items/{item['id']}/tags", json={"tag": "Leadership"})
    assert res.status_code == 200
    assert res.json()["tags"] == ["Teamwork", "Leadership"]

    res = client.post(f"/prep/items/{item['id']}/tags", json={"tag": "Leadership"})
    assert res.status_code == 200
    assert res.json()["tags"] == ["Teamwork", "Leadership"]

    res = client.delete(f"/prep/items/{item['id']}/tags/Teamwork")
    assert res.status_code == 200
    assert res.json()["tags"] == ["Leadership"]

    res = client.delete(f"/prep/items/{item['id']}/tags/Teamwork")
    assert res.status_code == 200
    assert res.json()["tags"] == ["Leadership"]


def test_list_items_filters(client):
    f1 = _folder(client, "One")
    f2 = _folder(client, "Two")
    s = client.post(
        f"/prep/folders/{f1['id']}/items",
        json={"type": "story", "title": "Conflict with PM", "tags": ["Conflict"]},
    ).json()
    n = client.post(
        f"/prep/folders/{f2['id']}/items",
        json={"type": "note", "title": "Salary research", "content": "levels.fyi", "tags": ["Money"]},
    ).json()

    all_items = client.get("/prep/items/").json()
    assert sorted(i["id"] for i in all_items) == sorted([s["id"], n["id"]])

    assert [i["id"] for i in client.get("/prep/items/", params={"type": "note"}).json()] == [n["id"]]
    assert [i["id"] for i in client.get("/prep/items/", params={"tag": "Conflict"}).json()] == [s["id"]]
    assert [i["id"] for i in client.get("/prep/items/", params={"q": "levels"}).json()] == [n["id"]]
    assert [i["id"] for i in client.get("/prep/items/", params={"q": "mone"}).json()] == [n["id"]]
    assert client.get("/prep/items/", params={"tag": "Nope"}).json() == []


def test_delete_item_requires_confirmation(client, db_session):
    folder = _folder(client)
    item = client.post(f"/prep/folders/{folder['id']}/items", json={"type": "note", "title": "n"}).json()

    assert client.delete(f"/prep/items/{item['id']}").status_code == 400
    assert db_session.query(PrepItem).count() == 1

    res = client.delete(f"/prep/items/{item['id']}", params={"confirm": "true"})
    assert res.status_code == 200
    assert res.json()["message"] == "Item deleted"
    db_session.expire_all()
    assert db_session.query(PrepItem).count() == 0


def test_search_covers_every_story_field(client):
    folder = _folder(client)
    story = client.post(
        f"/prep/folders/{folder['id']}/items",
        json={
            "type": "story",
            "title": "Platform rewrite",
            "situation": "monolith",
            "task": "kubernetes",
            "action": "strangler",
            "result": "latency",
        },
    ).json()

    for term in ("monolith", "kubernetes", "strangler", "latency"):
        res = client.get("/prep/items/", params={"q": term})
        assert [i["id"] for i in res.json()] == [story["id"]], term


def test_adding_tag_past_the_cap_is_rejected(client):
    folder = _folder(client)
    full = [f"t{i}" for i in range(50)]
    item = client.post(
        f"/prep/folders/{folder['id']}/items",
        json={"type": "note", "title": "n", "tags": full},
    ).json()
    assert item["tags"] == full

    res = client.post(f"/prep/items/{item['id']}/tags", json={"tag": "new"})
    assert res.status_code == 400
    assert res.json()["error"] == "VALIDATION_ERROR"
    assert res.json()["message"].startswith("Too many tags")

    assert client.get(f"/prep/items/{item['id']}").json()["tags"] == full

    # An existing tag is still accepted as a no-op.
    res = client.post(f"/prep/items/{item['id']}/tags", json={"tag": "t0"})
    assert res.status_code == 200
    assert res.json()["tags"] == full
