from __future__ import annotations

from jobtrackr.models.note import Note
from jobtrackr.models.story import Story


def test_story_crud(client, db_session):
    res = client.post(
        "/stories/",
        json={
            "title": "Resolved a prod incident",
            "situation": "Checkout down",
            "task": "Restore service",
            "action": "Rolled back",
            "result": "15 min outage",
            "tags": ["Incident", "incident", "Incident"],
        },
    )
    assert res.status_code == 200
    story = res.json()
    assert story["tags"] == ["Incident", "incident"]

    res = client.put(f"/stories/{story['id']}", json={"title": "Renamed", "tags": []})
    assert res.status_code == 200
    assert res.json()["title"] == "Renamed"
    assert res.json()["situation"] == ""
    assert res.json()["tags"] == []

    assert client.delete(f"/stories/{story['id']}").status_code == 400
    assert client.delete(f"/stories/{story['id']}", params={"confirm": "true"}).status_code == 200
    db_session.expire_all()
    assert db_session.query(Story).count() == 0


def test_story_search_by_title_and_tag(client):
    a = client.post("/stories/", json={"title": "Mentored juniors", "tags": ["Leadership"]}).json()
    b = client.post("/stories/", json={"title": "Cut AWS bill", "tags": ["Cost"]}).json()

    assert [s["id"] for s in client.get("/stories/", params={"q": "mentor"}).json()] == [a["id"]]
    assert [s["id"] for s in client.get("/stories/", params={"q": "cost"}).json()] == [b["id"]]
    assert len(client.get("/stories/").json()) == 2


def test_story_title_required(client, db_session):
    res = client.post("/stories/", json={"title": " "})
    assert res.status_code == 400
    assert db_session.query(Story).count() == 0


def test_note_crud_and_search(client, db_session):
    res = client.post("/notes/", json={"title": "Recruiter call", "content": "Ask about remote policy", "tags": ["Acme"]})
    assert res.status_code == 200
    note = res.json()

    assert [n["id"] for n in client.get("/notes/", params={"q": "remote"}).json()] == [note["id"]]
    assert [n["id"] for n in client.get("/notes/", params={"q": "acme"}).json()] == [note["id"]]
    assert client.get("/notes/", params={"q": "salary"}).json() == []

    res = client.put(f"/notes/{note['id']}", json={"title": "Recruiter call", "content": "Remote ok"})
    assert res.status_code == 200
    assert res.json()["content"] == "Remote ok"
    assert res.json()["tags"] == []

    assert client.delete(f"/notes/{note['id']}", params={"confirm": "true"}).status_code == 200
    db_session.expire_all()
    assert db_session.query(Note).count() == 0
