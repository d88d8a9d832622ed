from __future__ import annotations

import pytest

from jobtrackr.models.job_application import JobApplication
from jobtrackr.models.prep_folder import PrepFolder
from jobtrackr.models.prep_item import PrepItem
from jobtrackr.models.story import Story
from jobtrackr.services.ownership import get_owned, owned_query


@pytest.fixture()
def seeded(users, client_for):
    """Each user gets one job, one story, one note and a folder holding one item."""
    out = {}
    for user in users:
        with client_for(user) as c:
            job = c.post("/jobs/", json={"role": f"Role {user.id}", "company": "Acme"}).json()
            story = c.post("/stories/", json={"title": f"Story {user.id}"}).json()
            note = c.post("/notes/", json={"title": f"Note {user.id}"}).json()
            folder = c.post("/prep/folders/", json={"name": f"Folder {user.id}"}).json()
            item = c.post(
                f"/prep/folders/{folder['id']}/items",
                json={"type": "note", "title": f"Item {user.id}"},
            ).json()
        out[user.id] = {"job": job, "story": story, "note": note, "folder": folder, "item": item}
    return out


def test_lists_only_show_own_rows(users, client_for, seeded):
    for user in users:
        mine = seeded[user.id]
        with client_for(user) as c:
            assert [j["id"] for j in c.get("/jobs/").json()] == [mine["job"]["id"]]
            assert [s["id"] for s in c.get("/stories/").json()] == [mine["story"]["id"]]
            assert [n["id"] for n in c.get("/notes/").json()] == [mine["note"]["id"]]
            assert [f["id"] for f in c.get("/prep/folders/").json()] == [mine["folder"]["id"]]
            assert [t["id"] for t in c.get("/prep/folders/tree").json()] == [mine["folder"]["id"]]
            assert [i["id"] for i in c.get("/prep/items/").json()] == [mine["item"]["id"]]
            assert c.get("/jobs/stats").json()["total"] == 1


@pytest.mark.parametrize(
    "kind,path",
    [
        ("job", "/jobs/{id}"),
        ("story", "/stories/{id}"),
        ("note", "/notes/{id}"),
        ("folder", "/prep/folders/{id}"),
        ("item", "/prep/items/{id}"),
    ],
)
def test_foreign_rows_look_missing(users, client_for, seeded, kind, path):
    user_a, user_b = users
    foreign = seeded[user_a.id][kind]
    url = path.format(id=foreign["id"])

    with client_for(user_b) as c:
        assert c.get(url).status_code == 404
        assert c.delete(url, params={"confirm": "true"}).status_code == 404

    with client_for(user_a) as c:
        assert c.get(url).status_code == 200


def test_foreign_updates_are_rejected(users, client_for, seeded, db_session):
    user_a, user_b = users
    theirs = seeded[user_a.id]

    with client_for(user_b) as c:
        res = c.put(f"/jobs/{theirs['job']['id']}", json={"role": "Hijacked", "company": "Evil"})
        assert res.status_code == 404
        res = c.put(f"/stories/{theirs['story']['id']}", json={"title": "Hijacked"})
        assert res.status_code == 404
        res = c.put(f"/prep/folders/{theirs['folder']['id']}", json={"name": "Hijacked"})
        assert res.status_code == 404
        res = c.put(f"/prep/items/{theirs['item']['id']}", json={"type": "note", "title": "Hijacked"})
        assert res.status_code == 404
        res = c.post(f"/prep/items/{theirs['item']['id']}/tags", json={"tag": "mine"})
        assert res.status_code == 404

    db_session.expire_all()
    assert db_session.get(JobApplication, theirs["job"]["id"]).role == f"Role {user_a.id}"
    assert db_session.get(Story, theirs["story"]["id"]).title == f"Story {user_a.id}"
    assert db_session.get(PrepFolder, theirs["folder"]["id"]).name == f"Folder {user_a.id}"
    item = db_session.get(PrepItem, theirs["item"]["id"])
    assert item.title == f"Item {user_a.id}"
    assert item.tags == []


def test_owned_query_helpers(users, seeded, db_session):
    user_a, user_b = users
    job_id = seeded[user_a.id]["job"]["id"]

    assert get_owned(db_session, JobApplication, job_id, user_a.id) is not None
    assert get_owned(db_session, JobApplication, job_id, user_b.id) is None
    assert owned_query(db_session, PrepItem, user_b.id).count() == 1
