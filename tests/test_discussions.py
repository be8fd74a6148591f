from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


def create_discussion(headers, title="How to study?", content="Tips please", category="academic"):
    resp = client.post("/api/discussions", headers=headers, json={
        "title": title, "content": content, "category": category,
    })
    assert resp.status_code == 201
    return resp.json()["discussion"]


def add_comment(headers, discussion_id, content, parent_id=None):
    body = {"content": content}
    if parent_id:
        body["parentId"] = parent_id
    return client.post(f"/api/discussions/{discussion_id}/comments", headers=headers, json=body)


def test_create_and_list_discussions(make_user):
    _, headers = make_user(name="Poster")
    create_discussion(headers, title="Career advice", content="Jobs?", category="career")
    create_discussion(headers, title="Study tips", content="Exams soon", category="academic")

    resp = client.get("/api/discussions")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "success"
    assert data["totalCount"] == 2
    assert data["discussions"][0]["user"]["name"] == "Poster"

    data = client.get("/api/discussions", params={"category": "career"}).json()
    assert [d["title"] for d in data["discussions"]] == ["Career advice"]

    data = client.get("/api/discussions", params={"category": "all"}).json()
    assert data["totalCount"] == 2

    data = client.get("/api/discussions", params={"search": "EXAMS"}).json()
    assert [d["title"] for d in data["discussions"]] == ["Study tips"]

    data = client.get("/api/discussions", params={"sortBy": "title", "sortOrder": "ASC"}).json()
    assert [d["title"] for d in data["discussions"]] == ["Career advice", "Study tips"]


def test_create_discussion_validation(make_user):
    _, headers = make_user()
    resp = client.post("/api/discussions", headers=headers, json={"title": "x", "content": "y", "category": "gossip"})
    assert resp.status_code == 400
    assert client.post("/api/discussions", json={"title": "x", "content": "y", "category": "general"}).status_code == 401


def test_detail_increments_view_count(make_user):
    _, headers = make_user()
    discussion = create_discussion(headers)

    first = client.get(f"/api/discussions/{discussion['id']}").json()["discussion"]
    second = client.get(f"/api/discussions/{discussion['id']}").json()["discussion"]
    assert first["viewCount"] == 1
    assert second["viewCount"] == 2
    assert client.get("/api/discussions/missing").status_code == 404


def test_comment_tree(make_user):
    _, headers = make_user(name="Asker")
    discussion = create_discussion(headers)
    other_discussion = create_discussion(headers, title="Other")

    top = add_comment(headers, discussion["id"], "Top level").json()["comment"]
    reply = add_comment(headers, discussion["id"], "Reply", parent_id=top["id"]).json()["comment"]
    assert reply["parentId"] == top["id"]

    # 답글의 답글은 최상위 댓글 아래로
    nested = add_comment(headers, discussion["id"], "Nested", parent_id=reply["id"]).json()["comment"]
    assert nested["parentId"] == top["id"]

    resp = add_comment(headers, other_discussion["id"], "Wrong thread", parent_id=top["id"])
    assert resp.status_code == 400
    assert add_comment(headers, discussion["id"], "Ghost", parent_id="missing").status_code == 404

    detail = client.get(f"/api/discussions/{discussion['id']}").json()["discussion"]
    assert detail["commentCount"] == 3
    assert [c["content"] for c in detail["comments"]] == ["Top level"]
    assert [r["content"] for r in detail["comments"][0]["replies"]] == ["Reply", "Nested"]


def test_closed_discussion_rejects_comments(make_user):
    _, owner = make_user()
    _, other = make_user()
    discussion = create_discussion(owner)

    assert client.patch(f"/api/discussions/{discussion['id']}/close", headers=other).status_code == 403
    resp = client.patch(f"/api/discussions/{discussion['id']}/close", headers=owner)
    assert resp.status_code == 200
    assert resp.json()["isClosed"] is True

    resp = add_comment(other, discussion["id"], "Too late")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "This discussion is closed"


def test_pin_toggle_and_upvote(make_user):
    _, owner = make_user()
    _, other = make_user()
    discussion = create_discussion(owner)

    resp = client.patch(f"/api/discussions/{discussion['id']}/pin", headers=owner)
    assert resp.json()["isPinned"] is True
    assert resp.json()["message"] == "Discussion pinned successfully"
    resp = client.patch(f"/api/discussions/{discussion['id']}/pin", headers=owner)
    assert resp.json()["isPinned"] is False
    assert client.patch(f"/api/discussions/{discussion['id']}/pin", headers=other).status_code == 403

    assert client.post(f"/api/discussions/{discussion['id']}/upvote").status_code == 401
    assert client.post(f"/api/discussions/{discussion['id']}/upvote", headers=other).json()["upvoteCount"] == 1
    assert client.post(f"/api/discussions/{discussion['id']}/upvote", headers=owner).json()["upvoteCount"] == 2
    assert client.post("/api/discussions/missing/upvote", headers=owner).status_code == 404


def test_update_and_delete_discussion(make_user):
    _, owner = make_user()
    _, other = make_user()
    discussion = create_discussion(owner)
    add_comment(other, discussion["id"], "comment")

    assert client.put(f"/api/discussions/{discussion['id']}", headers=other, json={"title": "x"}).status_code == 403
    resp = client.put(f"/api/discussions/{discussion['id']}", headers=owner, json={"title": "New title"})
    assert resp.status_code == 200
    assert resp.json()["discussion"]["title"] == "New title"
    assert resp.json()["discussion"]["content"] == "Tips please"

    assert client.delete(f"/api/discussions/{discussion['id']}", headers=other).status_code == 403
    resp = client.delete(f"/api/discussions/{discussion['id']}", headers=owner)
    assert resp.status_code == 200
    assert client.get(f"/api/discussions/{discussion['id']}").status_code == 404


def test_comment_edit_delete_and_upvote(make_user):
    _, owner = make_user()
    _, other = make_user()
    discussion = create_discussion(owner)
    top = add_comment(owner, discussion["id"], "Top").json()["comment"]
    add_comment(other, discussion["id"], "Reply", parent_id=top["id"])

    assert client.put(f"/api/discussions/comments/{top['id']}", headers=other, json={"content": "x"}).status_code == 403
    resp = client.put(f"/api/discussions/comments/{top['id']}", headers=owner, json={"content": "Edited"})
    assert resp.json()["comment"]["content"] == "Edited"
    assert resp.json()["comment"]["isEdited"] is True

    resp = client.post(f"/api/discussions/comments/{top['id']}/upvote", headers=other)
    assert resp.json()["upvoteCount"] == 1

    assert client.delete(f"/api/discussions/comments/{top['id']}", headers=other).status_code == 403
    assert client.delete(f"/api/discussions/comments/{top['id']}", headers=owner).status_code == 200

    detail = client.get(f"/api/discussions/{discussion['id']}").json()["discussion"]
    assert detail["comments"] == []
    assert detail["commentCount"] == 0
