from fastapi.testclient import TestClient

from app.main import app
from app.models.post import Post

client = TestClient(app)


def create_post(headers):
    return client.post("/api/posts", headers=headers, json={"content": "Post"}).json()["id"]


def test_like_and_unlike(make_user, db_session):
    user_id, headers = make_user()
    post_id = create_post(headers)

    resp = client.post("/api/likes", headers=headers, json={"postId": post_id})
    assert resp.status_code == 201
    assert resp.json()["userId"] == user_id
    assert resp.json()["postId"] == post_id

    resp = client.post("/api/likes", headers=headers, json={"postId": post_id})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Post already liked"
    assert db_session.query(Post).filter(Post.id == post_id).first().likes_count == 1
    db_session.expire_all()

    resp = client.request("DELETE", "/api/likes", headers=headers, json={"postId": post_id})
    assert resp.status_code == 200
    assert db_session.query(Post).filter(Post.id == post_id).first().likes_count == 0

    resp = client.request("DELETE", "/api/likes", headers=headers, json={"postId": post_id})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Like not found"


def test_like_missing_post(make_user):
    _, headers = make_user()
    resp = client.post("/api/likes", headers=headers, json={"postId": "missing"})
    assert resp.status_code == 404


def test_likes_require_completed_profile(make_user):
    _, headers = make_user(completed=False)
    resp = client.post("/api/likes", headers=headers, json={"postId": "anything"})
    assert resp.status_code == 403


def test_comment_crud(make_user, db_session):
    _, author = make_user(name="Writer")
    _, other = make_user(name="Other")
    post_id = create_post(author)

    resp = client.post("/api/comments", headers=author, json={"postId": post_id, "content": "First!"})
    assert resp.status_code == 201
    comment = resp.json()
    assert comment["user"]["name"] == "Writer"

    resp = client.post("/api/comments", headers=author, json={"postId": post_id, "content": "   "})
    assert resp.status_code == 400
    resp = client.post("/api/comments", headers=author, json={"postId": "missing", "content": "x"})
    assert resp.status_code == 404

    # 목록 조회는 인증 없이 가능
    resp = client.get("/api/comments", params={"postId": post_id})
    assert resp.status_code == 200
    assert [c["content"] for c in resp.json()] == ["First!"]

    assert client.put(f"/api/comments/{comment['id']}", headers=other, json={"content": "nope"}).status_code == 403
    resp = client.put(f"/api/comments/{comment['id']}", headers=author, json={"content": "Edited"})
    assert resp.status_code == 200
    assert resp.json()["content"] == "Edited"

    assert client.delete(f"/api/comments/{comment['id']}", headers=other).status_code == 403
    assert client.delete(f"/api/comments/{comment['id']}", headers=author).status_code == 200
    assert client.delete(f"/api/comments/{comment['id']}", headers=author).status_code == 404
    assert db_session.query(Post).filter(Post.id == post_id).first().comments_count == 0


def test_comments_list_requires_post_id():
    assert client.get("/api/comments").status_code == 400
