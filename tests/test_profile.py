import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.discussion import Discussion
from app.models.discussion_comment import DiscussionComment
from app.models.post import Post
from app.models.user import User
from app.services.profile_service import _delete_discussion_comment_tree

client = TestClient(app)


def test_gate_blocks_incomplete_profile(make_user):
    """
    프로필 미완성 사용자는 게시글 API 에서 403 + redirect 정보
    """
    _, headers = make_user(role="student", completed=False)
    resp = client.get("/api/posts", headers=headers)
    assert resp.status_code == 403
    detail = resp.json()["detail"]
    assert detail["message"] == "Profile completion required"
    assert detail["requiresProfileCompletion"] is True
    assert detail["redirectTo"] == "/profile/setup"


def test_gate_without_token():
    assert client.get("/api/posts").status_code == 401


def test_gate_missing_user(make_user, db_session):
    user_id, headers = make_user(role="student")
    db_session.query(User).filter(User.id == user_id).delete()
    db_session.commit()
    # role 프로필 row 는 남아있어도 사용자가 없으면 404
    resp = client.get("/api/posts", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["detail"]["requiresAuth"] is True


def test_gate_requires_role_profile_row(make_user, db_session):
    user_id, headers = make_user(role="teacher", completed=False)
    user = db_session.query(User).filter(User.id == user_id).first()
    user.profile_completed = True
    db_session.commit()

    resp = client.get("/api/posts", headers=headers)
    assert resp.status_code == 403


def test_complete_profile_then_gate_opens(make_user):
    user_id, headers = make_user(role="teacher", completed=False)
    resp = client.post("/api/profile", headers=headers, json={
        "subjects": ["Physics", "Math"],
        "experience": 5,
        "hourlyRate": 40.5,
        "languages": ["English"],
        "interests": ["ignored for teachers"],
        "bio": "I teach physics",
    })
    assert resp.status_code == 200
    assert resp.json()["message"] == "Profile updated successfully"

    resp = client.get("/api/posts", headers=headers)
    assert resp.status_code == 200

    resp = client.get(f"/api/profile/{user_id}", headers=headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["profileCompleted"] is True
    assert data["bio"] == "I teach physics"
    assert data["profile"]["subjects"] == ["Physics", "Math"]
    assert data["profile"]["hourlyRate"] == 40.5
    assert "interests" not in data["profile"]


def test_update_profile_keeps_completion_flag(make_user):
    user_id, headers = make_user(role="student", completed=False)
    resp = client.put("/api/profile", headers=headers, json={"name": "Renamed", "academicLevel": "College"})
    assert resp.status_code == 200

    resp = client.get(f"/api/profile/{user_id}", headers=headers)
    data = resp.json()
    assert data["name"] == "Renamed"
    assert data["profileCompleted"] is False
    assert data["profile"]["academicLevel"] == "College"


def test_school_cannot_use_generic_profile_setup(make_user):
    _, headers = make_user(role="school", completed=False)
    resp = client.post("/api/profile", headers=headers, json={"subjects": ["Math"]})
    assert resp.status_code == 400


def test_get_profile_not_found(make_user):
    _, headers = make_user(role="student")
    assert client.get("/api/profile/does-not-exist", headers=headers).status_code == 404


def test_browse_profiles(make_user):
    _, headers = make_user(role="student", name="Browser")
    make_user(role="teacher", name="Alice Teacher")
    make_user(role="teacher", name="Bob Teacher")
    make_user(role="teacher", name="Hidden Teacher", completed=False)

    resp = client.get("/api/profile", headers=headers, params={"role": "teacher"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["totalCount"] == 2
    assert data["currentPage"] == 1
    assert {u["name"] for u in data["users"]} == {"Alice Teacher", "Bob Teacher"}

    resp = client.get("/api/profile", headers=headers, params={"search": "alice", "limit": 1})
    data = resp.json()
    assert data["totalCount"] == 1
    assert data["totalPages"] == 1
    assert data["users"][0]["profile"]["subjects"] == ["Math"]


def test_profile_stats(make_user):
    student_id, student_headers = make_user(role="student")
    teacher_id, teacher_headers = make_user(role="teacher")

    client.post("/api/posts", headers=student_headers, json={"content": "hello"})
    client.post("/api/messages", headers=student_headers, json={"receiverId": teacher_id, "content": "hi"})
    conn = client.post("/api/connections/request", headers=student_headers, json={"receiverId": teacher_id}).json()
    client.post("/api/connections/accept", headers=teacher_headers, json={"connectionId": conn["id"]})

    resp = client.get("/api/profile/stats", headers=student_headers)
    assert resp.status_code == 200
    assert resp.json() == {"connections": 1, "posts": 1, "reviews": 0, "messages": 1}


def test_delete_account_removes_owned_data(make_user, db_session):
    author_id, author_headers = make_user(role="teacher")
    reader_id, reader_headers = make_user(role="student")

    post_id = client.post("/api/posts", headers=author_headers, json={"content": "mine"}).json()["id"]
    other_post_id = client.post("/api/posts", headers=reader_headers, json={"content": "theirs"}).json()["id"]
    client.post("/api/likes", headers=author_headers, json={"postId": other_post_id})
    client.post("/api/comments", headers=author_headers, json={"postId": other_post_id, "content": "nice"})

    resp = client.delete("/api/profile/delete", headers=author_headers)
    assert resp.status_code == 200

    assert db_session.query(User).filter(User.id == author_id).first() is None
    assert db_session.query(Post).filter(Post.id == post_id).first() is None
    other_post = db_session.query(Post).filter(Post.id == other_post_id).first()
    assert other_post.likes_count == 0
    assert other_post.comments_count == 0


GATED_ROUTES = [
    ("GET", "/api/posts", None),
    ("POST", "/api/posts", {"content": "hi"}),
    ("POST", "/api/posts/some-id/like", None),
    ("POST", "/api/posts/some-id/comments", {"content": "hi"}),
    ("GET", "/api/posts/some-id/comments", None),
    ("PUT", "/api/posts/some-id", {"content": "hi"}),
    ("DELETE", "/api/posts/some-id", None),
    ("POST", "/api/likes", {"postId": "some-id"}),
    ("DELETE", "/api/likes", {"postId": "some-id"}),
    ("POST", "/api/comments", {"postId": "some-id", "content": "hi"}),
    ("PUT", "/api/comments/some-id", {"content": "hi"}),
    ("DELETE", "/api/comments/some-id", None),
    ("PUT", "/api/teachers/some-id", {"experience": 1}),
    ("POST", "/api/reviews", {"teacherId": "some-id", "rating": 5}),
    ("POST", "/api/connections/request", {"receiverId": "some-id"}),
    ("POST", "/api/connections/accept", {"connectionId": "some-id"}),
    ("POST", "/api/connections/reject", {"connectionId": "some-id"}),
    ("GET", "/api/connections", None),
    ("GET", "/api/connections/pending", None),
    ("POST", "/api/messages", {"receiverId": "some-id", "content": "hi"}),
    ("GET", "/api/messages/users", None),
    ("GET", "/api/messages/teachers", None),
    ("GET", "/api/messages/conversations", None),
    ("GET", "/api/messages/conversation/some-id", None),
    ("GET", "/api/messages/unread-count", None),
    ("PUT", "/api/messages/some-id", {"content": "hi"}),
    ("DELETE", "/api/messages/some-id", None),
    ("POST", "/api/discussions", {"title": "t", "content": "c", "category": "general"}),
    ("PUT", "/api/discussions/some-id", {"title": "t"}),
    ("DELETE", "/api/discussions/some-id", None),
    ("POST", "/api/discussions/some-id/upvote", None),
    ("PATCH", "/api/discussions/some-id/pin", None),
    ("PATCH", "/api/discussions/some-id/close", None),
    ("POST", "/api/discussions/some-id/comments", {"content": "hi"}),
    ("PUT", "/api/discussions/comments/some-id", {"content": "hi"}),
    ("DELETE", "/api/discussions/comments/some-id", None),
    ("POST", "/api/discussions/comments/some-id/upvote", None),
    ("GET", "/api/profile", None),
    ("GET", "/api/profile/stats", None),
    ("PUT", "/api/schools/some-id", {"description": "x"}),
]


@pytest.mark.parametrize("method,path,body", GATED_ROUTES)
def test_every_gated_route_rejects_incomplete_profile(make_user, method, path, body):
    _, headers = make_user(role="student", completed=False)
    resp = client.request(method, path, headers=headers, json=body)
    assert resp.status_code == 403
    detail = resp.json()["detail"]
    assert detail["requiresProfileCompletion"] is True
    assert detail["redirectTo"] == "/profile/setup"


def test_comment_tree_delete_counts_each_comment_once(make_user, db_session):
    """
    답글을 먼저 지운 뒤 부모 댓글 트리를 지워도 답글은 한 번만 셈
    """
    _, headers = make_user()
    discussion_id = client.post("/api/discussions", headers=headers, json={
        "title": "t", "content": "c", "category": "general",
    }).json()["discussion"]["id"]
    parent_id = client.post(f"/api/discussions/{discussion_id}/comments", headers=headers,
                            json={"content": "parent"}).json()["comment"]["id"]
    reply_id = client.post(f"/api/discussions/{discussion_id}/comments", headers=headers,
                           json={"content": "reply", "parentId": parent_id}).json()["comment"]["id"]

    reply = db_session.query(DiscussionComment).filter(DiscussionComment.id == reply_id).first()
    parent = db_session.query(DiscussionComment).filter(DiscussionComment.id == parent_id).first()
    deleted = _delete_discussion_comment_tree(db_session, reply)
    deleted += _delete_discussion_comment_tree(db_session, parent)
    assert deleted == 2
    db_session.rollback()


def test_delete_account_keeps_other_discussion_comments_counted(make_user, db_session):
    _, owner = make_user(role="teacher")
    _, leaving = make_user(role="student")
    discussion_id = client.post("/api/discussions", headers=owner, json={
        "title": "t", "content": "c", "category": "general",
    }).json()["discussion"]["id"]
    client.post(f"/api/discussions/{discussion_id}/comments", headers=owner, json={"content": "stays"})
    top_id = client.post(f"/api/discussions/{discussion_id}/comments", headers=leaving,
                         json={"content": "goes"}).json()["comment"]["id"]
    client.post(f"/api/discussions/{discussion_id}/comments", headers=leaving,
                json={"content": "also goes", "parentId": top_id})

    assert client.delete("/api/profile/delete", headers=leaving).status_code == 200

    discussion = db_session.query(Discussion).filter(Discussion.id == discussion_id).first()
    assert discussion.comment_count == 1
