from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


def send(headers, receiver_id, content):
    resp = client.post("/api/messages", headers=headers, json={"receiverId": receiver_id, "content": content})
    assert resp.status_code == 201
    return resp.json()


def test_send_message_and_unknown_receiver(make_user):
    _, alice = make_user(role="student", name="Alice")
    bob_id, _ = make_user(role="teacher", name="Bob")

    message = send(alice, bob_id, "  Hello Bob  ")
    assert message["content"] == "Hello Bob"
    assert message["isRead"] is False
    assert message["receiverId"] == bob_id

    resp = client.post("/api/messages", headers=alice, json={"receiverId": "missing", "content": "hi"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Receiver not found"

    resp = client.post("/api/messages", headers=alice, json={"receiverId": bob_id, "content": ""})
    assert resp.status_code == 400


def test_contacts_exclude_self_and_unconfirmed(make_user):
    _, headers = make_user(role="student", name="Me")
    make_user(role="teacher", name="Teacher A")
    make_user(role="student", name="Student B")
    make_user(role="teacher", name="Unconfirmed", confirmed=False)

    users = client.get("/api/messages/users", headers=headers).json()
    assert [u["name"] for u in users] == ["Student B", "Teacher A"]
    assert "email" in users[0]

    teachers = client.get("/api/messages/teachers", headers=headers).json()
    assert [u["name"] for u in teachers] == ["Teacher A"]


def test_conversation_marks_incoming_as_read(make_user):
    alice_id, alice = make_user(name="Alice")
    bob_id, bob = make_user(name="Bob")

    send(alice, bob_id, "one")
    send(bob, alice_id, "two")
    send(alice, bob_id, "three")

    assert client.get("/api/messages/unread-count", headers=bob).json() == {"count": 2}

    conversations = client.get("/api/messages/conversations", headers=bob).json()
    assert len(conversations) == 1
    assert conversations[0]["partner"]["id"] == alice_id
    assert conversations[0]["lastMessage"]["content"] == "three"
    assert conversations[0]["unreadCount"] == 2

    resp = client.get(f"/api/messages/conversation/{alice_id}", headers=bob)
    assert [m["content"] for m in resp.json()] == ["one", "two", "three"]
    assert all(m["isRead"] for m in resp.json() if m["receiverId"] == bob_id)
    assert client.get("/api/messages/unread-count", headers=bob).json() == {"count": 0}

    # 내가 보낸 메시지는 상대가 읽기 전까지 그대로
    assert client.get("/api/messages/unread-count", headers=alice).json() == {"count": 1}


def test_edit_and_delete_sender_only(make_user):
    _, alice = make_user(name="Alice")
    bob_id, bob = make_user(name="Bob")
    message = send(alice, bob_id, "typo")

    assert client.put(f"/api/messages/{message['id']}", headers=bob, json={"content": "x"}).status_code == 403
    resp = client.put(f"/api/messages/{message['id']}", headers=alice, json={"content": "fixed"})
    assert resp.status_code == 200
    assert resp.json()["content"] == "fixed"

    assert client.delete(f"/api/messages/{message['id']}", headers=bob).status_code == 403
    assert client.delete(f"/api/messages/{message['id']}", headers=alice).status_code == 200
    assert client.delete(f"/api/messages/{message['id']}", headers=alice).status_code == 404
