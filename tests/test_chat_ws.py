"""
End-to-end chat over /ws: history replay, room fan-out, dropped frames.
"""
from safespace.core.memory.schemas import InsertChatMessage


def _room_ids(client):
    return [r["id"] for r in client.get("/api/chat-rooms").json()]


def _join(ws, room_id):
    ws.send_json({"type": "join-room", "roomId": room_id})
    frame = ws.receive_json()
    assert frame["type"] == "recent-messages"
    return frame["messages"]


def test_join_empty_room_replays_nothing(client):
    room = _room_ids(client)[0]
    with client.websocket_connect("/ws") as ws:
        assert _join(ws, room) == []


def test_send_message_is_persisted_and_echoed_to_sender(client):
    room = _room_ids(client)[0]
    with client.websocket_connect("/ws") as ws:
        _join(ws, room)
        ws.send_json({"type": "send-message", "roomId": room, "content": "hello"})
        frame = ws.receive_json()
    assert frame["type"] == "new-message"
    message = frame["message"]
    assert message["content"] == "hello"
    assert message["roomId"] == room
    assert message["authorId"]
    stored = client.get(f"/api/chat-rooms/{room}/messages").json()
    assert [m["id"] for m in stored] == [message["id"]]


def test_join_replays_last_20_in_ascending_order(client, storage):
    room = _room_ids(client)[0]
    for i in range(25):
        storage.create_chat_message(InsertChatMessage(roomId=room, content=f"m{i}", authorId="someone"))
    with client.websocket_connect("/ws") as ws:
        messages = _join(ws, room)
    assert [m["content"] for m in messages] == [f"m{i}" for i in range(5, 25)]


def test_message_only_reaches_connections_in_that_room(client):
    room_a, room_b = _room_ids(client)[:2]
    with client.websocket_connect("/ws") as alice, \
            client.websocket_connect("/ws") as bob, \
            client.websocket_connect("/ws") as carol:
        _join(alice, room_a)
        _join(bob, room_b)
        _join(carol, room_a)

        alice.send_json({"type": "send-message", "roomId": room_a, "content": "for A"})
        assert alice.receive_json()["message"]["content"] == "for A"
        assert carol.receive_json()["message"]["content"] == "for A"

        # bob's next frame is the room B message, so the room A one never reached him
        bob.send_json({"type": "send-message", "roomId": room_b, "content": "for B"})
        assert bob.receive_json()["message"]["content"] == "for B"


def test_anonymous_identity_is_stable_per_connection(client):
    room = _room_ids(client)[0]
    with client.websocket_connect("/ws") as ws:
        _join(ws, room)
        ws.send_json({"type": "send-message", "roomId": room, "content": "one"})
        first = ws.receive_json()["message"]["authorId"]
        ws.send_json({"type": "send-message", "roomId": room, "content": "two"})
        second = ws.receive_json()["message"]["authorId"]
    assert first == second
    with client.websocket_connect("/ws") as other:
        _join(other, room)
        other.send_json({"type": "send-message", "roomId": room, "content": "three"})
        assert other.receive_json()["message"]["authorId"] != first


def test_switching_rooms_stops_old_room_delivery(client):
    room_a, room_b = _room_ids(client)[:2]
    with client.websocket_connect("/ws") as mover, client.websocket_connect("/ws") as stayer:
        _join(mover, room_a)
        _join(stayer, room_a)
        _join(mover, room_b)
        stayer.send_json({"type": "send-message", "roomId": room_a, "content": "still here?"})
        assert stayer.receive_json()["message"]["content"] == "still here?"
        mover.send_json({"type": "send-message", "roomId": room_b, "content": "moved"})
        assert mover.receive_json()["message"]["content"] == "moved"


def test_malformed_frames_are_dropped_and_connection_stays_open(client, app):
    room = _room_ids(client)[0]
    with client.websocket_connect("/ws") as ws:
        ws.send_text("not json at all")
        ws.send_text("[1, 2, 3]")
        ws.send_json({"type": "dance"})
        ws.send_json({"type": "join-room"})
        ws.send_json({"type": "send-message", "roomId": room, "content": "   "})
        ws.send_json({"type": "send-message", "roomId": room, "content": 42})
        # no error frames: the next frame is the reply to this join
        assert _join(ws, room) == []
    assert client.get(f"/api/chat-rooms/{room}/messages").json() == []
    assert app.state.metrics.snapshot()["frames_dropped"] == 6


def test_disconnect_removes_registry_entry(client, app):
    room = _room_ids(client)[0]
    with client.websocket_connect("/ws") as ws:
        _join(ws, room)
        assert len(app.state.registry) == 1
        assert len(app.state.registry.members(room)) == 1
    assert len(app.state.registry) == 0
    assert app.state.registry.members(room) == []
