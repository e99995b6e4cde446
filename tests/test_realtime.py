import pytest
from pymongo.errors import PyMongoError

from storefront.config.database import get_database

from .conftest import run


def test_message_is_broadcast_and_stored(client, db):
    with client.websocket_connect("/ws") as first, client.websocket_connect("/ws") as second:
        first.send_json({"user": "alice", "message": "hello"})

        for socket in (first, second):
            data = socket.receive_json()
            assert data["user"] == "alice"
            assert data["message"] == "hello"
            assert data["created_at"]

    stored = run(db.messages.find({}).to_list(length=None))
    assert [(m["user"], m["message"]) for m in stored] == [("alice", "hello")]


def test_malformed_frames_get_an_error_and_keep_the_connection(client, db):
    with client.websocket_connect("/ws") as socket:
        socket.send_text("not json")
        assert "error" in socket.receive_json()

        socket.send_json({"user": "alice"})
        assert "error" in socket.receive_json()

        socket.send_json({"user": "alice", "message": "still here"})
        assert socket.receive_json()["message"] == "still here"

    assert run(db.messages.count_documents({})) == 1

class FailingMessages:
    async def insert_one(self, document):
        raise PyMongoError("write failed")


class FailingDatabase:
    messages = FailingMessages()


def test_failed_write_releases_the_connection(app, client):
    app.dependency_overrides[get_database] = lambda: FailingDatabase()

    with pytest.raises(PyMongoError):
        with client.websocket_connect("/ws") as socket:
            socket.send_json({"user": "alice", "message": "lost"})
            socket.receive_json()

    assert app.state.connections.active_connections == []
