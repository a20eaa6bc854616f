"""
Boards store, backends and API tests
"""
import pytest
from botocore.exceptions import ClientError

from aramiyot.auth import SessionManager
from aramiyot.data.catalog import get_resource
from aramiyot.errors import BoardNotFoundError, StorageError
from aramiyot.services.boards import (
    BoardBackend, BoardsStore, DynamoDBBoardBackend, LocalStorageBoardBackend
)
from aramiyot.storage import LocalStorage
from aramiyot.storage.keys import BOARDS_KEY


class FakeTable:
    """In-memory stand-in for a boto3 DynamoDB Table resource"""

    def __init__(self, page_size=None):
        self.items = {}
        self.page_size = page_size
        self.fail_writes = False

    def query(self, KeyConditionExpression, ExclusiveStartKey=None):
        user_id = KeyConditionExpression.get_expression()["values"][1]
        matching = sorted(
            (item for (uid, _), item in self.items.items() if uid == user_id),
            key=lambda item: item["board_id"],
        )
        start = 0
        if ExclusiveStartKey:
            start = [item["board_id"] for item in matching].index(ExclusiveStartKey["board_id"]) + 1
        page = matching[start:start + self.page_size] if self.page_size else matching[start:]
        response = {"Items": [dict(item) for item in page]}
        if self.page_size and start + self.page_size < len(matching):
            response["LastEvaluatedKey"] = {"user_id": user_id, "board_id": page[-1]["board_id"]}
        return response

    def put_item(self, Item):
        if self.fail_writes:
            raise ClientError(
                {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow down"}},
                "PutItem",
            )
        self.items[(Item["user_id"], Item["board_id"])] = dict(Item)

    def delete_item(self, Key):
        self.items.pop((Key["user_id"], Key["board_id"]), None)


class FailingBackend(BoardBackend):

    def load_boards(self, user_id):
        return []

    def save_board(self, user_id, board):
        raise StorageError("disk full")

    def delete_board(self, user_id, board_id):
        raise StorageError("disk full")


@pytest.fixture
def local_backend(storage):
    return LocalStorageBoardBackend(storage)


@pytest.fixture
def store(local_backend):
    return BoardsStore(local_backend, "user-1").load()


def test_create_add_and_reload(storage, tmp_path):
    store = BoardsStore(LocalStorageBoardBackend(storage), "user-1").load()
    board = store.create_board("Sleep Tips")
    store.add_resource_to_board(board.id, get_resource("CWR004"))

    reopened = LocalStorage(str(tmp_path / "local_storage.json"))
    reloaded = BoardsStore(LocalStorageBoardBackend(reopened), "user-1").load()

    assert [b.name for b in reloaded.boards] == ["Sleep Tips"]
    assert [r.id for r in reloaded.boards[0].resources] == ["CWR004"]
    assert reloaded.boards[0].resources[0].type == "article"
    assert reloaded.notices == []


def test_add_same_resource_twice_replaces(store):
    board = store.create_board("Mindful")
    original = get_resource("CWR001")
    store.add_resource_to_board(board.id, get_resource("CWR005"))
    store.add_resource_to_board(board.id, original)

    updated = original.model_copy(update={"title": "Meditation, revisited"})
    store.add_resource_to_board(board.id, updated)

    resources = store.get_board_by_id(board.id).resources
    assert [r.id for r in resources] == ["CWR005", "CWR001"]
    assert resources[1].title == "Meditation, revisited"


def test_board_holds_copies_of_catalog_resources(store):
    board = store.create_board("Copies")
    store.add_resource_to_board(board.id, get_resource("CWR002"))

    store.get_board_by_id(board.id).resources[0].title = "Changed"

    assert get_resource("CWR002").title == "10 Quick & Healthy Breakfast Ideas"


def test_remove_absent_resource_is_noop(store):
    board = store.create_board("Fitness")
    store.add_resource_to_board(board.id, get_resource("CWR003"))

    store.remove_resource_from_board(board.id, "CWR999")

    assert [r.id for r in store.get_board_by_id(board.id).resources] == ["CWR003"]
    assert store.notices == []

    store.remove_resource_from_board(board.id, "CWR003")
    assert store.get_board_by_id(board.id).resources == []


def test_rename_and_delete(store, local_backend):
    board = store.create_board("Old name")
    store.update_board_name(board.id, "  New name  ")
    assert local_backend.load_boards("user-1")[0].name == "New name"

    store.delete_board(board.id)
    assert store.boards == []
    assert local_backend.load_boards("user-1") == []


def test_unknown_board_and_blank_names(store):
    with pytest.raises(BoardNotFoundError):
        store.add_resource_to_board("missing", get_resource("CWR001"))
    with pytest.raises(ValueError):
        store.create_board("   ")

    board = store.create_board("Keep")
    with pytest.raises(ValueError):
        store.update_board_name(board.id, "")
    assert store.get_board_by_id(board.id).name == "Keep"


def test_delete_absent_board_is_noop(store, local_backend):
    board = store.create_board("Stays")

    store.delete_board("missing")

    assert [b.id for b in store.boards] == [board.id]
    assert [b.id for b in local_backend.load_boards("user-1")] == [board.id]
    assert store.pop_notices() == []


def test_boards_are_scoped_per_user(local_backend):
    BoardsStore(local_backend, "alice").load().create_board("Alice's")
    BoardsStore(local_backend, "bob").load().create_board("Bob's")

    assert [b.name for b in BoardsStore(local_backend, "alice").load().boards] == ["Alice's"]
    assert [b.name for b in BoardsStore(local_backend, "bob").load().boards] == ["Bob's"]


def test_failed_write_keeps_mirror_and_queues_notice():
    store = BoardsStore(FailingBackend(), "user-1").load()

    board = store.create_board("Unsaved")
    store.add_resource_to_board(board.id, get_resource("CWR006"))

    assert [r.id for r in store.get_board_by_id(board.id).resources] == ["CWR006"]
    notices = store.pop_notices()
    assert [n.operation for n in notices] == ["create", "add_resource"]
    assert all(n.board_id == board.id for n in notices)
    assert store.pop_notices() == []

    store.delete_board(board.id)
    assert store.boards == []
    assert [n.operation for n in store.pop_notices()] == ["delete"]


def test_corrupt_local_boards_load_empty_with_notice(storage):
    storage.set_item(BOARDS_KEY, "[1, 2, 3]")

    store = BoardsStore(LocalStorageBoardBackend(storage), "user-1").load()

    assert store.boards == []
    assert [n.operation for n in store.notices] == ["load"]


def test_dynamodb_backend_round_trip():
    table = FakeTable(page_size=1)
    backend = DynamoDBBoardBackend("boards", "us-west-2", table=table)

    store = BoardsStore(backend, "anon-1").load()
    first = store.create_board("Sleep Tips")
    store.add_resource_to_board(first.id, get_resource("CWR004"))
    second = store.create_board("Videos")
    store.add_resource_to_board(second.id, get_resource("CWR003"))

    reloaded = BoardsStore(backend, "anon-1").load()

    assert [b.name for b in reloaded.boards] == ["Sleep Tips", "Videos"]
    assert reloaded.boards[1].resources[0].youtube_video_id == "dQw4w9WgXcQ"
    assert BoardsStore(backend, "anon-2").load().boards == []

    store.delete_board(first.id)
    assert [b.name for b in BoardsStore(backend, "anon-1").load().boards] == ["Videos"]


def test_dynamodb_write_failure_becomes_notice():
    table = FakeTable()
    store = BoardsStore(DynamoDBBoardBackend("boards", "us-west-2", table=table), "anon-1").load()
    table.fail_writes = True

    board = store.create_board("Offline")

    assert store.get_board_by_id(board.id) is not None
    assert [n.operation for n in store.pop_notices()] == ["create"]
    assert table.items == {}


def test_boards_api_requires_sign_in(client):
    response = client.get("/api/boards", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401
    assert response.json()["error"] == "Authentication required"


def test_boards_api_flow(client, auth_headers):
    created = client.post("/api/boards", json={"name": "Sleep Tips"}, headers=auth_headers)
    assert created.status_code == 201
    board_id = created.json()["board"]["id"]

    for _ in range(2):
        added = client.put(f"/api/boards/{board_id}/resources", json={"resourceId": "CWR004"}, headers=auth_headers)
        assert added.status_code == 200
    assert [r["id"] for r in added.json()["board"]["resources"]] == ["CWR004"]

    custom = {
        "id": "TIP1", "type": "tip", "title": "Drink water", "description": "Stay hydrated",
        "imageUrl": "https://placehold.co/600x400.png", "category": "Nutrition",
    }
    added = client.put(f"/api/boards/{board_id}/resources", json=custom, headers=auth_headers)
    assert [r["id"] for r in added.json()["board"]["resources"]] == ["CWR004", "TIP1"]

    removed = client.delete(f"/api/boards/{board_id}/resources/NOPE", headers=auth_headers)
    assert removed.status_code == 200
    assert len(removed.json()["board"]["resources"]) == 2

    renamed = client.patch(f"/api/boards/{board_id}", json={"name": "Better Sleep"}, headers=auth_headers)
    assert renamed.json()["board"]["name"] == "Better Sleep"

    listed = client.get("/api/boards", headers=auth_headers).json()
    assert [b["name"] for b in listed["boards"]] == ["Better Sleep"]
    assert listed["notices"] == []

    assert client.delete(f"/api/boards/{board_id}", headers=auth_headers).json()["success"] is True
    assert client.get(f"/api/boards/{board_id}", headers=auth_headers).status_code == 404


def test_boards_api_errors(client, auth_headers):
    assert client.post("/api/boards", json={"name": "   "}, headers=auth_headers).status_code == 400
    assert client.post("/api/boards", json={}, headers=auth_headers).status_code == 400

    missing = client.patch("/api/boards/missing", json={"name": "x"}, headers=auth_headers)
    assert missing.status_code == 404
    assert missing.json() == {"error": "Board not found", "details": "missing"}

    gone = client.delete("/api/boards/missing", headers=auth_headers)
    assert gone.status_code == 200
    assert gone.json() == {"success": True, "notices": []}

    board_id = client.post("/api/boards", json={"name": "B"}, headers=auth_headers).json()["board"]["id"]
    unknown = client.put(f"/api/boards/{board_id}/resources", json={"resourceId": "CWR999"}, headers=auth_headers)
    assert unknown.status_code == 404
    bad_type = client.put(
        f"/api/boards/{board_id}/resources",
        json={"id": "X", "type": "podcast", "title": "t"},
        headers=auth_headers,
    )
    assert bad_type.status_code == 400


def test_anonymous_sign_in_keeps_user_id(client, auth_headers):
    first = client.get("/api/auth/status", headers=auth_headers).json()
    assert first["is_authenticated"] is True
    assert first["is_anonymous"] is True

    renewed = client.post("/api/auth/anonymous", headers=auth_headers).json()
    assert renewed["user_id"] == first["user_id"]

    client.cookies.clear()
    assert client.get("/api/auth/status").json()["is_authenticated"] is False


def test_expired_session_token_is_rejected():
    expired = SessionManager(secret_key="test-secret", session_timeout=-60)
    token, identity = expired.issue_token()

    assert identity.user_id.startswith("anon-")
    assert expired.verify_token(token) is None

    live = SessionManager(secret_key="test-secret", session_timeout=60)
    token, identity = live.issue_token()
    assert live.verify_token(token).user_id == identity.user_id
