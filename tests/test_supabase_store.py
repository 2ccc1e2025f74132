import json
import sys
from pathlib import Path

import httpx
import pytest

# Ensure src is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from echosave.core.errors import BackendError, UnknownError
from echosave.core.models import Record
from echosave.core.supabase_store import SupabaseRecordStore

URL = "https://project.supabase.co"
KEY = "anon-key"


def make_store(handler):
    requests = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(record))
    return SupabaseRecordStore(URL, KEY, client=client), requests


async def test_query_filters_by_code_and_sends_credentials():
    rows = [{"code": "ABC", "file_name": "a.txt", "content": "1"}]
    store, requests = make_store(lambda r: httpx.Response(200, json=rows))

    records = await store.query("ABC")

    assert records == [Record(code="ABC", file_name="a.txt", content="1")]
    request = requests[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/code_groups"
    assert request.url.params["code"] == "eq.ABC"
    assert request.url.params["select"] == "code,file_name,content"
    assert "file_name" not in request.url.params
    assert request.headers["apikey"] == KEY
    assert request.headers["authorization"] == f"Bearer {KEY}"


async def test_query_with_file_name_and_empty_result():
    store, requests = make_store(lambda r: httpx.Response(200, json=[]))

    assert await store.query("ABC", "a b.txt") == []
    assert requests[0].url.params["file_name"] == "eq.a b.txt"


async def test_upsert_declares_conflict_key():
    store, requests = make_store(lambda r: httpx.Response(201))

    await store.upsert(Record(code="ABC", file_name="a.txt", content="hello"))

    request = requests[0]
    assert request.method == "POST"
    assert request.url.params["on_conflict"] == "code,file_name"
    assert "resolution=merge-duplicates" in request.headers["prefer"]
    assert json.loads(request.content) == [{"code": "ABC", "file_name": "a.txt", "content": "hello"}]


async def test_deletes_filter_by_key():
    store, requests = make_store(lambda r: httpx.Response(204))

    await store.delete_by_code_and_file("ABC", "a.txt")
    await store.delete_by_code("ABC")

    assert [r.method for r in requests] == ["DELETE", "DELETE"]
    assert dict(requests[0].url.params) == {"code": "eq.ABC", "file_name": "eq.a.txt"}
    assert dict(requests[1].url.params) == {"code": "eq.ABC"}


async def test_known_error_payload_becomes_backend_error():
    body = {"message": "permission denied for table code_groups", "code": "42501", "details": None, "hint": None}
    store, _ = make_store(lambda r: httpx.Response(401, json=body))

    with pytest.raises(BackendError) as exc_info:
        await store.upsert(Record(code="A", file_name="b", content="c"))

    assert exc_info.value.message == "permission denied for table code_groups"
    assert exc_info.value.status_code == 401
    assert exc_info.value.code == "42501"


@pytest.mark.parametrize("response", [
    httpx.Response(500, text="<html>Bad gateway</html>"),
    httpx.Response(500, json=["not", "an", "object"]),
    httpx.Response(400, json={"error": "no message key"}),
])
async def test_unrecognised_error_payload_becomes_unknown_error(response):
    store, _ = make_store(lambda r: response)

    with pytest.raises(UnknownError) as exc_info:
        await store.query("ABC")
    assert exc_info.value.raw_payload is not None
    assert exc_info.value.status_code == response.status_code


async def test_transport_failure_becomes_backend_error():
    def fail(request):
        raise httpx.ConnectError("connection refused", request=request)

    store, _ = make_store(fail)

    with pytest.raises(BackendError, match="connection refused"):
        await store.delete_by_code("ABC")


async def test_missing_credentials_fail_without_request():
    requests = []
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: requests.append(r)))
    store = SupabaseRecordStore("", "", client=client)

    with pytest.raises(BackendError, match="credentials"):
        await store.query("ABC")
    assert requests == []
    assert store.configured is False


async def test_custom_table_and_trailing_slash():
    store, requests = make_store(lambda r: httpx.Response(200, json=[]))
    store = SupabaseRecordStore(URL + "/", KEY, table="shared_files", client=store.http_client)

    await store.query("ABC")

    assert requests[0].url.path == "/rest/v1/shared_files"


async def test_aclose_leaves_injected_client_open():
    store, _ = make_store(lambda r: httpx.Response(200, json=[]))

    await store.aclose()

    assert not store.http_client.is_closed


@pytest.mark.parametrize("rows", [
    [{"content": "x"}],
    [{"file_name": "a.txt", "content": 5}],
    [{"file_name": None, "content": "x"}],
    ["oops"],
])
async def test_malformed_rows_become_unknown_error(rows):
    store, _ = make_store(lambda r: httpx.Response(200, json=rows))

    with pytest.raises(UnknownError) as exc_info:
        await store.query("ABC")
    assert exc_info.value.raw_payload == rows
    assert exc_info.value.status_code == 200


async def test_null_content_reads_as_empty_text():
    rows = [{"code": "ABC", "file_name": "empty.txt", "content": None}]
    store, _ = make_store(lambda r: httpx.Response(200, json=rows))

    assert await store.query("ABC") == [Record(code="ABC", file_name="empty.txt", content="")]
