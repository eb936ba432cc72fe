# tests/test_persistence_client.py
"""
Tests for PersistenceClient against the in-process app and scripted transports.
"""

import json

import httpx
import pytest

from flowsync.schemas.graph import Snapshot
from flowsync.utils.errors import FetchError, ParseError, SaveError


@pytest.mark.asyncio
async def test_load_returns_document(persistence_client, seed_document):
    """Test load parses nodes, edges and type maps"""
    document = await persistence_client.load()

    assert document.nodes == seed_document["nodes"]
    assert document.edges == []
    assert document.nodeTypes == {}


@pytest.mark.asyncio
async def test_save_then_load_round_trip(persistence_client):
    """Test a saved snapshot loads back deep-equal"""
    snapshot = Snapshot(
        nodes=[
            {"id": "a", "type": "position-logger", "position": {"x": 1.5, "y": -2.0}, "data": {"nested": {"k": [1, 2]}}},
            {"id": "b", "position": {"x": 0, "y": 0}, "data": {}, "selected": True},
        ],
        edges=[{"id": "e1", "source": "a", "target": "b", "type": "button-edge"}],
    )

    result = await persistence_client.save(snapshot)
    document = await persistence_client.load()

    assert result.ok is True
    assert result.status_code == 200
    assert document.nodes == snapshot.nodes
    assert document.edges == snapshot.edges


@pytest.mark.asyncio
async def test_save_sends_only_nodes_and_edges(scripted_client):
    """Test the POST body never carries type maps"""
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, text="Data successfully written to file")

    await scripted_client(handler).save(Snapshot(nodes=[], edges=[]))

    assert bodies == [{"nodes": [], "edges": []}]


@pytest.mark.asyncio
async def test_load_non_success_status(scripted_client):
    """Test a non-2xx response raises FetchError"""
    client = scripted_client(lambda request: httpx.Response(404, text="missing"))

    with pytest.raises(FetchError) as exc_info:
        await client.load()

    assert exc_info.value.status_code == 404
    assert not isinstance(exc_info.value, ParseError)


@pytest.mark.asyncio
async def test_load_invalid_json(scripted_client):
    """Test an unparseable body raises ParseError"""
    client = scripted_client(lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(ParseError):
        await client.load()


@pytest.mark.asyncio
async def test_load_wrong_shape(scripted_client):
    """Test a JSON body that is not a document raises ParseError"""
    client = scripted_client(lambda request: httpx.Response(200, json=[1, 2, 3]))

    with pytest.raises(ParseError):
        await client.load()


@pytest.mark.asyncio
async def test_load_transport_error(scripted_client):
    """Test connection failures raise FetchError without retry"""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError):
        await scripted_client(handler).load()

    assert len(calls) == 1


@pytest.mark.asyncio
async def test_save_server_error(scripted_client):
    """Test a 500 from the server raises SaveError"""
    client = scripted_client(lambda request: httpx.Response(500, text="Error writing to file"))

    with pytest.raises(SaveError) as exc_info:
        await client.save(Snapshot())

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_save_transport_error(scripted_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(SaveError) as exc_info:
        await scripted_client(handler).save(Snapshot())

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [float("nan"), float("inf"), object()])
async def test_save_unencodable_value(scripted_client, value):
    """Test values JSON cannot carry raise SaveError before any request"""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, text="ok")

    snapshot = Snapshot(nodes=[{"id": "a", "position": {"x": value, "y": 0}}], edges=[])

    with pytest.raises(SaveError):
        await scripted_client(handler).save(snapshot)

    assert calls == []


@pytest.mark.asyncio
async def test_load_tolerates_malformed_type_maps(scripted_client):
    """Test non-object nodeTypes/edgeTypes are treated as absent"""
    body = {"nodes": [{"id": "1"}], "edges": [], "nodeTypes": [], "edgeTypes": "button-edge"}
    client = scripted_client(lambda request: httpx.Response(200, json=body))

    document = await client.load()

    assert document.nodes == [{"id": "1"}]
    assert document.nodeTypes is None
    assert document.edgeTypes is None
