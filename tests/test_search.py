"""Dispatcher state transitions against a fake search service."""

import asyncio

import httpx
import pytest

from conftest import make_item
from winedex.display import DisplayState
from winedex.render import ERROR_MESSAGE, LOADING_MESSAGE


@pytest.mark.asyncio
async def test_text_search_renders_stats_and_results(fake_service, make_session):
    items = [make_item(code=f"cab-{i}", name=f"Cabernet {i}") for i in range(12)]
    fake_service.respond_json({"total_results": 12, "total_time": 45, "results": items})
    session = make_session()

    await session.run_text_search("cabernet")

    request = fake_service.last_request
    assert request.url.path == "/search"
    assert request.url.params["q"] == "cabernet"
    assert session.state is DisplayState.RESULTS
    markup = session.container.html
    assert "12 results" in markup
    assert "completed in 45ms" in markup
    assert markup.count('<div class="wine"') == 12
    positions = [markup.index(f">Cabernet {i}</a>") for i in range(12)]
    assert positions == sorted(positions)
    assert LOADING_MESSAGE not in markup


@pytest.mark.asyncio
async def test_text_search_reads_query_field_when_no_text_given(fake_service, make_session):
    session = make_session()
    session.query_field.value = "riesling"

    await session.run_text_search()

    assert fake_service.last_request.url.params["q"] == "riesling"


@pytest.mark.asyncio
async def test_empty_results_offer_suggestions(fake_service, make_session):
    fake_service.respond_json({"results": [], "query_suggestions": ["xyz"]})
    session = make_session()

    await session.run_text_search("xyzzy")

    assert session.state is DisplayState.EMPTY
    markup = session.container.html
    assert "No results found, try:" in markup
    assert markup.count("<a ") == 1
    assert '<div class="wine"' not in markup


@pytest.mark.asyncio
async def test_suggested_query_decodes_and_reruns_search(fake_service, make_session):
    session = make_session()

    await session.run_suggested_query("pinot%20noir")

    assert session.query_field.value == "pinot noir"
    assert fake_service.last_request.url.params["q"] == "pinot noir"
    assert fake_service.last_request.url.path == "/search"


@pytest.mark.asyncio
async def test_similarity_search_sends_wine_code(fake_service, make_session):
    fake_service.respond_json({"results": [make_item(code="other")]})
    session = make_session()

    await session.run_similarity_search("chateau-x-2010")

    request = fake_service.last_request
    assert request.url.path == "/similar"
    assert request.url.params["wine"] == "chateau-x-2010"
    assert session.state is DisplayState.RESULTS


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        "this is not json",
        '{"total_results": 4, "query_suggestions": ["x"]}',
        '{"results": null}',
        "[1, 2, 3]",
    ],
)
async def test_unusable_body_shows_error_only(fake_service, make_session, body):
    fake_service.body = body
    session = make_session()

    await session.run_text_search("cabernet")

    assert session.state is DisplayState.ERROR
    assert session.container.html == f'<center class="error">{ERROR_MESSAGE}</center>'


@pytest.mark.asyncio
async def test_http_failure_status_shows_error(fake_service, make_session):
    fake_service.status_code = 503
    session = make_session()

    await session.run_similarity_search("chateau-x-2010")

    assert session.state is DisplayState.ERROR


@pytest.mark.asyncio
async def test_network_failure_shows_error(fake_service, make_session):
    fake_service.error = httpx.ConnectError("connection refused")
    session = make_session()

    await session.run_text_search("cabernet")

    assert session.state is DisplayState.ERROR
    assert ERROR_MESSAGE in session.container.html


@pytest.mark.asyncio
async def test_new_search_replaces_previous_output(fake_service, make_session):
    session = make_session()
    fake_service.respond_json({"total_results": 1, "results": [make_item(name="First")]})
    await session.run_text_search("first")

    fake_service.status_code = 500
    await session.run_text_search("second")

    assert session.state is DisplayState.ERROR
    assert "First" not in session.container.html


@pytest.mark.asyncio
async def test_loading_persists_while_request_hangs(make_session):
    """Without a timeout the loading state stays until the request resolves."""

    release = asyncio.Event()

    async def hanging_handler(request: httpx.Request) -> httpx.Response:
        await release.wait()
        return httpx.Response(200, json={"results": []})

    session = make_session()
    session.client._transport = httpx.MockTransport(hanging_handler)

    task = asyncio.create_task(session.run_text_search("cabernet"))
    await asyncio.sleep(0.05)
    assert session.state is DisplayState.LOADING
    assert LOADING_MESSAGE in session.container.html

    release.set()
    await task
    assert session.state is DisplayState.EMPTY


@pytest.mark.asyncio
async def test_item_with_odd_fields_still_renders_the_list(fake_service, make_session):
    fake_service.respond_json(
        {
            "total_results": 2,
            "results": [
                make_item(code="good", name="Good Wine"),
                make_item(
                    code="odd",
                    name="Odd Wine",
                    _index_taste_similar_count="n/a",
                    critic_scores="n/a",
                ),
            ],
        }
    )
    session = make_session()

    await session.run_text_search("cabernet")

    assert session.state is DisplayState.RESULTS
    markup = session.container.html
    assert markup.count('<div class="wine"') == 2
    assert "Odd Wine" in markup
    assert markup.count("Find similar") == 1
