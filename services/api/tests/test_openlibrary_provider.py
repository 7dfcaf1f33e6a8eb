import httpx
import pytest
from app.domain.errors import ProviderUnavailable
from app.services.catalog.openlibrary_provider import OpenLibraryProvider

DUNE_PAGE = {
    "numFound": 3,
    "docs": [
        {
            "title": "Dune",
            "author_name": ["Frank Herbert", "Brian Herbert"],
            "isbn": ["9780441013593", "0441013597"],
            "first_publish_year": 1965,
            "subject": ["Science Fiction", "Ecology"],
            "cover_i": 11481354,
        },
        {"title": "Dune: Anonymous Edition"},
        {"author_name": ["No Title"]},
    ],
}


def _provider(handler):
    return OpenLibraryProvider(
        base_url="https://openlibrary.test",
        covers_base_url="https://covers.test",
        timeout_secs=2.0,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_search_maps_documents_take_first():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["ua"] = request.headers.get("User-Agent")
        return httpx.Response(200, json=DUNE_PAGE)

    results = await _provider(handler).search("dune", 5)

    assert seen["path"] == "/search.json"
    assert seen["params"]["q"] == "dune"
    assert seen["params"]["limit"] == "5"
    assert seen["ua"].startswith("PersonalLibrary")

    assert len(results) == 2
    dune = results[0]
    assert dune.title == "Dune"
    assert dune.author == "Frank Herbert"
    assert dune.isbn == "9780441013593"
    assert dune.genre == "Science Fiction"
    assert dune.published_year == 1965
    assert dune.cover_url == "https://covers.test/b/id/11481354-M.jpg"
    assert dune.description is None


@pytest.mark.asyncio
async def test_missing_fields_pass_through_as_none():
    results = await _provider(lambda r: httpx.Response(200, json=DUNE_PAGE)).search("dune", 5)
    anon = results[1]
    assert anon.author == "Unknown"
    assert anon.isbn is None
    assert anon.genre is None
    assert anon.cover_url is None


@pytest.mark.asyncio
async def test_malformed_document_is_skipped_not_fatal():
    page = {
        "docs": [
            {"title": "Good", "author_name": ["A"]},
            {"title": "Bad", "cover_i": "not-a-number"},
            "garbage",
            {"title": "Ancient", "first_publish_year": 700},
        ]
    }
    results = await _provider(lambda r: httpx.Response(200, json=page)).search("x", 10)
    assert [c.title for c in results] == ["Good", "Ancient"]
    assert results[1].published_year is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="oops"),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"docs": "nope"}),
    ],
)
async def test_failures_raise_provider_unavailable(response):
    with pytest.raises(ProviderUnavailable):
        await _provider(lambda r: response).search("dune", 5)


@pytest.mark.asyncio
async def test_timeout_raises_provider_unavailable():
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(ProviderUnavailable):
        await _provider(handler).search("dune", 5)


@pytest.mark.asyncio
async def test_lookup_isbn():
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"docs": DUNE_PAGE["docs"][:1]})

    found = await _provider(handler).lookup_isbn("9780441013593")
    assert seen["params"]["isbn"] == "9780441013593"
    assert seen["params"]["limit"] == "1"
    assert found is not None
    assert found.title == "Dune"


@pytest.mark.asyncio
async def test_lookup_isbn_not_found():
    found = await _provider(lambda r: httpx.Response(200, json={"numFound": 0, "docs": []})).lookup_isbn("0")
    assert found is None
