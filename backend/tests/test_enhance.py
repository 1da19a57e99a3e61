import json

import httpx
import pytest

from inkwell.api.v1.ai import get_enhancer
from inkwell.main import app
from inkwell.modules.enhance import (
    ContentEnhancer,
    EnhanceInputError,
    EnhanceStatus,
    EnhanceType,
    PROMPTS,
)
from inkwell.utils.markup import strip_markup


def make_enhancer(handler, api_key="sk-test"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ContentEnhancer(
        api_key=api_key,
        base_url="https://llm.example.com/v1",
        model="gpt-4o-mini",
        client=client,
    )


def completion(content):
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


class Recorder:
    """记录发往上游的请求"""

    def __init__(self, response):
        self.response = response
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return self.response


def test_strip_markup():
    assert strip_markup("<p>Hello <strong>world</strong></p>") == "Hello world"
    assert strip_markup("") == ""


def test_prepare_rejects_bad_input():
    enhancer = make_enhancer(Recorder(completion("unused")))

    with pytest.raises(EnhanceInputError, match="Content and type are required"):
        enhancer.prepare("", "improve")
    with pytest.raises(EnhanceInputError, match="Please add more content"):
        enhancer.prepare("<p><strong>tiny</strong></p>", "improve")
    with pytest.raises(EnhanceInputError, match="Invalid enhancement type"):
        enhancer.prepare("<p>long enough content here</p>", "translate")


async def test_enhance_sends_plain_text_with_mode_prompt():
    recorder = Recorder(completion("<p>Better text.</p>"))
    enhancer = make_enhancer(recorder)

    text, mode = enhancer.prepare("<p>this is my <em>rough</em> draft</p>", "summarize")
    result = await enhancer.enhance(text, mode)

    assert result.status == EnhanceStatus.OK
    assert result.content == "<p>Better text.</p>"

    [request] = recorder.requests
    assert str(request.url) == "https://llm.example.com/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    body = json.loads(request.content)
    assert body["messages"][0]["content"] == PROMPTS[EnhanceType.SUMMARIZE]
    assert body["messages"][1]["content"] == "this is my rough draft"
    assert body["max_tokens"] == 2000
    assert body["temperature"] == 0.7


@pytest.mark.parametrize("status_code, expected", [
    (429, EnhanceStatus.RATE_LIMITED),
    (401, EnhanceStatus.UNAUTHORIZED),
    (500, EnhanceStatus.FAILED),
])
async def test_provider_errors_map_to_result(status_code, expected):
    enhancer = make_enhancer(Recorder(httpx.Response(status_code, json={"error": {"message": "nope"}})))

    result = await enhancer.enhance("some plain text", EnhanceType.IMPROVE)
    assert result.status == expected
    assert result.content is None


async def test_network_error_is_generic_failure():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    result = await make_enhancer(handler).enhance("some plain text", EnhanceType.EXPAND)
    assert result.status == EnhanceStatus.FAILED


async def test_empty_completion_is_failure():
    result = await make_enhancer(Recorder(completion(""))).enhance("some plain text", EnhanceType.EXPAND)
    assert result.status == EnhanceStatus.FAILED


async def test_missing_key_is_unavailable_without_calling_provider():
    recorder = Recorder(completion("unused"))
    result = await make_enhancer(recorder, api_key=None).enhance("some plain text", EnhanceType.IMPROVE)

    assert result.status == EnhanceStatus.UNAVAILABLE
    assert recorder.requests == []


# ==================== 路由 ====================

@pytest.fixture
def use_enhancer():
    def install(enhancer):
        app.dependency_overrides[get_enhancer] = lambda: enhancer
    yield install
    app.dependency_overrides.pop(get_enhancer, None)


async def test_enhance_endpoint_success(client, alice, use_enhancer):
    use_enhancer(make_enhancer(Recorder(completion("<h2>Polished</h2>"))))

    response = await client.post(
        "/api/ai/enhance",
        json={"content": "<p>please polish this note</p>", "type": "professional"},
        headers=alice,
    )
    assert response.status_code == 200
    assert response.json() == {"enhanced": "<h2>Polished</h2>"}


async def test_short_content_rejected_before_provider_call(client, alice, use_enhancer):
    recorder = Recorder(completion("unused"))
    use_enhancer(make_enhancer(recorder))

    response = await client.post(
        "/api/ai/enhance", json={"content": "<p>hi <b>there</b></p>", "type": "improve"}, headers=alice
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Please add more content before enhancing"}
    assert recorder.requests == []


async def test_enhance_requires_session(client, use_enhancer):
    recorder = Recorder(completion("unused"))
    use_enhancer(make_enhancer(recorder))

    response = await client.post(
        "/api/ai/enhance", json={"content": "<p>long enough content</p>", "type": "improve"}
    )
    assert response.status_code == 401
    assert recorder.requests == []


@pytest.mark.parametrize("provider_status, status_code, message", [
    (429, 429, "Rate limit exceeded. Please try again later."),
    (401, 401, "Invalid API key. Please check your configuration."),
    (502, 500, "Failed to enhance content. Please try again."),
])
async def test_enhance_endpoint_error_mapping(client, alice, use_enhancer, provider_status, status_code, message):
    use_enhancer(make_enhancer(Recorder(httpx.Response(provider_status, text="upstream"))))

    response = await client.post(
        "/api/ai/enhance", json={"content": "<p>long enough content</p>", "type": "expand"}, headers=alice
    )
    assert response.status_code == status_code
    assert response.json() == {"error": message}


async def test_enhance_endpoint_unconfigured(client, alice, use_enhancer):
    use_enhancer(make_enhancer(Recorder(completion("unused")), api_key=None))

    response = await client.post(
        "/api/ai/enhance", json={"content": "<p>long enough content</p>", "type": "improve"}, headers=alice
    )
    assert response.status_code == 503
    assert "not configured" in response.json()["error"]


@pytest.mark.parametrize("body", [
    {"content": 123, "type": "improve"},
    {"type": "improve", "content": ["<p>not a string</p>"]},
])
async def test_enhance_rejects_malformed_body_with_error_field(client, alice, use_enhancer, body):
    recorder = Recorder(completion("unused"))
    use_enhancer(make_enhancer(recorder))

    response = await client.post("/api/ai/enhance", json=body, headers=alice)
    assert response.status_code == 400
    assert set(response.json()) == {"error"}
    assert recorder.requests == []


async def test_enhance_rejects_non_json_body(client, alice, use_enhancer):
    use_enhancer(make_enhancer(Recorder(completion("unused"))))

    response = await client.post(
        "/api/ai/enhance",
        content=b"not json",
        headers={**alice, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "error" in response.json()
    assert "detail" not in response.json()
