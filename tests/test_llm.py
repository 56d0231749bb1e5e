"""Unit tests for the llm module."""
import httpx
import pytest

from personachat.conversation import Turn
from personachat.llm import (
    EmptyResponseError,
    GeminiProvider,
    GenerateContentRequest,
    GenerateContentResponse,
    LLMProvider,
    MalformedResponseError,
    TransportError,
    create_llm_provider,
)

from .conftest import candidate_body


class TestWireModels:
    """Tests for request and response models."""

    def test_request_payload_shape(self):
        turns = [Turn.user("be cool"), Turn.model("Hey."), Turn.user("hi")]
        payload = GenerateContentRequest.from_turns(turns).to_payload()

        assert payload == {
            "contents": [
                {"role": "user", "parts": [{"text": "be cool"}]},
                {"role": "model", "parts": [{"text": "Hey."}]},
                {"role": "user", "parts": [{"text": "hi"}]},
            ]
        }

    def test_request_generation_config(self):
        payload = GenerateContentRequest.from_turns(
            [Turn.user("hi")], temperature=0.4, max_tokens=64
        ).to_payload()

        assert payload["generationConfig"] == {"temperature": 0.4, "maxOutputTokens": 64}

    def test_first_text(self):
        response = GenerateContentResponse.model_validate(candidate_body("Hey."))
        assert response.first_text() == "Hey."
        assert response.usage_metadata.to_usage() == {
            "prompt_tokens": 120,
            "completion_tokens": 4,
            "total_tokens": 124,
        }

    @pytest.mark.parametrize("body", [
        {"candidates": []},
        {"candidates": [{}]},
        {"candidates": [{"content": {}}]},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{}]}}]},
    ])
    def test_first_text_missing(self, body):
        assert GenerateContentResponse.model_validate(body).first_text() is None

    def test_unknown_fields_ignored(self):
        body = candidate_body("Hey.")
        body["promptFeedback"] = {"safetyRatings": []}
        body["candidates"][0]["safetyRatings"] = []
        assert GenerateContentResponse.model_validate(body).first_text() == "Hey."


class TestGeminiProvider:
    """Tests for GeminiProvider against a mock transport."""

    def test_provider_is_abstract(self):
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore

    @pytest.mark.asyncio
    async def test_request_url_and_body(self, make_provider):
        provider, handler = make_provider(lambda request: httpx.Response(200, json=candidate_body("Hey.")))
        turns = (Turn.user("be cool"), Turn.model("Hey Buddy."), Turn.user("hello"))

        async with provider:
            response = await provider.generate_content(turns)

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url.host == "generativelanguage.googleapis.com"
        assert request.url.path == "/v1beta/models/gemini-2.0-flash:generateContent"
        assert request.url.params["key"] == "test-key"
        assert handler.last_payload()["contents"][2] == {"role": "user", "parts": [{"text": "hello"}]}

        assert response.content == "Hey."
        assert response.model == "gemini-2.0-flash"
        assert response.finish_reason == "STOP"
        assert response.usage["total_tokens"] == 124

    @pytest.mark.asyncio
    async def test_model_override(self, make_provider):
        provider, handler = make_provider(
            lambda request: httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "ok"}]}}]}),
            model="gemini-2.5-flash",
        )
        async with provider:
            default = await provider.generate_content([Turn.user("a")])
            override = await provider.generate_content([Turn.user("a")], model="gemini-2.5-pro")

        assert handler.requests[0].url.path.endswith("/models/gemini-2.5-flash:generateContent")
        assert handler.requests[1].url.path.endswith("/models/gemini-2.5-pro:generateContent")
        assert default.model == "gemini-2.5-flash"
        assert override.model == "gemini-2.5-pro"

    @pytest.mark.asyncio
    async def test_missing_text_gives_empty_content(self, make_provider):
        provider, _ = make_provider(lambda request: httpx.Response(200, json=candidate_body(None)))
        async with provider:
            response = await provider.generate_content([Turn.user("hi")])
        assert response.content == ""

    @pytest.mark.asyncio
    async def test_json_error_body(self, make_provider):
        error = {"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}}
        provider, _ = make_provider(lambda request: httpx.Response(400, json=error))

        async with provider:
            with pytest.raises(TransportError) as exc_info:
                await provider.generate_content([Turn.user("hi")])

        assert exc_info.value.status_code == 400
        assert exc_info.value.reason == "Bad Request"
        assert exc_info.value.body == error
        assert "status 400" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_text_error_body(self, make_provider):
        provider, _ = make_provider(lambda request: httpx.Response(502, text="<html>Bad Gateway</html>"))

        async with provider:
            with pytest.raises(TransportError) as exc_info:
                await provider.generate_content([Turn.user("hi")])

        assert exc_info.value.status_code == 502
        assert exc_info.value.body == "<html>Bad Gateway</html>"

    @pytest.mark.asyncio
    async def test_no_candidates(self, make_provider):
        provider, _ = make_provider(lambda request: httpx.Response(200, json={"candidates": []}))
        async with provider:
            with pytest.raises(EmptyResponseError) as exc_info:
                await provider.generate_content([Turn.user("hi")])
        assert exc_info.value.details["body"] == {"candidates": []}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(200, text="not json"),
        httpx.Response(200, json=["a", "list"]),
        httpx.Response(200, json={"candidates": "nope"}),
    ])
    async def test_malformed_body(self, make_provider, response):
        provider, _ = make_provider(lambda request: response)
        async with provider:
            with pytest.raises(MalformedResponseError):
                await provider.generate_content([Turn.user("hi")])

    @pytest.mark.asyncio
    async def test_network_error_propagates(self, make_provider):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider, _ = make_provider(refuse)
        async with provider:
            with pytest.raises(httpx.ConnectError):
                await provider.generate_content([Turn.user("hi")])

    @pytest.mark.asyncio
    @pytest.mark.integration
    async def test_generate_content_real_api(self, api_keys):
        """Integration test: one turn against the real API."""
        if not api_keys["gemini"]:
            pytest.skip("GEMINI_API_KEY not set")

        async with GeminiProvider(api_key=api_keys["gemini"]) as provider:
            response = await provider.generate_content([Turn.user("Reply with the single word: ready")])

        assert response.content


class TestLLMFactory:
    """Tests for the LLM factory function."""

    def test_create_gemini_provider(self):
        provider = create_llm_provider("Gemini", api_key="test-key", model="gemini-2.5-flash")
        assert isinstance(provider, GeminiProvider)
        assert provider.model == "gemini-2.5-flash"

    def test_create_provider_unknown_type(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("unknown", api_key="test-key")

    def test_create_provider_missing_api_key(self):
        with pytest.raises(TypeError, match="requires 'api_key'"):
            create_llm_provider("gemini")
