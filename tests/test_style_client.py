"""
Style Client Tests

Tests for generating style directives with a mocked text model.
"""
import json

import httpx
import pytest

from app.services.style_client import StyleClient, StyleGenerationError, parse_styles


def text_response(text: str) -> dict:
    return {'candidates': [{'content': {'parts': [{'text': text}]}}]}


class TestParseStyles:

    def test_plain_json_array(self):
        assert parse_styles('["calm narrator", "excited host"]') == ['calm narrator', 'excited host']

    def test_fenced_json(self):
        raw = '```json\n["calm narrator", "  ", " excited host "]\n```'
        assert parse_styles(raw) == ['calm narrator', 'excited host']

    @pytest.mark.parametrize('raw', ['not json', '{"style": "x"}', '[]', '["", "  "]'])
    def test_unusable_output(self, raw):
        with pytest.raises(StyleGenerationError):
            parse_styles(raw)


class TestGenerateStyles:

    @pytest.mark.asyncio
    async def test_generate(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=text_response('["a", "b"]'))

        client = StyleClient('test-key', transport=httpx.MockTransport(handler))

        assert await client.generate_styles('radio voices') == ['a', 'b']
        body = json.loads(requests[0].content)
        assert body['contents'][0]['parts'][0]['text'] == 'radio voices'
        assert body['generationConfig']['responseModalities'] == ['TEXT']

    @pytest.mark.asyncio
    async def test_blank_description(self):
        client = StyleClient('test-key', transport=httpx.MockTransport(lambda r: httpx.Response(200)))

        with pytest.raises(StyleGenerationError, match='description is required'):
            await client.generate_styles('   ')

    @pytest.mark.asyncio
    async def test_api_error(self):
        client = StyleClient('test-key', transport=httpx.MockTransport(lambda r: httpx.Response(503, text='busy')))

        with pytest.raises(StyleGenerationError, match='503'):
            await client.generate_styles('radio voices')

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError('connection refused')

        client = StyleClient('test-key', transport=httpx.MockTransport(handler))

        with pytest.raises(StyleGenerationError, match='Network error'):
            await client.generate_styles('radio voices')


class TestRefineStyle:

    @pytest.mark.asyncio
    async def test_refine_sends_history_then_description(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=text_response('  Warmer late-night host.  '))

        client = StyleClient('test-key', transport=httpx.MockTransport(handler))
        history = [
            {'role': 'user', 'content': 'late-night radio host'},
            {'role': 'model', 'content': 'Late-night radio host, mid-40s.'},
        ]

        style = await client.refine_style('make it warmer', history)

        assert style == 'Warmer late-night host.'
        body = json.loads(requests[0].content)
        assert [turn['role'] for turn in body['contents']] == ['user', 'model', 'user']
        assert body['contents'][1]['parts'][0]['text'] == 'Late-night radio host, mid-40s.'
        assert body['contents'][-1]['parts'][0]['text'] == 'make it warmer'
        assert requests[0].url.path.endswith('/models/gemini-2.5-flash:generateContent')

    @pytest.mark.asyncio
    async def test_refine_without_history(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=text_response('Calm narrator.'))

        client = StyleClient('test-key', transport=httpx.MockTransport(handler))

        assert await client.refine_style('calm narrator') == 'Calm narrator.'
        assert len(json.loads(requests[0].content)['contents']) == 1

    @pytest.mark.asyncio
    async def test_refine_empty_answer(self):
        client = StyleClient('test-key', transport=httpx.MockTransport(
            lambda r: httpx.Response(200, json={'candidates': []})
        ))

        with pytest.raises(StyleGenerationError, match='No style generated'):
            await client.refine_style('calm narrator')

    @pytest.mark.asyncio
    async def test_refine_rejects_unknown_role(self):
        calls = []
        client = StyleClient('test-key', transport=httpx.MockTransport(
            lambda r: calls.append(r) or httpx.Response(200)
        ))

        with pytest.raises(StyleGenerationError, match='invalid conversation role'):
            await client.refine_style('calm', [{'role': 'system', 'content': 'x'}])
        assert calls == []

    @pytest.mark.asyncio
    async def test_refine_blank_description(self):
        client = StyleClient('test-key', transport=httpx.MockTransport(lambda r: httpx.Response(200)))

        with pytest.raises(StyleGenerationError, match='description is required'):
            await client.refine_style('  ')
