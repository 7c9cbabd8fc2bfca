# nosec B101


import asyncio
import logging
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import httpx
import pytest

from domain.exceptions.currency import NetworkError, ParseError, ProviderError
from domain.models.currency import RateSnapshot
from infrastructure.providers.openexchange import OpenExchangeProvider

LATEST_RESPONSE = {
    'disclaimer': 'Usage subject to terms: https://openexchangerates.org/terms',
    'license': 'https://openexchangerates.org/license',
    'timestamp': 1762336800,
    'base': 'USD',
    'rates': {'USD': 1, 'EUR': 0.85, 'GBP': 0.76, 'JPY': 110.5},
}


class RecordingHandler:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response | Exception):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def make_provider(handler, clock=None, timeout=timedelta(seconds=10)) -> OpenExchangeProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    kwargs = {'clock': clock} if clock else {}
    return OpenExchangeProvider(api_key='test_app_id', client=client, timeout=timeout, **kwargs)


# ============================================================================
# TEST: fetch() - Success Scenarios
# ============================================================================

@pytest.mark.asyncio
async def test_fetch_success_returns_snapshot(clock):
    handler = RecordingHandler(httpx.Response(200, json=LATEST_RESPONSE))
    provider = make_provider(handler, clock=clock)

    snapshot = await provider.fetch('USD')

    assert isinstance(snapshot, RateSnapshot)
    assert snapshot.base_code == 'USD'
    assert snapshot.rates['EUR'] == Decimal('0.85')
    assert isinstance(snapshot.rates['EUR'], Decimal)
    assert snapshot.rates['USD'] == 1
    assert snapshot.fetched_at == clock.now
    assert snapshot.published_at == datetime.fromtimestamp(1762336800, UTC)


@pytest.mark.asyncio
async def test_fetch_issues_exactly_one_request_with_credentials():
    handler = RecordingHandler(httpx.Response(200, json=LATEST_RESPONSE))
    provider = make_provider(handler)

    await provider.fetch('USD')

    assert len(handler.requests) == 1
    request = handler.requests[0]
    assert request.method == 'GET'
    assert str(request.url).startswith('https://openexchangerates.org/api/latest.json')
    assert request.url.params['app_id'] == 'test_app_id'
    assert request.url.params['base'] == 'USD'


@pytest.mark.asyncio
async def test_fetch_adds_missing_base_rate():
    body = dict(LATEST_RESPONSE, rates={'EUR': 0.85})
    provider = make_provider(RecordingHandler(httpx.Response(200, json=body)))

    snapshot = await provider.fetch('USD')

    assert snapshot.rates['USD'] == 1


@pytest.mark.asyncio
async def test_fetch_handles_very_small_and_large_rates():
    body = dict(LATEST_RESPONSE, rates={'USD': 1, 'BTC': 0.00001234, 'VND': 25345.5})
    provider = make_provider(RecordingHandler(httpx.Response(200, json=body)))

    snapshot = await provider.fetch('USD')

    assert snapshot.rates['BTC'] == Decimal('0.00001234')
    assert snapshot.rates['VND'] == Decimal('25345.5')


# ============================================================================
# TEST: fetch() - Provider errors
# ============================================================================

@pytest.mark.asyncio
async def test_fetch_invalid_app_id_is_provider_error():
    body = {'error': True, 'status': 401, 'message': 'invalid_app_id',
            'description': 'Invalid App ID provided.'}
    provider = make_provider(RecordingHandler(httpx.Response(401, json=body)))

    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch('USD')

    assert exc_info.value.status_code == 401
    assert '401' in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_rate_limit_is_provider_error():
    provider = make_provider(RecordingHandler(httpx.Response(429, text='Too Many Requests')))

    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch('USD')

    assert exc_info.value.status_code == 429


@pytest.mark.asyncio
async def test_fetch_error_body_with_success_status_is_provider_error():
    body = {'error': True, 'status': 403, 'message': 'not_allowed',
            'description': 'Changing the API base currency is available for Developer plans.'}
    provider = make_provider(RecordingHandler(httpx.Response(200, json=body)))

    with pytest.raises(ProviderError, match='Developer plans'):
        await provider.fetch('EUR')


# ============================================================================
# TEST: fetch() - Network errors
# ============================================================================

@pytest.mark.asyncio
async def test_fetch_connection_error_is_network_error():
    provider = make_provider(RecordingHandler(httpx.ConnectError('Connection refused')))

    with pytest.raises(NetworkError) as exc_info:
        await provider.fetch('USD')

    assert 'request failed' in str(exc_info.value).lower()


@pytest.mark.asyncio
async def test_fetch_transport_timeout_is_network_error():
    provider = make_provider(RecordingHandler(httpx.ReadTimeout('Request timed out')))

    with pytest.raises(NetworkError):
        await provider.fetch('USD')


@pytest.mark.asyncio
async def test_fetch_hung_provider_is_bounded_by_timeout():
    async def hang(request):
        await asyncio.sleep(5)
        return httpx.Response(200, json=LATEST_RESPONSE)

    provider = make_provider(hang, timeout=timedelta(milliseconds=50))

    with pytest.raises(NetworkError, match='timed out'):
        await provider.fetch('USD')


# ============================================================================
# TEST: fetch() - Parse errors
# ============================================================================

@pytest.mark.asyncio
async def test_fetch_wrong_content_type_is_parse_error():
    response = httpx.Response(200, text='<html>maintenance</html>', headers={'content-type': 'text/html'})
    provider = make_provider(RecordingHandler(response))

    with pytest.raises(ParseError, match='content type'):
        await provider.fetch('USD')


@pytest.mark.asyncio
async def test_fetch_undecodable_body_is_parse_error():
    response = httpx.Response(200, content=b'{not json', headers={'content-type': 'application/json'})
    provider = make_provider(RecordingHandler(response))

    with pytest.raises(ParseError, match='parsing error'):
        await provider.fetch('USD')


@pytest.mark.asyncio
@pytest.mark.parametrize('body', [
    [1, 2, 3],
    {'base': 'USD', 'timestamp': 1762336800},
    {'base': 'USD', 'timestamp': 1762336800, 'rates': {}},
    {'base': 'USD', 'timestamp': 1762336800, 'rates': []},
    {'base': 'USD', 'timestamp': '1762336800', 'rates': {'EUR': 0.85}},
    {'base': 'USD', 'rates': {'EUR': 0.85}},
    {'base': 'EUR', 'timestamp': 1762336800, 'rates': {'EUR': 1, 'USD': 1.1}},
    {'timestamp': 1762336800, 'rates': {'EUR': 0.85}},
])
async def test_fetch_malformed_shape_is_parse_error(body):
    provider = make_provider(RecordingHandler(httpx.Response(200, json=body)))

    with pytest.raises(ParseError):
        await provider.fetch('USD')


@pytest.mark.asyncio
@pytest.mark.parametrize('bad_value', ['0.85', None, True, 0, -0.5, {'rate': 1}])
async def test_fetch_invalid_rate_value_is_parse_error(bad_value):
    body = dict(LATEST_RESPONSE, rates={'USD': 1, 'EUR': bad_value})
    provider = make_provider(RecordingHandler(httpx.Response(200, json=body)))

    with pytest.raises(ParseError):
        await provider.fetch('USD')


@pytest.mark.asyncio
async def test_fetch_base_rate_other_than_one_is_parse_error():
    body = dict(LATEST_RESPONSE, rates={'USD': 1.01, 'EUR': 0.85})
    provider = make_provider(RecordingHandler(httpx.Response(200, json=body)))

    with pytest.raises(ParseError):
        await provider.fetch('USD')


@pytest.mark.asyncio
async def test_close_closes_own_http_client():
    provider = OpenExchangeProvider(api_key='test_app_id')

    await provider.close()

    assert provider._client.is_closed


@pytest.mark.asyncio
async def test_close_leaves_injected_http_client_open():
    client = httpx.AsyncClient(transport=httpx.MockTransport(RecordingHandler(httpx.Response(200))))
    provider = OpenExchangeProvider(api_key='test_app_id', client=client)

    await provider.close()

    assert not client.is_closed
    await client.aclose()


def test_provider_name():
    provider = OpenExchangeProvider(api_key='test_app_id', client=httpx.AsyncClient(transport=httpx.MockTransport(RecordingHandler(httpx.Response(200)))))

    assert provider.name == 'openexchange'


@pytest.mark.asyncio
async def test_fetch_non_finite_rate_is_parse_error():
    content = b'{"base": "USD", "timestamp": 1762336800, "rates": {"USD": 1, "EUR": NaN}}'
    response = httpx.Response(200, content=content, headers={'content-type': 'application/json'})
    provider = make_provider(RecordingHandler(response))

    with pytest.raises(ParseError, match='positive and finite'):
        await provider.fetch('USD')


@pytest.mark.asyncio
async def test_fetch_oversized_integer_rate_is_parse_error():
    content = b'{"base": "USD", "timestamp": 1762336800, "rates": {"USD": 1, "EUR": ' + b'9' * 400 + b'}}'
    response = httpx.Response(200, content=content, headers={'content-type': 'application/json'})
    provider = make_provider(RecordingHandler(response))

    with pytest.raises(ParseError, match='positive and finite'):
        await provider.fetch('USD')


@pytest.mark.asyncio
async def test_fetch_oversized_integer_rate_logs_failed_call(caplog):
    content = b'{"base": "USD", "timestamp": 1762336800, "rates": {"USD": 1, "EUR": ' + b'9' * 400 + b'}}'
    response = httpx.Response(200, content=content, headers={'content-type': 'application/json'})
    provider = make_provider(RecordingHandler(response))

    with caplog.at_level(logging.DEBUG, logger='currency.events'):
        with pytest.raises(ParseError):
            await provider.fetch('USD')

    assert caplog.records[-1].levelno == logging.WARNING
    assert 'FAILED' in caplog.records[-1].getMessage()


@pytest.mark.asyncio
async def test_fetch_lowercase_codes_are_normalized():
    body = dict(LATEST_RESPONSE, rates={'usd': 1, 'eur': 0.85})
    provider = make_provider(RecordingHandler(httpx.Response(200, json=body)))

    snapshot = await provider.fetch('USD')

    assert snapshot.codes == ['EUR', 'USD']


@pytest.mark.asyncio
async def test_fetch_codes_colliding_after_normalization_is_parse_error():
    body = dict(LATEST_RESPONSE, rates={'USD': 1, 'EUR': 0.85, 'eur': 0.86})
    provider = make_provider(RecordingHandler(httpx.Response(200, json=body)))

    with pytest.raises(ParseError, match='duplicate'):
        await provider.fetch('USD')
