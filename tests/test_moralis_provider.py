import httpx
import pytest
from conftest import mock_client

from market_pulse.providers.wallet import MoralisProvider
from market_pulse.schemas import ZERO_ADDRESS

ADDRESS = "0x" + "ab" * 20
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


def _routes(native, tokens):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/balance"):
            return native
        if request.url.path.endswith("/erc20"):
            return tokens
        return httpx.Response(404)

    return handler


@pytest.mark.asyncio
async def test_wallet_lists_native_first(settings):
    native = httpx.Response(200, json={"balance": "2000000000000000000"})
    tokens = httpx.Response(200, json=[
        {"token_address": USDC, "name": "USD Coin", "symbol": "USDC",
         "decimals": "6", "balance": "1500000", "thumbnail": "https://img.test/usdc.png",
         "possible_spam": False},
    ])
    provider = MoralisProvider(settings=settings, client=mock_client(_routes(native, tokens)))

    wallet = await provider.get_wallet(ADDRESS)

    assert wallet.address == ADDRESS
    assert wallet.native_balance_raw == "2000000000000000000"
    assert wallet.native_balance_formatted == 2.0
    eth, usdc = wallet.assets
    assert eth.contract_address == ZERO_ADDRESS
    assert eth.symbol == "ETH"
    assert eth.balance == "2.0000"
    assert usdc.decimals == 6
    assert usdc.balance == "1.5000"
    assert usdc.logo == "https://img.test/usdc.png"
    assert wallet.total_net_worth_usd == 0


@pytest.mark.asyncio
async def test_wallet_requests_mainnet_without_spam(settings):
    seen = {}

    def handler(request):
        seen[request.url.path] = dict(request.url.params)
        if request.url.path.endswith("/balance"):
            return httpx.Response(200, json={"balance": "0"})
        return httpx.Response(200, json=[])

    provider = MoralisProvider(api_key="k", settings=settings, client=mock_client(handler))
    wallet = await provider.get_wallet(ADDRESS)

    assert seen[f"/{ADDRESS}/balance"] == {"chain": "0x1"}
    assert seen[f"/{ADDRESS}/erc20"] == {"chain": "0x1", "exclude_spam": "true"}
    assert [a.symbol for a in wallet.assets] == ["ETH"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "native, tokens",
    [
        (httpx.Response(401, json={"message": "bad key"}), httpx.Response(200, json=[])),
        (httpx.Response(200, json={"balance": "1"}), httpx.Response(500)),
        (httpx.Response(200, json={"balance": "1"}), httpx.Response(200, json={"oops": 1})),
    ],
)
async def test_wallet_failure_is_none(settings, native, tokens):
    provider = MoralisProvider(settings=settings, client=mock_client(_routes(native, tokens)))
    assert await provider.get_wallet(ADDRESS) is None


def test_api_key_header(settings):
    provider = MoralisProvider(api_key="secret", settings=settings)
    assert provider._client.headers["X-API-Key"] == "secret"


@pytest.mark.asyncio
async def test_token_without_decimals_and_huge_balance(settings):
    raw = "1" + "0" * 30
    native = httpx.Response(200, json={"balance": raw})
    tokens = httpx.Response(200, json=[
        {"token_address": USDC, "symbol": "BIG", "decimals": 0, "balance": raw},
        {"token_address": USDC, "symbol": "NODEC", "balance": raw},
    ])
    provider = MoralisProvider(settings=settings, client=mock_client(_routes(native, tokens)))

    wallet = await provider.get_wallet(ADDRESS)

    eth, big, nodec = wallet.assets
    assert eth.balance == "1000000000000.0000"
    assert big.balance == raw + ".0000"
    assert nodec.balance == raw + ".0000"
    assert wallet.native_balance_formatted == 1e12
