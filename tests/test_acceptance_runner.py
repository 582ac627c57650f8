import httpx
import pytest

from acceptance import AcceptanceRunner


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url="http://test", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_error_status_is_a_failure_not_an_empty_result() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "Query 1.3 failed", "message": "boom"})

    runner = AcceptanceRunner()
    async with _client(handler) as client:
        await runner.check_hours(client)
        await runner.check_days(client)

    assert runner.passed == 0
    assert runner.failed == 2


@pytest.mark.asyncio
async def test_sorted_days_pass() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[
            {"fecha": "2024-01-01T00:00:00Z", "total_Viajes": 3},
            {"fecha": "2024-01-02T00:00:00Z", "total_Viajes": 1},
        ])

    runner = AcceptanceRunner()
    async with _client(handler) as client:
        await runner.check_days(client)

    assert (runner.passed, runner.failed) == (1, 0)
