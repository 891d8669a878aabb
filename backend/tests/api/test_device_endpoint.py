"""Pruebas del endpoint `/device`."""

from httpx import AsyncClient


async def test_device_endpoint_reports_tablet(async_client: AsyncClient) -> None:
    response = await async_client.get(
        "/device", headers={"User-Agent": "AmazonWebAppPlatform Silk/3.0"}
    )

    assert response.status_code == 200
    assert response.json() == {
        "kind": "tablet",
        "is_normal": False,
        "is_mobile": False,
        "is_tablet": True,
        "platform": "Kindle",
    }
    assert response.headers["x-device-kind"] == "tablet"


async def test_device_endpoint_uses_accept_header(async_client: AsyncClient) -> None:
    response = await async_client.get(
        "/device",
        headers={"User-Agent": "CustomAgent/1.0", "Accept": "application/vnd.wap.wml"},
    )

    payload = response.json()
    assert payload["kind"] == "mobile"
    assert payload["platform"] == "Unknown"


async def test_device_endpoint_defaults_to_normal(async_client: AsyncClient) -> None:
    response = await async_client.get("/device", headers={"User-Agent": ""})

    assert response.json()["is_normal"] is True
    assert response.json()["platform"] == "Unknown"
