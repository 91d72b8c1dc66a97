import httpx
import structlog
from typing import Any, Dict, Optional

log = structlog.get_logger(__name__)

class GeminiBaseClient:
    """Cliente HTTP base asíncrono para la API REST de Gemini (sin reintentos)."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout_seconds: float,
        service_name: str,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.service_name = service_name
        self.client = http_client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout_seconds,
        )
        self._headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": api_key,
        }

    async def close(self):
        """Cierra el cliente HTTP."""
        await self.client.aclose()
        log.info(f"{self.service_name} client closed.")

    async def _post(self, endpoint: str, json: Dict[str, Any]) -> Dict[str, Any]:
        """Realiza un POST y devuelve el cuerpo JSON de la respuesta."""
        log.debug(f"Requesting {self.service_name}", endpoint=endpoint)
        try:
            response = await self.client.post(endpoint, json=json, headers=self._headers)
            response.raise_for_status()
            log.debug(f"Received response from {self.service_name}", status_code=response.status_code)
            return response.json()
        except httpx.HTTPStatusError as e:
            log.error(f"HTTP error from {self.service_name}", status_code=e.response.status_code, detail=e.response.text)
            raise
        except (httpx.TimeoutException, httpx.NetworkError) as e:
            log.error(f"Network error when calling {self.service_name}", error=str(e), error_type=type(e).__name__)
            raise
