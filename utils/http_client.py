"""
HTTP client utilities with connection pooling.
Provides reusable clients for the model host and for outbound API calls made by tools.
"""
import httpx
import ollama
from config import Config


class HTTPClientManager:
    """Manages the shared model and httpx clients."""

    _model_client: ollama.AsyncClient | None = None
    _weather_client: httpx.AsyncClient | None = None

    @classmethod
    def get_model_client(cls) -> ollama.AsyncClient:
        """Get or create the shared client for the model host."""
        if cls._model_client is None:
            cls._model_client = ollama.AsyncClient(host=Config.OLLAMA_HOST)
        return cls._model_client

    @classmethod
    def get_weather_client(cls) -> httpx.AsyncClient:
        """
        Get or create the shared httpx client for weather lookups.

        Returns:
            Configured httpx.AsyncClient with keep-alive pooling
        """
        if cls._weather_client is None:
            limits = httpx.Limits(
                max_connections=10,
                max_keepalive_connections=5,
                keepalive_expiry=30.0
            )

            cls._weather_client = httpx.AsyncClient(
                timeout=Config.WEATHER_TIMEOUT,
                follow_redirects=True,
                max_redirects=Config.MAX_REDIRECTS,
                limits=limits,
                http2=True
            )

        return cls._weather_client

    @classmethod
    async def close_all(cls) -> None:
        """Close managed clients and clean up connections."""
        if cls._model_client is not None:
            await cls._model_client.close()
            cls._model_client = None

        if cls._weather_client is not None:
            await cls._weather_client.aclose()
            cls._weather_client = None
