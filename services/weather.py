"""
Weather service for retrieving current conditions and forecast.
Uses the Open-Meteo forecast API, which needs no API key.
"""
import httpx
from config import Config
from utils.logger import app_logger
from utils.http_client import HTTPClientManager


class WeatherService:
    """Service for fetching weather data."""

    @staticmethod
    async def get_weather(latitude: float, longitude: float) -> dict:
        """
        Get current weather and forecast for a coordinate.

        Args:
            latitude: Latitude of the location
            longitude: Longitude of the location

        Returns:
            Open-Meteo forecast payload, or {"error": ...} when the lookup fails
        """
        try:
            client = HTTPClientManager.get_weather_client()
            response = await client.get(
                Config.OPEN_METEO_URL,
                params={
                    "latitude": latitude,
                    "longitude": longitude,
                    "current": "temperature_2m",
                    "hourly": "temperature_2m",
                    "daily": "sunrise,sunset",
                    "timezone": "auto"
                },
                timeout=Config.WEATHER_TIMEOUT
            )
        except httpx.HTTPError as e:
            app_logger.error(f"Weather API request failed: {e}")
            return {"error": f"Weather service unavailable: {e}"}

        if response.status_code != 200:
            app_logger.warning(f"Weather API error (status {response.status_code})")
            return {"error": f"Weather service returned status {response.status_code}"}

        app_logger.info(f"Weather data retrieved for ({latitude}, {longitude})")
        return response.json()
