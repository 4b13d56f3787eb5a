# services/weather_service.py
import aiohttp
import os
from dataclasses import dataclass
from typing import Optional

from services.goal_calculator import round_half_up

MAX_ADJUSTMENT_ML = 1500
MIN_ADJUSTMENT_ML = -500


@dataclass(frozen=True)
class WeatherReading:
    humidity: float
    temperature: float
    fallback: bool = False


FALLBACK_READING = WeatherReading(humidity=0, temperature=0, fallback=True)


def calculate_weather_adjustment(humidity: float, temperature: float) -> int:
    """
    Signed ml delta applied to the day's base goal.

    Hot days add 50ml per degree above 20°C, cold days remove 20ml per degree
    below 10°C, humidity adds 4ml per point above 50%, and hot + humid days get
    an extra heat stress bonus. Capped to [-500, 1500].
    """
    adjustment = 0.0

    if temperature > 20:
        adjustment += (temperature - 20) * 50
    elif temperature < 10:
        adjustment -= (10 - temperature) * 20

    if humidity > 50:
        adjustment += (humidity - 50) * 4

    if temperature > 28 and humidity > 60:
        heat_stress_factor = (temperature - 28) * (humidity - 60) / 100
        adjustment += heat_stress_factor * 10

    return min(MAX_ADJUSTMENT_ML, max(MIN_ADJUSTMENT_ML, round_half_up(adjustment)))


class WeatherService:
    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None):
        self.api_key = api_key or os.getenv("TOMORROW_IO_API_KEY")
        self.base_url = base_url or os.getenv("WEATHER_API_URL", "https://api.tomorrow.io/v4/weather/realtime")
        if not self.api_key:
            print("⚠️ TOMORROW_IO_API_KEY not set - weather adjustments will be zero")
        print("✅ Weather service initialized")

    async def get_current_weather(self, latitude: float, longitude: float) -> WeatherReading:
        """Realtime humidity/temperature for a location, or the zero fallback on any failure"""
        try:
            if not self.api_key:
                raise ValueError("Weather API key is missing")

            params = {
                "location": f"{latitude},{longitude}",
                "apikey": self.api_key,
            }
            headers = {
                "accept": "application/json",
                "accept-encoding": "deflate, gzip, br",
            }

            async with aiohttp.ClientSession() as session:
                async with session.get(self.base_url, params=params, headers=headers) as response:
                    if response.status != 200:
                        raise ValueError(f"Weather API returned status {response.status}")
                    data = await response.json()

            values = data["data"]["values"]
            reading = WeatherReading(
                humidity=float(values["humidity"]),
                temperature=float(values["temperature"]),
            )
            print(f"🌤️ Weather at ({latitude}, {longitude}): {reading.temperature}°C, {reading.humidity}% humidity")
            return reading

        except Exception as e:
            print(f"❌ Failed to fetch weather data: {e}")
            return FALLBACK_READING

    async def get_adjustment(self, latitude: float, longitude: float) -> int:
        reading = await self.get_current_weather(latitude, longitude)
        if reading.fallback:
            return 0
        return calculate_weather_adjustment(reading.humidity, reading.temperature)
