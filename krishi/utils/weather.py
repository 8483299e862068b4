# Weather Utility Functions
import logging
import os
from datetime import datetime, timedelta

import requests
from flask import current_app, has_app_context

logger = logging.getLogger(__name__)

DEFAULT_WEATHER_URL = 'https://api.openweathermap.org/data/2.5/weather'
DEFAULT_FORECAST_URL = 'https://api.openweathermap.org/data/2.5/forecast'

WEATHER_ICONS = {
    'Clear': '☀️',
    'Sunny': '☀️',
    'Partly Cloudy': '⛅',
    'Clouds': '☁️',
    'Cloudy': '☁️',
    'Overcast': '☁️',
    'Rain': '🌧️',
    'Drizzle': '🌧️',
    'Thunderstorm': '⛈️',
    'Snow': '❄️',
    'Fog': '🌫️',
    'Mist': '🌫️',
    'Haze': '🌫️',
}


def _config(key, default=None):
    if has_app_context():
        value = current_app.config.get(key)
        if value:
            return value
    return os.environ.get(key, default)


def weather_icon(condition):
    return WEATHER_ICONS.get(condition, '❓')


def get_weather(location=None):
    """
    Fetch weather data for a location using OpenWeatherMap API.

    Args:
        location: Location string (e.g., "Ludhiana, IN")

    Returns:
        dict: {
            'temperature': float (Celsius),
            'humidity': int (percentage),
            'rain_chance': int (percentage),
            'wind_speed': float (km/h),
            'condition': str,
            'description': str,
            'icon': str,
            'location': str,
            'forecast': list of forecast data,
            'is_mock': bool,
            'last_updated': str
        }
    """
    location = location or _config('DEFAULT_LOCATION', 'Punjab, India')
    api_key = _config('WEATHER_API_KEY')

    # If no API key, return mock data
    if not api_key:
        return _get_mock_weather(location)

    params = {
        'q': location,
        'appid': api_key,
        'units': 'metric'  # Get temperature in Celsius
    }

    try:
        response = requests.get(_config('WEATHER_API_URL', DEFAULT_WEATHER_URL), params=params, timeout=5)
    except requests.RequestException:
        logger.warning('Weather lookup failed for %s, using mock data', location, exc_info=True)
        return _get_mock_weather(location)

    if response.status_code != 200:
        logger.warning('Weather API returned %s for %s', response.status_code, location)
        return _get_mock_weather(location)

    try:
        data = response.json()
        temperature = data['main']['temp']
        humidity = data['main']['humidity']
        wind_speed = data.get('wind', {}).get('speed', 0) * 3.6  # Convert m/s to km/h
        condition = data['weather'][0]['main']
        description = data['weather'][0]['description']
    except (ValueError, KeyError, IndexError):
        logger.warning('Unexpected weather payload for %s', location, exc_info=True)
        return _get_mock_weather(location)

    # Rain chance from rain volume, else estimated from cloud coverage
    rain_chance = 0.0
    if 'rain' in data:
        rain_chance = min(1.0, data['rain'].get('1h', 0) / 10.0)
    elif 'clouds' in data:
        cloud_coverage = data['clouds'].get('all', 0)
        rain_chance = cloud_coverage / 100.0 if cloud_coverage > 50 else 0.0

    return {
        'temperature': round(temperature, 1),
        'humidity': humidity,
        'rain_chance': round(rain_chance * 100),
        'wind_speed': round(wind_speed, 1),
        'condition': condition,
        'description': description.title(),
        'icon': weather_icon(condition),
        'location': location,
        'forecast': _get_forecast(location, api_key),
        'is_mock': False,
        'last_updated': datetime.now().strftime('%Y-%m-%d %H:%M:%S')
    }


def _get_forecast(location, api_key):
    """Get 5-day weather forecast, one entry per day"""
    params = {
        'q': location,
        'appid': api_key,
        'units': 'metric'
    }
    try:
        response = requests.get(_config('WEATHER_FORECAST_URL', DEFAULT_FORECAST_URL), params=params, timeout=5)
        if response.status_code != 200:
            return []
        data = response.json()
    except (requests.RequestException, ValueError):
        logger.warning('Forecast lookup failed for %s', location, exc_info=True)
        return []

    forecast = []
    seen_dates = set()
    for item in data.get('list', [])[:40]:  # 5 days * 8 intervals
        date_str = item['dt_txt'].split(' ')[0]
        if date_str in seen_dates:
            continue
        seen_dates.add(date_str)
        condition = item['weather'][0]['main']
        forecast.append({
            'date': date_str,
            'temperature': round(item['main']['temp'], 1),
            'condition': condition,
            'icon': weather_icon(condition),
            'rain_chance': round(min(1.0, item.get('rain', {}).get('3h', 0) / 10.0) * 100),
        })
        if len(forecast) >= 5:
            break
    return forecast


def _get_mock_weather(location):
    """Return mock weather data when API is not available"""
    today = datetime.now()
    return {
        'temperature': 28,
        'humidity': 65,
        'rain_chance': 30,
        'wind_speed': 12.5,
        'condition': 'Partly Cloudy',
        'description': 'Partly cloudy',
        'icon': weather_icon('Partly Cloudy'),
        'location': location,
        'forecast': [
            {'date': today.strftime('%Y-%m-%d'), 'temperature': 28, 'condition': 'Partly Cloudy',
             'icon': weather_icon('Partly Cloudy'), 'rain_chance': 30},
            {'date': (today + timedelta(days=1)).strftime('%Y-%m-%d'), 'temperature': 29, 'condition': 'Clear',
             'icon': weather_icon('Clear'), 'rain_chance': 10},
        ],
        'is_mock': True,
        'last_updated': today.strftime('%Y-%m-%d %H:%M:%S')
    }
