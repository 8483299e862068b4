import requests

from krishi.utils import weather
from krishi.utils.weather import get_weather, weather_icon


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def json(self):
        return self.payload


CURRENT = {
    'main': {'temp': 31.27, 'humidity': 48},
    'wind': {'speed': 5},
    'weather': [{'main': 'Clouds', 'description': 'broken clouds'}],
    'clouds': {'all': 75},
}

FORECAST = {
    'list': [
        {'dt_txt': '2024-06-01 12:00:00', 'main': {'temp': 30.04}, 'weather': [{'main': 'Clear'}]},
        {'dt_txt': '2024-06-01 15:00:00', 'main': {'temp': 32.0}, 'weather': [{'main': 'Clear'}]},
        {'dt_txt': '2024-06-02 12:00:00', 'main': {'temp': 27.5}, 'weather': [{'main': 'Rain'}],
         'rain': {'3h': 4}},
    ],
}


def fake_get(url, params=None, timeout=None):
    if url.endswith('/forecast'):
        return FakeResponse(FORECAST)
    return FakeResponse(CURRENT)


def test_mock_weather_without_api_key(monkeypatch):
    monkeypatch.delenv('WEATHER_API_KEY', raising=False)
    data = get_weather('Ludhiana, IN')
    assert data['is_mock'] is True
    assert data['temperature'] == 28
    assert data['humidity'] == 65
    assert data['rain_chance'] == 30
    assert data['condition'] == 'Partly Cloudy'
    assert data['location'] == 'Ludhiana, IN'
    assert data['forecast']


def test_default_location(app):
    with app.app_context():
        assert get_weather()['location'] == app.config['DEFAULT_LOCATION']


def test_live_weather(monkeypatch):
    monkeypatch.setenv('WEATHER_API_KEY', 'test-key')
    monkeypatch.setattr(weather.requests, 'get', fake_get)

    data = get_weather('Ludhiana, IN')
    assert data['is_mock'] is False
    assert data['temperature'] == 31.3
    assert data['humidity'] == 48
    assert data['wind_speed'] == 18.0
    assert data['rain_chance'] == 75
    assert data['condition'] == 'Clouds'
    assert data['description'] == 'Broken Clouds'
    assert data['icon'] == weather_icon('Clouds')
    assert [day['date'] for day in data['forecast']] == ['2024-06-01', '2024-06-02']
    assert data['forecast'][1]['rain_chance'] == 40


def test_falls_back_to_mock_on_network_error(monkeypatch):
    monkeypatch.setenv('WEATHER_API_KEY', 'test-key')

    def boom(*args, **kwargs):
        raise requests.ConnectionError('offline')

    monkeypatch.setattr(weather.requests, 'get', boom)
    assert get_weather('Ludhiana, IN')['is_mock'] is True


def test_falls_back_to_mock_on_bad_status(monkeypatch):
    monkeypatch.setenv('WEATHER_API_KEY', 'bad-key')
    monkeypatch.setattr(weather.requests, 'get', lambda *a, **kw: FakeResponse({'cod': 401}, 401))
    assert get_weather('Ludhiana, IN')['is_mock'] is True


def test_falls_back_to_mock_on_unexpected_payload(monkeypatch):
    monkeypatch.setenv('WEATHER_API_KEY', 'test-key')
    monkeypatch.setattr(weather.requests, 'get', lambda *a, **kw: FakeResponse({'main': {}}))
    assert get_weather('Ludhiana, IN')['is_mock'] is True


def test_unknown_condition_icon():
    assert weather_icon('Tornado') == '❓'


def test_weather_api_and_page(client, login_as):
    login_as('farmer')
    data = client.get('/api/weather').get_json()
    assert data['location'] == 'Ludhiana, Punjab'
    assert data['is_mock'] is True

    response = client.get('/farmer/weather?location=Patiala')
    assert response.status_code == 200
    assert b'Patiala' in response.data
