# ABOUTME: Shared test fixtures for the weather page scraper test suite.
# ABOUTME: Provides HTML pages shaped like the real site and a routed mock HTTP client.

from unittest.mock import Mock

import httpx

from weather_pages.config import Settings
from weather_pages.deps import WeatherDeps

BASE_URL = "https://wx.test"
SEATTLE_KEY = "-122.33,47.61"
WEATHER_URL = f"{BASE_URL}/weather/{SEATTLE_KEY}"
HEALTH_URL = f"{BASE_URL}/health/{SEATTLE_KEY}?cm_ven=localwx_modaq"


def condition_rows(pairs: list[tuple[str, str]]) -> str:
    return "".join(f'<div class="row"><div>{label}</div><div>{value}</div></div>' for label, value in pairs)


DEFAULT_CONDITIONS = [
    ("Pressure", "<span>30.05</span> <span>in</span>"),
    ("Visibility", "<span>10</span> <span>miles</span>"),
    ("Clouds", "Mostly Cloudy 3500 ft"),
    ("Dew Point", "<span>47</span> <span>°F</span>"),
    ("Humidity", "<span>67</span> <span>%</span>"),
    ("Wind Direction", "NE°"),
    ("Rainfall", "<span>0</span> <span>in</span>"),
    ("Snow Depth", "<span>0</span> <span>in</span>"),
]


def weather_page(
    header: str = "Seattle Weather Conditions",
    conditions: str | None = None,
    temperature: str = "58",
) -> str:
    """Build a weather page with the element nesting the layout table expects."""
    if conditions is None:
        conditions = condition_rows(DEFAULT_CONDITIONS)
    return f"""<!DOCTYPE html>
<html><head><title>{header}</title></head>
<body>
<div id="inner-content">
  <div class="region-nav"></div>
  <div class="city-header-row">
    <lib-city-header><div class="heading"><div>
      <h1><span>{header}</span> <span class="favorite">Star</span></h1>
    </div></div></lib-city-header>
  </div>
  <div class="main-page">
    <div class="left-column"><div>
      <div><div>
        <lib-city-current-conditions><div>
          <div><p><span><strong> 3:53 PM PDT on October 18, 2026 </strong></span> <span>KWASEATT</span></p></div>
          <div><div><div>
            <div class="icon"></div>
            <div class="current-temp"><lib-display-unit><span><span>{temperature}</span><span>°F</span></span></lib-display-unit></div>
            <div class="feels-like">like 55°</div>
          </div></div></div>
          <div><div><div><p> Cloudy </p></div></div></div>
        </div></lib-city-current-conditions>
      </div></div>
      <div class="spacer"></div>
      <div><div><lib-city-today-forecast><div><div><div><div><div>
        <a href="/forecast">Today</a>
        <a href="/forecast/detail">Cloudy with showers developing later in the day. High 61F.</a>
      </div></div></div></div></div></lib-city-today-forecast></div></div>
    </div></div>
    <div class="right-column"><div><div><div>
      <lib-additional-conditions><lib-item-box><div>
        <div class="title">Additional Conditions</div>
        <div><div>{conditions}</div></div>
      </div></lib-item-box></lib-additional-conditions>
    </div></div></div></div>
  </div>
</div>
</body></html>"""


PLACEHOLDER_PAGE = """<!DOCTYPE html>
<html><head><title>Weather Conditions</title></head>
<body><div id="inner-content"><div class="city-header">
  <p>Location: , undefined</p>
</div></div></body></html>"""


def health_page(label: str = "Good", index: str = "23") -> str:
    return f"""<!DOCTYPE html>
<html><body>
<div id="airqualityindex_section"><div><div><div>
  <div><div>Air Quality Index</div><div><div class="dial"></div><div>{label}</div></div></div>
  <div><div>Details</div><div><div><div>AQI</div><div>{index}</div></div></div></div>
</div></div></div></div>
</body></html>"""


def make_response(url: str, text: str = "", status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code=status_code, text=text, request=httpx.Request("GET", url))


def routed_client(routes: dict) -> Mock:
    """Create a mock httpx.Client whose get() answers from a url -> response map.

    A route value may be an HTML string (served as 200), an httpx.Response, an
    exception instance to raise, or a list of those consumed in order.
    """
    mock = Mock(spec=httpx.Client)

    def get(url, **kwargs):
        if url not in routes:
            return make_response(url, status_code=404)
        answer = routes[url]
        if isinstance(answer, list):
            answer = answer.pop(0)
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, str):
            return make_response(url, answer)
        return answer

    mock.get.side_effect = get
    return mock


def make_deps(routes: dict) -> WeatherDeps:
    return WeatherDeps(http_client=routed_client(routes), settings=Settings(base_url=BASE_URL))

