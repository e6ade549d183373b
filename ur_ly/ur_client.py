"""Client for the UR vacancy search API."""

import logging

import httpx

from .config import DEFAULT_UR_API_URL
from .exceptions import ParseError, PollError
from .models import PropertyAvailability
from .utils import build_ur_api_payload

logger = logging.getLogger(__name__)

# The search API only answers requests that look like they come from ur-net.go.jp
UR_API_HEADERS = {
    'Content-Type': 'application/x-www-form-urlencoded; charset=UTF-8',
    'Accept': 'application/json, text/javascript, */*; q=0.01',
    'Origin': 'https://www.ur-net.go.jp',
    'Referer': 'https://www.ur-net.go.jp/',
    'Sec-Fetch-Dest': 'empty',
    'Sec-Fetch-Mode': 'cors',
    'Sec-Fetch-Site': 'same-site',
}


def fetch_property_availability(
    shisya: str,
    danchi: str,
    client: httpx.Client,
    api_url: str = DEFAULT_UR_API_URL,
) -> PropertyAvailability:
    """
    Query the UR search API for one property.

    Args:
        shisya: Branch code of the property.
        danchi: Estate code of the property.
        client: HTTP client used for the request.
        api_url: Search endpoint.

    Returns:
        The validated availability for the property.

    Raises:
        PollError: If the request fails or the API answers with a non-2xx status.
        ParseError: If the response body is not the expected JSON.
    """
    payload = build_ur_api_payload(shisya, danchi)

    try:
        response = client.post(api_url, content=payload, headers=UR_API_HEADERS)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise PollError(f"Request to UR API failed for {shisya}_{danchi}: {e}") from e

    if not response.is_success:
        raise PollError(
            f"UR API returned {response.status_code} for {shisya}_{danchi}"
        )

    try:
        data = response.json()
    except ValueError as e:
        raise ParseError(f"UR API returned invalid JSON for {shisya}_{danchi}: {e}") from e

    availability = PropertyAvailability.from_json(data)
    logger.debug(f"Property {shisya}_{danchi} has {availability.count} vacant room(s)")
    return availability
