"""
- HTTP call with clear fallback
Get one random integer from random.org to seed a game's tie-breaking. If anything
goes wrong (no internet, timeout, bad response), we fall back to a local secure
random generator so the game still works.
"""

import logging

import requests
from secrets import randbits

logger = logging.getLogger(__name__)

RANDOM_URL = "https://www.random.org/integers/"
SEED_MAX = 1_000_000_000  # random.org's upper limit for a single integer


def fetch_seed(enabled: bool = True, timeout_seconds: float = 3.0) -> int:
    if not enabled:
        return randbits(32)

    params = {
        "num": 1,          # one number is enough for a seed
        "min": 0,
        "max": SEED_MAX,
        "col": 1,
        "base": 10,
        "format": "plain", # plain text response
        "rnd": "new",      # always generate new numbers
    }

    try:
        response = requests.get(RANDOM_URL, params=params, timeout=timeout_seconds)
        response.raise_for_status()

        # The body looks like:
        #   48213977\n
        lines = [line.strip() for line in response.text.splitlines() if line.strip()]
        if len(lines) != 1:
            raise ValueError(f"random.org returned {len(lines)} values, expected 1.")

        seed = int(lines[0])
        if not 0 <= seed <= SEED_MAX:
            raise ValueError(f"random.org number {seed} out of range 0..{SEED_MAX}.")
        return seed

    except (requests.RequestException, ValueError) as exc:
        logger.warning("random.org seed unavailable (%s); using local secure random", exc)
        return randbits(32)
