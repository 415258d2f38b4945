"""
HTTP helpers for pulling CIP content off GitHub.

Usage:
    python -m cipdocs.fetch <url>
"""

import argparse
import requests

from cipdocs import constants


def new_session() -> requests.Session:
    session = requests.Session()
    session.headers["User-Agent"] = constants.USER_AGENT
    return session


def get(url: str, session: requests.Session | None = None, timeout: float = constants.TIMEOUT) -> requests.Response:
    """GET a URL, raising on 4xx/5xx"""
    if session is None:
        response = requests.get(url, timeout=timeout, headers={"User-Agent": constants.USER_AGENT})
    else:
        response = session.get(url, timeout=timeout)
    response.raise_for_status()
    return response


def get_text(url: str, session: requests.Session | None = None, timeout: float = constants.TIMEOUT) -> str:
    """Fetch a markdown document. raw.githubusercontent.com is always UTF-8, a BOM is dropped."""
    return get(url, session, timeout).content.decode("utf-8-sig")


def get_bytes(url: str, session: requests.Session | None = None, timeout: float = constants.TIMEOUT) -> bytes:
    return get(url, session, timeout).content


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("url")
    args = ap.parse_args()
    print(get_text(args.url))
