"""
ego public-ip  ──  print the public IPv4 / IPv6 address
"""
import requests

from ..utils.logging import spinner

NAME = "public-ip"
DESCRIPTION = "Prints the public IPv4 and IPv6 address."
SYNTAX = "[options]"
EXAMPLES = ["ego public-ip"]

SERVICES = {
    "IPv4": "https://ipv4.icanhazip.com",
    "IPv6": "https://ipv6.icanhazip.com",
}
TIMEOUT = 10


def add_arguments(parser):
    pass


def query_ip(url: str, session=None) -> str:
    http = session or requests
    resp = http.get(url, timeout=TIMEOUT)
    resp.raise_for_status()
    address = resp.text.strip()
    if not address:
        raise ValueError("empty answer")
    return address


def execute(ctx):
    with requests.Session() as session:
        for family, url in SERVICES.items():
            with spinner(f"Querying {family} from 'icanhazip.com' service ...") as sp:
                try:
                    sp.text = f"{family}: {query_ip(url, session)}"
                except (requests.RequestException, ValueError) as e:
                    sp.fail(f"No {family.lower()} address found. (Error: {e})")
