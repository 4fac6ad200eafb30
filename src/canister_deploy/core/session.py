import logging

import cbor2
import httpx
from ic.agent import Agent
from ic.client import Client
from ic.identity import Identity

from .conf import Settings, settings as default_settings
from .constants import STATUS_ENDPOINT

logging.basicConfig(level=default_settings.LOG_LEVEL.upper())

logger = logging.getLogger(__name__)


def fetch_root_key(host: str) -> bytes:
    """
    Fetch the root public key of the network at `host`.

    Only local and test networks should be trusted this way, they sign with
    a self-generated root key.
    """
    response = httpx.get(host.rstrip("/") + STATUS_ENDPOINT)
    response.raise_for_status()
    status = cbor2.loads(response.content)
    if isinstance(status, cbor2.CBORTag):
        status = status.value
    root_key = status.get("root_key") if isinstance(status, dict) else None
    if not root_key:
        raise ValueError(f"No root key in status response of {host}")
    return bytes(root_key)


def create_agent(settings: Settings = default_settings) -> Agent:
    identity = Identity(type="ed25519")
    logger.info(f"Using ephemeral identity {identity.sender().to_str()}")
    client = Client(url=settings.host)
    agent = Agent(identity, client)

    if settings.fetch_root_key:
        logger.info(f"Fetching root key from {settings.host}")
        # ic-py keeps the key but does not verify certificates against it
        agent.root_key = fetch_root_key(settings.host)
    return agent
