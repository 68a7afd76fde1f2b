"""Safe3 E2E Client.

One-shot client that pairs with a wallet via QR code, reads the connected
address, signs a message and outputs a structured JSON result for the e2e
test framework to parse.

The relay transport is loaded from SAFE3_TRANSPORT_FACTORY, given as
``package.module:callable``.
"""

import asyncio
import importlib
import json
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

# Get environment variables
project_id = os.getenv("SAFE3_PROJECT_ID", "")
transport_factory_path = os.getenv("SAFE3_TRANSPORT_FACTORY", "")
chain_id = int(os.getenv("SAFE3_CHAIN_ID", "1"))
rpc_url = os.getenv("SAFE3_RPC_URL") or None
relay_url = os.getenv("SAFE3_RELAY_URL") or None
message = os.getenv("SAFE3_MESSAGE", "Hello from Safe3")

if not project_id or not transport_factory_path:
    result = {
        "success": False,
        "error": "Missing required environment variables: SAFE3_PROJECT_ID, SAFE3_TRANSPORT_FACTORY",
    }
    print(json.dumps(result))
    sys.exit(1)

logging.basicConfig(level=os.getenv("SAFE3_LOG_LEVEL", "INFO").upper(), stream=sys.stderr)


def load_transport_factory(path: str):
    """Resolve a ``module:callable`` path to the transport factory."""
    module_name, _, attr = path.partition(":")
    if not attr:
        raise ValueError(f"Transport factory must look like 'module:callable', got {path!r}")
    return getattr(importlib.import_module(module_name), attr)


def build_options():
    """Client options from the environment, with the QR code written to stderr."""
    from safe3 import ClientOptions
    from safe3.qr import render_terminal_qr

    return ClientOptions(
        project_id=project_id,
        chain_id=chain_id,
        rpc_url=rpc_url,
        relay_url=relay_url,
        qr_renderer=lambda uri: render_terminal_qr(uri, sys.stderr),
    )


async def main() -> dict:
    """Pair, sign and disconnect. Returns the e2e result dict."""
    from safe3 import create_safe3_client

    options = build_options()
    client = create_safe3_client(
        options, load_transport_factory(transport_factory_path), client="web3"
    )
    client.session.on("qr_ready", lambda uri: print(f"Pairing URI: {uri}", file=sys.stderr))

    try:
        session = await client.connect()
        address = await client.get_address()
        signature = await client.sign_message(message)
        return {
            "success": True,
            "topic": session.topic,
            "address": address,
            "chain": client.chain.name,
            "signature": signature,
        }
    except Exception as e:
        return {
            "success": False,
            "error": str(e),
        }
    finally:
        await client.close()


if __name__ == "__main__":
    e2e_result = asyncio.run(main())
    print(json.dumps(e2e_result))
    sys.exit(0 if e2e_result.get("success") else 1)
