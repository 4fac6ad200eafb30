MANAGEMENT_CANISTER_ID = "aaaaa-aa"

LOCAL_HOST = "http://127.0.0.1:4943"
MAINNET_HOST = "https://ic0.app"
STATUS_ENDPOINT = "/api/v2/status"

DEFAULT_CYCLES = 1_000_000_000_000
DEFAULT_WASM_PATH = "assetstorage.wasm"
DEFAULT_BUILD_DIR = "./dist"

DEFAULT_OWNER_PRINCIPAL = (
    "6ydm4-srext-xsaic-y3v2x-cticp-5n6pf-2meh7-j43r6-rghg7-pt5nd-bqe"
)
DEFAULT_CANISTER_NAME = "assetstorage.wasm"

CONTENT_ENCODING_IDENTITY = "identity"
DEFAULT_MIME_TYPE = "application/octet-stream"
# Checked in order, first suffix match wins
MIME_TYPES = (
    (".html", "text/html"),
    (".css", "text/css"),
    (".js", "application/javascript"),
    (".svg", "image/svg+xml"),
    (".png", "image/png"),
    (".jpg", "image/jpeg"),
    (".jpeg", "image/jpeg"),
)

LOCAL_CANISTER_URL = "http://{canister_id}.localhost:4943/"
GATEWAY_CANISTER_URL = "{host}/?canisterId={canister_id}"
