from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_BUILD_DIR,
    DEFAULT_CANISTER_NAME,
    DEFAULT_CYCLES,
    DEFAULT_OWNER_PRINCIPAL,
    DEFAULT_WASM_PATH,
    LOCAL_HOST,
    MAINNET_HOST,
    MANAGEMENT_CANISTER_ID,
)
from .model import InstallMode, StagePolicy


class Settings(BaseSettings):
    IC_ENV: str = "ic"
    """Set to "local" to target a local replica instead of the public network"""

    NODE_ENV: str = "development"
    """The network root key is fetched unless this is set to production"""

    LOCAL_HOST: str = LOCAL_HOST
    MAINNET_HOST: str = MAINNET_HOST

    WASM_PATH: str = DEFAULT_WASM_PATH
    """Asset storage WASM module, relative to the working directory"""

    BUILD_DIR: str = DEFAULT_BUILD_DIR
    """Build output whose whole tree is uploaded"""

    CYCLES: int = DEFAULT_CYCLES
    """Cycles the new canister is funded with"""

    OWNER_PRINCIPAL: str = DEFAULT_OWNER_PRINCIPAL
    CANISTER_NAME: str = DEFAULT_CANISTER_NAME

    INSTALL_MODE: InstallMode = InstallMode.INSTALL

    INSTALL_FAILURE_POLICY: StagePolicy = StagePolicy.CONTINUE
    """Whether assets are still uploaded when the module could not be installed"""

    PROVISIONAL_EFFECTIVE_CANISTER_ID: str = MANAGEMENT_CANISTER_ID
    """Effective canister id used to route the provisional create call"""

    STRICT_EXIT: bool = False
    """Exit with a non-zero code when any stage failed"""

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        extra="ignore",
    )

    @property
    def host(self) -> str:
        return self.LOCAL_HOST if self.IC_ENV == "local" else self.MAINNET_HOST

    @property
    def fetch_root_key(self) -> bool:
        return self.NODE_ENV != "production"


settings = Settings()
