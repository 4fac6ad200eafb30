# Deployment script for the frontend asset canister
# Path: src/canister_deploy/deployer.py

import logging
import sys

from .core.conf import Settings, settings as default_settings
from .core.deployment import deploy_frontend
from .core.model import DeploymentResult, StageStatus
from .core.session import create_agent
from .core.version import VERSION_STRING

logger = logging.getLogger(__name__)


def create_frontend_canister(settings: Settings = default_settings) -> DeploymentResult:
    logger.info(f"canister-deploy {VERSION_STRING}, targeting {settings.host}")
    try:
        agent = create_agent(settings)
        result = deploy_frontend(agent, settings)
    except Exception as e:
        logger.exception(f"Error creating canister: {e}")
        return DeploymentResult(host=settings.host)

    for stage in result.stages:
        if stage.status == StageStatus.SUCCEEDED:
            logger.info(f"{stage.stage.value}: {stage.status.value}")
        else:
            logger.warning(f"{stage.stage.value}: {stage.status.value} ({stage.error})")
    return result


def main(settings: Settings = default_settings) -> int:
    result = create_frontend_canister(settings)
    if settings.STRICT_EXIT and not result.succeeded:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
