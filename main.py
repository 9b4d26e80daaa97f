"""TrailerBridge Main Application."""

import asyncio
import sys

import uvicorn
from pydantic import ValidationError

from trailerbridge import TRAILERBRIDGE_HEADER, log
from trailerbridge.config.settings import get_config
from trailerbridge.exceptions import ConfigError
from trailerbridge.web.app import create_app


def validate_configuration() -> bool:
    """Validate the application configuration before starting the server.

    Returns:
        bool: True if configuration is valid, False otherwise
    """
    try:
        config = get_config()
        config.require_api_key()
        log.info(f"TrailerBridge: {config!s}")
        return True
    except ConfigError as e:
        log.error(f"TrailerBridge: {e}")
        return False
    except ValidationError as e:
        log.error(f"TrailerBridge: Configuration validation failed: {e}")
        return False
    except (OSError, PermissionError) as e:
        log.error(f"TrailerBridge: File system error during configuration: {e}")
        return False


async def run() -> int:
    """Serve the addon until the server is stopped.

    Returns:
        int: Exit code (0 for success, 1 for error)
    """
    log.info("\n" + TRAILERBRIDGE_HEADER)

    if not validate_configuration():
        return 1

    config = get_config()
    try:
        app = create_app()
        uv_config = uvicorn.Config(
            app,
            host=config.web.host,
            port=config.web.port,
            log_config=None,
            loop="asyncio",
            proxy_headers=True,
            forwarded_allow_ips="*",
        )
        server = uvicorn.Server(uv_config)

        log.success(
            "TrailerBridge: Addon running at "
            f"\033[92mhttp://{config.web.host}:{config.web.port}/manifest.json "
            "(ctrl+c to stop)\033[0m"
        )
        await server.serve()
    except asyncio.CancelledError:
        log.info("TrailerBridge: Application cancelled")
        return 0
    except OSError as e:
        log.error(f"TrailerBridge: Could not start the web server: {e}")
        return 1
    except Exception as e:
        log.error(f"TrailerBridge: Unexpected application error: {e}", exc_info=True)
        return 1

    log.success("TrailerBridge: Application shutdown complete")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        argv (list[str] | None): Command-line arguments (unused).

    Returns:
        int: Exit code (0 for success, 1 for error)
    """
    try:
        return asyncio.run(run())
    except KeyboardInterrupt:
        log.info("TrailerBridge: Application interrupted")
        return 0
    except Exception as e:
        log.error(f"TrailerBridge: Fatal error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
