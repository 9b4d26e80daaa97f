from .utils.logging import Logger, get_logger
from .utils.terminal import supports_utf8
from .utils.version import get_docker_status, get_git_hash, get_pyproject_version

__author__ = "TrailerBridge contributors"
__license__ = "MIT"
__version__ = get_pyproject_version()
__git_hash__ = get_git_hash()


if supports_utf8():
    TRAILERBRIDGE_HEADER = f"""
╔═══════════════════════════════════════════════════════════════════════════════╗
║                         T R A I L E R B R I D G E                             ║
╠═══════════════════════════════════════════════════════════════════════════════╣
║                                                                               ║
║  Version: {__version__:<68}║
║  Git Hash: {__git_hash__:<67}║
║  Docker: {"Yes" if get_docker_status() else "No":<69}║
║  License: {__license__:<68}║
║  Trailers: TMDB videos (YouTube)                                              ║
║                                                                               ║
╚═══════════════════════════════════════════════════════════════════════════════╝
    """.strip()
else:
    TRAILERBRIDGE_HEADER = f"""
+-------------------------------------------------------------------------------+
|                         T R A I L E R B R I D G E                             |
+-------------------------------------------------------------------------------+
|                                                                               |
|  Version: {__version__:<68}|
|  Git Hash: {__git_hash__:<67}|
|  Docker: {"Yes" if get_docker_status() else "No":<69}|
|  License: {__license__:<68}|
|  Trailers: TMDB videos (YouTube)                                              |
|                                                                               |
+-------------------------------------------------------------------------------+
    """.strip()

log: Logger = get_logger()
