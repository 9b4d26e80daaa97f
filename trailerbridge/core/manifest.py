"""Addon manifest construction."""

from trailerbridge import __version__
from trailerbridge.config.settings import ManifestConfig
from trailerbridge.models.meta import Manifest

__all__ = ["build_manifest"]


def build_manifest(config: ManifestConfig | None = None) -> Manifest:
    """Build the addon manifest served at ``/manifest.json``.

    Args:
        config (ManifestConfig | None): Deployment overrides for the addon's ID,
            name and description.

    Returns:
        Manifest: The manifest, versioned with the package version.
    """
    config = config or ManifestConfig()
    version = __version__ if __version__ != "unknown" else "1.0.0"
    return Manifest(
        id=config.id,
        version=version,
        name=config.name,
        description=config.description,
    )
